# SPDX-License-Identifier: Apache-2.0
#
# The OpenSearch Contributors require contributions made to
# this file be licensed under the Apache-2.0 license or a
# compatible open source license.
# Modifications Copyright OpenSearch Contributors. See
# GitHub history for details.

import importlib
import inspect
import logging
import pkgutil
import sys
from abc import ABC, abstractmethod
from typing import Callable, FrozenSet, Iterable, Set

from dbbootstrap import exceptions


class EntityScanner(ABC):
    """Discovers the persistent entity types of the host application"""

    @abstractmethod
    def scan(self) -> Set[type]:
        """
        :return: All types the host application wants to persist.
        :raises EntityScanError: If a type cannot be resolved.
        """


class StaticEntityScanner(EntityScanner):
    """Returns an explicitly configured list of entity types"""

    def __init__(self, entity_types: Iterable[type]):
        self.entity_types = list(entity_types)

    def scan(self) -> Set[type]:
        for entity_type in self.entity_types:
            if not inspect.isclass(entity_type):
                raise exceptions.EntityScanError("Cannot resolve entity type [{}]: not a class.".format(entity_type))
        return set(self.entity_types)


class PackageEntityScanner(EntityScanner):
    """
    Imports every module below the given packages and keeps the classes defined there that carry the
    persistence marker. What counts as marked is decided by the host application via ``marker``.
    """

    def __init__(self, packages: Iterable[str], marker: Callable[[type], bool]):
        self.packages = list(packages)
        self.marker = marker
        self.logger = logging.getLogger(__name__)

    def scan(self) -> Set[type]:
        entity_types = set()
        for module in self._modules():
            for _, member in inspect.getmembers(module, inspect.isclass):
                # ignore imported classes, they are picked up in their defining module
                if member.__module__ == module.__name__ and self.marker(member):
                    entity_types.add(member)
        self.logger.debug("Found %d persistent entity types in %s.", len(entity_types), self.packages)
        return entity_types

    def _modules(self):
        for package_name in self.packages:
            package = self._import(package_name)
            yield package
            if hasattr(package, "__path__"):
                for module_info in pkgutil.walk_packages(package.__path__, prefix=package.__name__ + ".",
                                                         onerror=self._on_walk_error):
                    yield self._import(module_info.name)

    @staticmethod
    def _import(module_name):
        # any error raised while executing the module means its types cannot be resolved
        try:
            return importlib.import_module(module_name)
        except Exception as e:
            raise exceptions.EntityScanError("Cannot resolve types of module [{}]: {}".format(module_name, e), e)

    @staticmethod
    def _on_walk_error(module_name):
        cause = sys.exc_info()[1]
        raise exceptions.EntityScanError("Cannot resolve types of package [{}]: {}".format(module_name, cause), cause)


class DocumentDbMappingContext:
    """Holds the persistent entity types. The entity set cannot change once the context is created."""

    def __init__(self, initial_entity_set: Iterable[type] = ()):
        self._initial_entity_set: FrozenSet[type] = frozenset(initial_entity_set)

    @property
    def initial_entity_set(self) -> FrozenSet[type]:
        return self._initial_entity_set

    def has_persistent_entity(self, entity_type: type) -> bool:
        return entity_type in self._initial_entity_set

    def __repr__(self):
        return "DocumentDbMappingContext(entities={})".format(sorted(t.__qualname__ for t in self._initial_entity_set))


class MappingDocumentDbConverter:
    """Converts between documents and entities of a shared mapping context"""

    def __init__(self, mapping_context: DocumentDbMappingContext):
        if mapping_context is None:
            raise ValueError("mapping_context must not be None")
        self._mapping_context = mapping_context

    @property
    def mapping_context(self) -> DocumentDbMappingContext:
        return self._mapping_context


def build_mapping_context(entity_scanner: EntityScanner = None) -> DocumentDbMappingContext:
    """
    Creates the mapping context from the entity types found by ``entity_scanner``.

    Without a scanner the context starts without entity types. Scan failures propagate, a partially
    populated context is never returned.
    """
    if entity_scanner is None:
        return DocumentDbMappingContext()
    return DocumentDbMappingContext(entity_scanner.scan())
