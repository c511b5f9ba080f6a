# SPDX-License-Identifier: Apache-2.0
#
# The OpenSearch Contributors require contributions made to
# this file be licensed under the Apache-2.0 license or a
# compatible open source license.
# Modifications Copyright OpenSearch Contributors. See
# GitHub history for details.

"""
Registry scope holding the components created during application startup.

A scope is created once by the host application, optionally seeded with instances the host already
owns. Every builder goes through ``get_or_create`` which guarantees that a slot is built at most once and
never when the host supplied an instance for it.
"""
import logging
from enum import Enum
from typing import Any, Callable, Dict, Optional

from dbbootstrap import exceptions


class Lifetime(Enum):
    """How long an instance created for a slot lives"""
    SINGLETON = "singleton"
    PROTOTYPE = "prototype"


class RegistryScope:
    def __init__(self, external: Optional[Dict[str, Any]] = None):
        """
        :param external: Instances supplied by the host application, keyed by slot name. Slots listed here
                         are never built by this library.
        """
        self.logger = logging.getLogger(__name__)
        self._external = dict(external or {})
        # capability table, fixed before any builder runs
        self._present_externally = frozenset(slot for slot, instance in self._external.items() if instance is not None)
        self._instances: Dict[str, Any] = {}

    def is_external(self, slot: str) -> bool:
        return slot in self._present_externally

    def contains(self, slot: str) -> bool:
        return self.is_external(slot) or slot in self._instances

    def get(self, slot: str) -> Optional[Any]:
        """
        :return: The external or previously registered instance for ``slot`` or ``None``.
        """
        if self.is_external(slot):
            return self._external[slot]
        return self._instances.get(slot)

    def register(self, slot: str, instance: Any) -> None:
        if self.contains(slot):
            raise exceptions.ConfigError("An instance for slot [{}] is already registered.".format(slot))
        self.logger.debug("Registering [%s] for slot [%s].", type(instance).__name__, slot)
        self._instances[slot] = instance

    def get_or_create(self, slot: str, builder: Callable[[], Any], lifetime: Lifetime = Lifetime.SINGLETON) -> Any:
        """
        Looks up the instance for ``slot`` and only calls ``builder`` if there is none.

        :param slot: Name of the slot.
        :param builder: Zero-argument callable creating the instance. Errors it raises propagate and nothing
                        gets registered.
        :param lifetime: ``Lifetime.PROTOTYPE`` builds a new instance on every request unless the host supplied one.
        :return: The instance for ``slot``.
        """
        if self.is_external(slot):
            self.logger.debug("Using externally supplied instance for slot [%s].", slot)
            return self._external[slot]
        if lifetime == Lifetime.PROTOTYPE:
            return builder()
        if slot not in self._instances:
            self.logger.debug("Building instance for slot [%s].", slot)
            self.register(slot, builder())
        return self._instances[slot]
