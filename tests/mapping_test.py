# SPDX-License-Identifier: Apache-2.0
#
# The OpenSearch Contributors require contributions made to
# this file be licensed under the Apache-2.0 license or a
# compatible open source license.
# Modifications Copyright OpenSearch Contributors. See
# GitHub history for details.

import textwrap
import uuid

import pytest

from dbbootstrap import exceptions
from dbbootstrap.mapping import (DocumentDbMappingContext, MappingDocumentDbConverter, PackageEntityScanner,
                                 StaticEntityScanner, build_mapping_context)


def is_persistent(cls):
    return vars(cls).get("__persistent__", False)


@pytest.fixture
def entity_package(tmp_path, monkeypatch):
    """
    Creates an importable package with persistent types in a module and in a sub-package.
    """
    package_name = "entities_{}".format(uuid.uuid4().hex)
    root = tmp_path / package_name
    (root / "sub").mkdir(parents=True)
    (root / "__init__.py").write_text("")
    (root / "models.py").write_text(textwrap.dedent("""
        class Book:
            __persistent__ = True

        class Helper:
            pass
    """))
    (root / "sub" / "__init__.py").write_text("")
    (root / "sub" / "people.py").write_text(textwrap.dedent("""
        from {}.models import Book

        class Author:
            __persistent__ = True
    """.format(package_name)))
    monkeypatch.syspath_prepend(str(tmp_path))
    return package_name, root


class TestPackageEntityScanner:
    def test_finds_marked_types_in_all_modules(self, entity_package):
        package_name, _ = entity_package

        entity_types = PackageEntityScanner([package_name], is_persistent).scan()

        assert sorted(t.__name__ for t in entity_types) == ["Author", "Book"]

    def test_unresolvable_module_is_fatal(self, entity_package):
        package_name, root = entity_package
        (root / "broken.py").write_text("import module_that_does_not_exist_anywhere\n")

        with pytest.raises(exceptions.EntityScanError, match="broken"):
            PackageEntityScanner([package_name], is_persistent).scan()

    @pytest.mark.parametrize("source", ["class Broken(Undefined):\n    pass\n", "class Broken(:\n"])
    def test_module_failing_to_execute_is_fatal(self, entity_package, source):
        package_name, root = entity_package
        (root / "broken.py").write_text(source)

        with pytest.raises(exceptions.EntityScanError, match="broken") as ctx:
            PackageEntityScanner([package_name], is_persistent).scan()
        assert isinstance(ctx.value.cause, (NameError, SyntaxError))

    def test_unknown_package_is_fatal(self):
        with pytest.raises(exceptions.EntityScanError):
            PackageEntityScanner(["package_that_does_not_exist_anywhere"], is_persistent).scan()


class TestStaticEntityScanner:
    def test_returns_configured_types(self):
        class Order:
            pass

        assert StaticEntityScanner([Order, Order]).scan() == {Order}

    def test_rejects_non_types(self):
        with pytest.raises(exceptions.EntityScanError, match="not a class"):
            StaticEntityScanner(["Order"]).scan()


class TestBuildMappingContext:
    def test_initializes_context_with_scanned_types(self):
        class Order:
            pass

        mapping_context = build_mapping_context(StaticEntityScanner([Order]))

        assert mapping_context.initial_entity_set == frozenset([Order])
        assert mapping_context.has_persistent_entity(Order)

    def test_empty_context_without_scanner(self):
        assert build_mapping_context().initial_entity_set == frozenset()

    def test_scan_failure_propagates(self, entity_package):
        package_name, root = entity_package
        (root / "broken.py").write_text("import module_that_does_not_exist_anywhere\n")

        with pytest.raises(exceptions.EntityScanError):
            build_mapping_context(PackageEntityScanner([package_name], is_persistent))

    def test_entity_set_cannot_be_modified(self):
        mapping_context = DocumentDbMappingContext([int])

        with pytest.raises(AttributeError):
            mapping_context.initial_entity_set.add(str)


def test_converter_shares_mapping_context():
    mapping_context = DocumentDbMappingContext()

    assert MappingDocumentDbConverter(mapping_context).mapping_context is mapping_context


def test_converter_requires_mapping_context():
    with pytest.raises(ValueError):
        MappingDocumentDbConverter(None)
