# SPDX-License-Identifier: Apache-2.0
#
# The OpenSearch Contributors require contributions made to
# this file be licensed under the Apache-2.0 license or a
# compatible open source license.
# Modifications Copyright OpenSearch Contributors. See
# GitHub history for details.

"""
Wires the document client and the data access components built on top of it.

Usage:
    from dbbootstrap.autoconfigure import DocumentDbAutoConfiguration
    from dbbootstrap.config import load_properties

    configuration = DocumentDbAutoConfiguration(load_properties("documentdb.yml"))
    template = configuration.configure()

Components the host application already owns are passed in through a ``RegistryScope``; they are
used as-is and the corresponding builder never runs:

    scope = RegistryScope(external={DOCUMENT_DB_FACTORY: my_factory})
    template = DocumentDbAutoConfiguration(properties, scope=scope).configure()
"""
import logging

from dbbootstrap.client import create_document_client
from dbbootstrap.context import RegistryScope, Lifetime
from dbbootstrap.core import DocumentDbFactory, DocumentDbTemplate
from dbbootstrap.mapping import MappingDocumentDbConverter, build_mapping_context

CONNECTION_POLICY = "connection_policy"
DOCUMENT_CLIENT = "document_client"
DOCUMENT_DB_FACTORY = "document_db_factory"
DOCUMENT_DB_MAPPING_CONTEXT = "document_db_mapping_context"
MAPPING_DOCUMENT_DB_CONVERTER = "mapping_document_db_converter"
DOCUMENT_DB_TEMPLATE = "document_db_template"


class DocumentDbAutoConfiguration:
    def __init__(self, properties, scope=None, connection_policy=None, entity_scanner=None):
        """
        :param properties: Validated ``DocumentDbProperties``.
        :param scope: The ``RegistryScope`` to register components in. A new, empty scope is used if omitted.
        :param connection_policy: Optional ``ConnectionPolicy``. Falls back to an instance in the scope's
                                  ``connection_policy`` slot.
        :param entity_scanner: Optional ``EntityScanner`` providing the persistent entity types.
        """
        self.properties = properties
        self.scope = scope if scope is not None else RegistryScope()
        self.connection_policy = connection_policy if connection_policy is not None else self.scope.get(CONNECTION_POLICY)
        self.entity_scanner = entity_scanner
        self.logger = logging.getLogger(__name__)

    def document_client(self):
        return self.scope.get_or_create(DOCUMENT_CLIENT, self._create_document_client, self.properties.client_lifetime)

    def _create_document_client(self):
        return create_document_client(self.properties, self.connection_policy)

    def document_db_factory(self):
        return self.scope.get_or_create(DOCUMENT_DB_FACTORY, lambda: DocumentDbFactory(self.document_client()))

    def document_db_mapping_context(self):
        return self.scope.get_or_create(DOCUMENT_DB_MAPPING_CONTEXT, lambda: build_mapping_context(self.entity_scanner))

    def mapping_document_db_converter(self):
        return self.scope.get_or_create(MAPPING_DOCUMENT_DB_CONVERTER,
                                        lambda: MappingDocumentDbConverter(self.document_db_mapping_context()))

    def document_db_template(self):
        return self.scope.get_or_create(DOCUMENT_DB_TEMPLATE,
                                        lambda: DocumentDbTemplate(self.document_db_factory(),
                                                                   self.mapping_document_db_converter(),
                                                                   self.properties.database))

    def configure(self):
        """
        Resolves the document template and everything it depends on.

        :return: The ``DocumentDbTemplate``.
        """
        self.logger.info("Configuring document database access with properties %s.", self.properties.masked())
        if self.properties.client_lifetime == Lifetime.PROTOTYPE:
            self.logger.info("Document clients are created per request.")
        return self.document_db_template()
