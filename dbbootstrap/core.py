# SPDX-License-Identifier: Apache-2.0
#
# The OpenSearch Contributors require contributions made to
# this file be licensed under the Apache-2.0 license or a
# compatible open source license.
# Modifications Copyright OpenSearch Contributors. See
# GitHub history for details.

from dbbootstrap import exceptions


class DocumentDbFactory:
    """
    Hands out the document client to the data access layer.
    """
    def __init__(self, document_client):
        if document_client is None:
            raise ValueError("document_client must not be None")
        self._document_client = document_client

    @property
    def document_client(self):
        return self._document_client


class DocumentDbTemplate:
    """
    Entry point of the data access layer, bound to one database.
    """
    def __init__(self, document_db_factory, converter, database_name):
        if document_db_factory is None:
            raise ValueError("document_db_factory must not be None")
        if converter is None:
            raise ValueError("converter must not be None")
        if not database_name:
            raise exceptions.ConfigError("A database name is required to create a document template.")
        self._document_db_factory = document_db_factory
        self._converter = converter
        self._database_name = database_name

    @property
    def document_db_factory(self):
        return self._document_db_factory

    @property
    def converter(self):
        return self._converter

    @property
    def database_name(self):
        return self._database_name

    @property
    def document_client(self):
        return self._document_db_factory.document_client
