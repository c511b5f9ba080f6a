# SPDX-License-Identifier: Apache-2.0
#
# The OpenSearch Contributors require contributions made to
# this file be licensed under the Apache-2.0 license or a
# compatible open source license.
# Modifications Copyright OpenSearch Contributors. See
# GitHub history for details.

"""
Maps each supported database type to the constructor of its SDK client.

Constructor modules import their SDK at module level. They are only imported when a client of that type
is requested, so a missing SDK affects its own database type and nothing else.
"""
import importlib
import logging
from enum import Enum

from dbbootstrap import exceptions


class DatabaseType(Enum):
    """Supported database types"""
    COSMOS = "cosmos"
    OPENSEARCH = "opensearch"


# database type -> (constructor module, constructor class, distribution providing the SDK)
BACKENDS = {
    DatabaseType.COSMOS: ("dbbootstrap.database.clients.cosmos", "CosmosClientConstructor", "azure-cosmos"),
    DatabaseType.OPENSEARCH: ("dbbootstrap.database.clients.opensearch", "OpenSearchClientConstructor", "opensearch-py"),
}


def load_client_constructor(db_type: DatabaseType):
    """
    :param db_type: The database type to connect to.
    :return: The constructor class for ``db_type``. Its ``create`` method builds the SDK client.
    :raises SystemSetupError: If the SDK for ``db_type`` cannot be imported.
    """
    module_name, class_name, distribution = BACKENDS[db_type]
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        logging.getLogger(__name__).error("Cannot load client for database type [%s].", db_type.value, exc_info=True)
        raise exceptions.SystemSetupError(
            "Database type [{}] requires the '{}' package which is not installed: {}".format(db_type.value, distribution, e), e)
    return getattr(module, class_name)
