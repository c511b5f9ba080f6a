# SPDX-License-Identifier: Apache-2.0
#
# The OpenSearch Contributors require contributions made to
# this file be licensed under the Apache-2.0 license or a
# compatible open source license.
# Modifications Copyright OpenSearch Contributors. See
# GitHub history for details.

import logging

from azure.cosmos import CosmosClient, documents


class CosmosClientConstructor:
    """
    Abstracts how the Cosmos DB (DocumentDB API) client is created. Intended for testing.
    """
    def __init__(self, uri, key, connection_policy, consistency_level):
        self.uri = uri
        self.key = key
        self.connection_policy = connection_policy
        self.consistency_level = consistency_level
        self.logger = logging.getLogger(__name__)

        self.logger.info("Creating Cosmos client connected to [%s] with key [*****], consistency level [%s] and "
                         "user agent suffix [%s]", uri, consistency_level.value, connection_policy.user_agent_suffix)

    def sdk_connection_policy(self):
        """
        :return: The SDK's ``documents.ConnectionPolicy`` equivalent of our connection policy, without SSL settings.
        """
        sdk_policy = documents.ConnectionPolicy()
        sdk_policy.RequestTimeout = self.connection_policy.request_timeout
        sdk_policy.EnableEndpointDiscovery = self.connection_policy.enable_endpoint_discovery
        sdk_policy.PreferredLocations = list(self.connection_policy.preferred_locations)
        return sdk_policy

    def connection_verify(self):
        """
        The SDK derives certificate verification from its ``connection_verify`` keyword and overrides whatever
        the connection policy says about it.

        :return: ``False`` to disable verification, the CA bundle path to verify against or ``None`` for the default.
        """
        if not self.connection_policy.verify_certs:
            self.logger.warning("SSL certificate verification: off. Only use this against the local emulator.")
            return False
        if self.connection_policy.ca_certs:
            self.logger.info("SSL certificate verification: on, using CA bundle [%s]", self.connection_policy.ca_certs)
            return self.connection_policy.ca_certs
        return None

    def create(self):
        client_options = {}
        connection_verify = self.connection_verify()
        if connection_verify is not None:
            client_options["connection_verify"] = connection_verify
        return CosmosClient(self.uri,
                            credential=self.key,
                            consistency_level=self.consistency_level.value,
                            connection_policy=self.sdk_connection_policy(),
                            user_agent_suffix=self.connection_policy.user_agent_suffix,
                            **client_options)
