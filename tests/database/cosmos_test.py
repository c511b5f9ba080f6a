# SPDX-License-Identifier: Apache-2.0
#
# The OpenSearch Contributors require contributions made to
# this file be licensed under the Apache-2.0 license or a
# compatible open source license.
# Modifications Copyright OpenSearch Contributors. See
# GitHub history for details.

from unittest import TestCase, mock

from azure.cosmos.cosmos_client import _build_connection_policy

from dbbootstrap.client import ConnectionPolicy, ConsistencyLevel
from dbbootstrap.database.clients.cosmos import CosmosClientConstructor


class CosmosClientConstructorTests(TestCase):
    @mock.patch("dbbootstrap.database.clients.cosmos.CosmosClient")
    def test_passes_endpoint_key_consistency_and_suffix(self, cosmos_client):
        policy = ConnectionPolicy(user_agent_suffix=";db-bootstrap/1.0")

        document_client = CosmosClientConstructor("https://db.example:443/", "k", policy, ConsistencyLevel.STRONG).create()

        self.assertIs(cosmos_client.return_value, document_client)
        cosmos_client.assert_called_once_with("https://db.example:443/",
                                              credential="k",
                                              consistency_level="Strong",
                                              connection_policy=mock.ANY,
                                              user_agent_suffix=";db-bootstrap/1.0")

    def test_translates_connection_policy(self):
        policy = ConnectionPolicy(request_timeout=5, enable_endpoint_discovery=False, preferred_locations=["West US"])

        sdk_policy = CosmosClientConstructor("https://db.example", "k", policy, ConsistencyLevel.SESSION).sdk_connection_policy()

        self.assertEqual(5, sdk_policy.RequestTimeout)
        self.assertFalse(sdk_policy.EnableEndpointDiscovery)
        self.assertEqual(["West US"], sdk_policy.PreferredLocations)

    @mock.patch("dbbootstrap.database.clients.cosmos.CosmosClient")
    def test_disabled_certificate_verification_reaches_sdk_policy(self, cosmos_client):
        policy = ConnectionPolicy(verify_certs=False)

        CosmosClientConstructor("https://localhost:8081", "k", policy, ConsistencyLevel.SESSION).create()

        _, kwargs = cosmos_client.call_args
        self.assertIs(False, kwargs["connection_verify"])
        # the policy the SDK builds from the keyword arguments it receives
        self.assertTrue(_build_connection_policy(dict(kwargs)).DisableSSLVerification)

    @mock.patch("dbbootstrap.database.clients.cosmos.CosmosClient")
    def test_custom_ca_bundle_keeps_verification_on(self, cosmos_client):
        policy = ConnectionPolicy(ca_certs="/etc/ssl/emulator.pem")

        CosmosClientConstructor("https://localhost:8081", "k", policy, ConsistencyLevel.SESSION).create()

        _, kwargs = cosmos_client.call_args
        self.assertEqual("/etc/ssl/emulator.pem", kwargs["connection_verify"])
        self.assertFalse(_build_connection_policy(dict(kwargs)).DisableSSLVerification)

    @mock.patch("dbbootstrap.database.clients.cosmos.CosmosClient")
    def test_verifies_certificates_by_default(self, cosmos_client):
        CosmosClientConstructor("https://db.example", "k", ConnectionPolicy(), ConsistencyLevel.SESSION).create()

        _, kwargs = cosmos_client.call_args
        self.assertNotIn("connection_verify", kwargs)
        self.assertFalse(_build_connection_policy(dict(kwargs)).DisableSSLVerification)
