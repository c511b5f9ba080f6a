# SPDX-License-Identifier: Apache-2.0
#
# The OpenSearch Contributors require contributions made to
# this file be licensed under the Apache-2.0 license or a
# compatible open source license.
# Modifications Copyright OpenSearch Contributors. See
# GitHub history for details.

import logging
import ssl
from urllib.parse import urlparse

import certifi
import opensearchpy
import urllib3
from urllib3.util.ssl_ import is_ipaddress

from dbbootstrap import exceptions


class OpenSearchClientConstructor:
    """
    Abstracts how the OpenSearch client is created. Intended for testing.
    """
    def __init__(self, uri, key, connection_policy, consistency_level):
        self.connection_policy = connection_policy
        self.ssl_context = None
        self.client_options = {}
        self.logger = logging.getLogger(__name__)

        parsed = urlparse(uri)
        if not parsed.hostname:
            raise exceptions.ConfigError("Cannot determine the host of OpenSearch endpoint [{}].".format(uri))
        use_ssl = parsed.scheme == "https"
        self.hosts = [{"host": parsed.hostname, "port": parsed.port or (443 if use_ssl else 9200)}]

        self.logger.info("Creating OpenSearch client connected to %s with key [*****] and user agent suffix [%s]",
                         self.hosts, connection_policy.user_agent_suffix)
        self.logger.debug("Consistency level [%s] does not apply to OpenSearch and is ignored.", consistency_level.value)

        if use_ssl:
            self.logger.info("SSL support: on")
            self.client_options["scheme"] = "https"
            self.ssl_context = ssl.create_default_context(ssl.Purpose.SERVER_AUTH,
                                                          cafile=connection_policy.ca_certs or certifi.where())

            if not connection_policy.verify_certs:
                self.logger.info("SSL certificate verification: off")
                # order matters to avoid ValueError: check_hostname needs a SSL context with either CERT_OPTIONAL or CERT_REQUIRED
                self.ssl_context.check_hostname = False
                self.ssl_context.verify_mode = ssl.CERT_NONE
                urllib3.disable_warnings()
            else:
                # hostname checking is disabled when the endpoint is given as an IP address
                self.ssl_context.check_hostname = not is_ipaddress(parsed.hostname)
                self.ssl_context.verify_mode = ssl.CERT_REQUIRED
                self.logger.info("SSL certificate verification: on")
        else:
            self.logger.info("SSL support: off")
            self.client_options["scheme"] = "http"

        user, sep, password = key.partition(":")
        if not sep or not user:
            raise exceptions.ConfigError("The key for an OpenSearch endpoint must have the form 'user:password'.")
        self.logger.info("HTTP basic authentication: on")
        self.client_options["http_auth"] = (user, password)

        self.client_options["timeout"] = connection_policy.request_timeout
        self.client_options["headers"] = {
            "user-agent": "opensearch-py/{}{}".format(opensearchpy.__versionstr__, connection_policy.user_agent_suffix or "")
        }

    def create(self):
        return opensearchpy.OpenSearch(hosts=self.hosts, ssl_context=self.ssl_context, **self.client_options)
