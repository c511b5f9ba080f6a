# SPDX-License-Identifier: Apache-2.0
#
# The OpenSearch Contributors require contributions made to
# this file be licensed under the Apache-2.0 license or a
# compatible open source license.
# Modifications Copyright OpenSearch Contributors. See
# GitHub history for details.

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from dbbootstrap import exceptions, telemetry
from dbbootstrap.database.registry import load_client_constructor
from dbbootstrap.version import user_agent_identifier

USER_AGENT_SUFFIX = user_agent_identifier()


class ConsistencyLevel(Enum):
    """Read consistency guarantees, valued as the Cosmos DB SDK expects them"""
    STRONG = "Strong"
    BOUNDED_STALENESS = "BoundedStaleness"
    SESSION = "Session"
    EVENTUAL = "Eventual"
    CONSISTENT_PREFIX = "ConsistentPrefix"

    @classmethod
    def parse(cls, value):
        """
        Accepts either the enum value (``"Session"``) or its name (``"session"``, ``"BOUNDED_STALENESS"``).
        """
        if isinstance(value, cls):
            return value
        normalized = str(value).strip()
        for level in cls:
            if normalized == level.value or normalized.upper().replace("-", "_") == level.name:
                return level
        raise ValueError("Unknown consistency level [{}]. Valid levels are {}.".format(value, [level.value for level in cls]))


@dataclass
class ConnectionPolicy:
    """
    Mutable connection settings handed to the SDK client.

    A policy supplied by the caller is modified in place when a client is created.
    """
    user_agent_suffix: Optional[str] = None
    request_timeout: int = 60
    enable_endpoint_discovery: bool = True
    preferred_locations: List[str] = field(default_factory=list)
    verify_certs: bool = True
    ca_certs: Optional[str] = None

    @classmethod
    def get_default(cls):
        return cls()


def compute_user_agent_suffix(policy, allow_telemetry):
    suffix = ("" if policy.user_agent_suffix is None else ";" + policy.user_agent_suffix) + ";" + USER_AGENT_SUFFIX
    if allow_telemetry:
        hash_mac = telemetry.get_hash_mac()
        if hash_mac is not None:
            suffix += ";" + hash_mac
    return suffix


def create_document_client(properties, connection_policy=None):
    """
    Creates a new SDK client for the configured database. Every call opens a new client.

    :param properties: The ``DocumentDbProperties`` to connect with.
    :param connection_policy: An optional ``ConnectionPolicy``. It is mutated in place: its user agent suffix
                              is overwritten with the composite suffix of this library.
    :return: The SDK client.
    """
    logger = logging.getLogger(__name__)
    logger.debug("Creating document client for [%s].", properties.uri)
    for name in ("uri", "key"):
        if not getattr(properties, name, None):
            raise exceptions.ConfigError("Property [{}] is required to create a document client.".format(name))

    constructor_class = load_client_constructor(properties.database_type)
    policy = ConnectionPolicy.get_default() if connection_policy is None else connection_policy
    policy.user_agent_suffix = compute_user_agent_suffix(policy, properties.allow_telemetry)

    consistency_level = properties.consistency_level or ConsistencyLevel.SESSION
    return constructor_class(properties.uri, properties.key, policy, consistency_level).create()
