# SPDX-License-Identifier: Apache-2.0
#
# The OpenSearch Contributors require contributions made to
# this file be licensed under the Apache-2.0 license or a
# compatible open source license.
# Modifications Copyright OpenSearch Contributors. See
# GitHub history for details.

import logging
import os
from typing import Optional

import yaml
from pydantic import BaseModel, ValidationError, field_validator

from dbbootstrap import exceptions
from dbbootstrap.client import ConsistencyLevel
from dbbootstrap.context import Lifetime
from dbbootstrap.database.registry import DatabaseType

PROPERTIES_ROOT_KEY = "documentdb"


class DocumentDbProperties(BaseModel):
    uri: str
    key: str
    database: str
    consistency_level: Optional[ConsistencyLevel] = None
    allow_telemetry: bool = True
    database_type: DatabaseType = DatabaseType.COSMOS
    client_lifetime: Lifetime = Lifetime.SINGLETON

    class Config:
        extra = 'forbid'
        frozen = True

    # pylint: disable = no-self-argument
    @field_validator('uri', 'key', 'database')
    def validate_required_fields(cls, v, info):
        if not v or not v.strip():
            raise ValueError(f"Property '{info.field_name}' is required and must not be empty.")
        return v

    # pylint: disable = no-self-argument
    @field_validator('consistency_level', mode='before')
    def parse_consistency_level(cls, v):
        if v is None or isinstance(v, ConsistencyLevel):
            return v
        return ConsistencyLevel.parse(v)

    def masked(self):
        """
        :return: The properties as a dict with the access key masked, suitable for logging.
        """
        masked_properties = self.model_dump(mode="json")
        masked_properties["key"] = "*****"
        return masked_properties


def _normalize(raw_properties):
    if isinstance(raw_properties, dict) and PROPERTIES_ROOT_KEY in raw_properties:
        raw_properties = raw_properties[PROPERTIES_ROOT_KEY]
    if not isinstance(raw_properties, dict):
        raise exceptions.ConfigError("Properties must be a mapping but got [{}].".format(type(raw_properties).__name__))
    return {str(k).replace("-", "_"): v for k, v in raw_properties.items()}


def create_properties(raw_properties):
    """
    Validates raw properties, e.g. as read from a configuration file.

    Keys may use dashes or underscores (``consistency-level`` or ``consistency_level``) and may be nested
    below a ``documentdb`` root key.

    :param raw_properties: A mapping of property names to values.
    :return: A ``DocumentDbProperties`` instance.
    :raises ConfigError: If a required property is missing or a value is invalid.
    """
    try:
        return DocumentDbProperties(**_normalize(raw_properties))
    except ValidationError as e:
        problems = ["{}: {}".format(".".join(str(loc) for loc in error["loc"]), error["msg"]) for error in e.errors()]
        raise exceptions.ConfigError("Invalid documentdb properties: {}".format("; ".join(problems)), e)


def load_properties(properties_file_path):
    """
    Loads properties from a YAML file.

    :param properties_file_path: Path to the YAML file.
    :return: A ``DocumentDbProperties`` instance.
    """
    logger = logging.getLogger(__name__)
    if not os.path.isfile(properties_file_path):
        raise exceptions.ConfigError("Properties file [{}] does not exist.".format(properties_file_path))

    with open(properties_file_path, "r") as f:
        raw_properties = yaml.safe_load(f) or {}

    properties = create_properties(raw_properties)
    logger.info("Loaded properties %s from [%s].", properties.masked(), properties_file_path)
    return properties
