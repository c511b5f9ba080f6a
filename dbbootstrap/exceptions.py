# SPDX-License-Identifier: Apache-2.0
#
# The OpenSearch Contributors require contributions made to
# this file be licensed under the Apache-2.0 license or a
# compatible open source license.
# Modifications Copyright OpenSearch Contributors. See
# GitHub history for details.


class BootstrapError(Exception):
    """
    Base class for all db-bootstrap exceptions
    """

    def __init__(self, message, cause=None):
        super().__init__(message, cause)
        self.message = message
        self.cause = cause

    def __repr__(self):
        return self.message

    def __str__(self):
        return self.message


class SystemSetupError(BootstrapError):
    """
    Thrown when required software is missing, e.g. the SDK for the requested database type is not installed
    """


class ConfigError(BootstrapError):
    """
    Thrown when a required property is missing or invalid
    """


class EntityScanError(ConfigError):
    """
    Thrown when a type cannot be resolved while scanning for persistent entities
    """
