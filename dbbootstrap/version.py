# SPDX-License-Identifier: Apache-2.0
#
# The OpenSearch Contributors require contributions made to
# this file be licensed under the Apache-2.0 license or a
# compatible open source license.
# Modifications Copyright OpenSearch Contributors. See
# GitHub history for details.

from importlib import metadata

from dbbootstrap import PROGRAM_NAME

__version__ = metadata.version(PROGRAM_NAME)


def user_agent_identifier():
    """
    :return: The fixed identifier this library adds to the user agent of every client it creates, e.g. ``db-bootstrap/0.1.0``.
    """
    return "{}/{}".format(PROGRAM_NAME, __version__)
