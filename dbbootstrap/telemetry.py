# SPDX-License-Identifier: Apache-2.0
#
# The OpenSearch Contributors require contributions made to
# this file be licensed under the Apache-2.0 license or a
# compatible open source license.
# Modifications Copyright OpenSearch Contributors. See
# GitHub history for details.

import hashlib
import logging
import re

import psutil

MAC_ADDRESS_PATTERN = re.compile(r"^(?:[0-9a-f]{2}:){5}[0-9a-f]{2}$")
INVALID_MAC_ADDRESSES = frozenset(["00:00:00:00:00:00", "ff:ff:ff:ff:ff:ff"])


def mac_address():
    """
    :return: The first valid hardware address of the local network interfaces (ordered by interface name) or ``None``.
    """
    for _, addresses in sorted(psutil.net_if_addrs().items()):
        for address in addresses:
            if address.family != psutil.AF_LINK or not address.address:
                continue
            candidate = address.address.lower().replace("-", ":")
            if MAC_ADDRESS_PATTERN.match(candidate) and candidate not in INVALID_MAC_ADDRESSES:
                return candidate
    return None


def get_hash_mac():
    """
    Computes an anonymous, stable fingerprint of this machine.

    The lookup never raises: if no hardware address can be determined, ``None`` is returned.

    :return: The hex encoded SHA-256 digest of the local MAC address or ``None``.
    """
    logger = logging.getLogger(__name__)
    # noinspection PyBroadException
    try:
        mac = mac_address()
    except Exception:
        logger.debug("Could not determine MAC address.", exc_info=True)
        return None
    if mac is None:
        logger.debug("No valid MAC address found on any network interface.")
        return None
    return hashlib.sha256(mac.encode("utf-8")).hexdigest()
