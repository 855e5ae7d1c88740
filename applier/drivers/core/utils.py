"""
Host address helpers shared by the driver factory.

This module classifies host addresses and enforces that every host of a
cluster uses the same address family.
"""

import ipaddress
import logging
from typing import List, Optional, Sequence, Set

from applier.errors import AddressParseError, MixedFamilyError
from applier.models import AddressFamily, Host

logger = logging.getLogger(__name__)


def classify_address(address: str) -> AddressFamily:
    """
    Classify a single address string.

    IPv4-mapped IPv6 literals count as IPv4. Scoped IPv6 literals
    (``fe80::1%eth0``) and anything with surrounding whitespace are invalid.

    Examples:
        >>> classify_address("10.0.0.1")
        <AddressFamily.IPV4: 'IPv4'>
        >>> classify_address("2001:db8::1")
        <AddressFamily.IPV6: 'IPv6'>
        >>> classify_address("::ffff:10.0.0.1")
        <AddressFamily.IPV4: 'IPv4'>
        >>> classify_address("not-an-ip")
        <AddressFamily.INVALID: 'Invalid'>
    """
    if not isinstance(address, str) or "%" in address or address != address.strip():
        return AddressFamily.INVALID

    try:
        parsed = ipaddress.ip_address(address)
    except ValueError:
        return AddressFamily.INVALID

    if parsed.version == 4:
        return AddressFamily.IPV4
    if parsed.ipv4_mapped is not None:
        return AddressFamily.IPV4
    return AddressFamily.IPV6


def get_ip_list_from_hosts(hosts: Sequence[Host]) -> List[str]:
    """Flatten the addresses of every host, keeping their order."""
    return [ip for host in hosts for ip in host.ips]


def check_all_hosts_same_family(hosts: Sequence[str]) -> Optional[AddressFamily]:
    """
    Ensure every host address is valid and of one family.

    Args:
        hosts: Host addresses in cluster order

    Returns:
        The family shared by all hosts, or None for an empty list

    Raises:
        AddressParseError: On the first address that is not an IP literal
        MixedFamilyError: If IPv4 and IPv6 addresses are mixed
    """
    families: Set[AddressFamily] = set()
    for index, address in enumerate(hosts):
        family = classify_address(address)
        if family == AddressFamily.INVALID:
            raise AddressParseError(address, index)
        families.add(family)

    if len(families) > 1:
        raise MixedFamilyError(hosts)

    if not families:
        return None

    family = families.pop()
    logger.debug("All %d host addresses are %s", len(hosts), family.value)
    return family
