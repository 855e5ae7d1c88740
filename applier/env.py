"""
Cluster environment helpers.

Cluster env is carried as a list of ``KEY=VALUE`` strings, the same form it
has in a Clusterfile.
"""

import logging
from typing import Dict, List, Optional, Sequence

from applier.models import AddressFamily, ENV_HOST_IP_FAMILY, IPV6_MARKER

logger = logging.getLogger(__name__)


def convert_env(env: Sequence[str]) -> Dict[str, str]:
    """
    Parse ``KEY=VALUE`` entries into a mapping.

    Entries without ``=`` are ignored. When a key appears more than once the
    first value is kept.

    Examples:
        >>> convert_env(["A=1", "B=x=y", "junk", "A=2"])
        {'A': '1', 'B': 'x=y'}
    """
    result: Dict[str, str] = {}
    for entry in env:
        key, sep, value = entry.partition("=")
        key = key.strip()
        if not sep or not key:
            continue
        result.setdefault(key, value)
    return result


def apply_host_ip_family_default(
    env: List[str], family: Optional[AddressFamily]
) -> List[str]:
    """
    Inject ``HostIPFamily=IPv6`` when every host is IPv6.

    An existing ``HostIPFamily`` entry always wins. The input list is never
    modified: a new list is returned when the default is added, otherwise the
    input itself is returned.

    Args:
        env: Cluster env in ``KEY=VALUE`` form
        family: The single family observed across the hosts, or None

    Returns:
        The env list to store on the cluster
    """
    if family != AddressFamily.IPV6:
        return env
    if ENV_HOST_IP_FAMILY in convert_env(env):
        return env

    logger.info("All hosts are IPv6, defaulting %s=%s", ENV_HOST_IP_FAMILY, IPV6_MARKER)
    return [*env, f"{ENV_HOST_IP_FAMILY}={IPV6_MARKER}"]
