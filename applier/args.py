"""
Build a desired cluster from command line style arguments.

Masters and nodes accept two formats:
    - IP list: ``ip1,ip2,ip3``
    - IP range: ``x.x.x.x-x.x.x.y``
"""

import ipaddress
import logging
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from applier.models import SSH, Cluster, ClusterSpec, Host, ObjectMeta

logger = logging.getLogger(__name__)

MASTER_ROLE = "master"
NODE_ROLE = "node"

# Upper bound on the number of addresses a single range may expand to
MAX_RANGE_SIZE = 65536


class ApplyArgs(BaseModel):
    model_config = ConfigDict(extra="forbid")

    cluster_name: str = Field("", description="Name of the cluster")
    masters: str = Field("", description="Master addresses, list or range format")
    nodes: str = Field("", description="Node addresses, list or range format")

    user: str = Field("root", description="SSH user")
    password: Optional[str] = Field(None, description="SSH password")
    port: int = Field(22, gt=0, le=65535, description="SSH port")
    pk: Optional[str] = Field(None, description="Path to the SSH private key")
    pk_password: Optional[str] = Field(None, description="Private key passphrase")

    pod_cidr: Optional[str] = Field(None, description="Pod network CIDR")
    svc_cidr: Optional[str] = Field(None, description="Service network CIDR")
    provider: Optional[str] = Field(None, description="Infrastructure provider")
    custom_env: List[str] = Field(
        default_factory=list, description="Extra env in KEY=VALUE form"
    )
    cmd_args: List[str] = Field(
        default_factory=list, description="Extra command arguments"
    )


def _expand_range(value: str) -> List[str]:
    start_str, _, end_str = value.partition("-")
    try:
        start = ipaddress.ip_address(start_str.strip())
        end = ipaddress.ip_address(end_str.strip())
    except ValueError as e:
        raise ValueError(f"Invalid IP range '{value}': {e}") from e

    if start.version != end.version:
        raise ValueError(f"Invalid IP range '{value}': mixed address families")
    if int(end) < int(start):
        raise ValueError(f"Invalid IP range '{value}': end is before start")
    if int(end) - int(start) >= MAX_RANGE_SIZE:
        raise ValueError(
            f"Invalid IP range '{value}': more than {MAX_RANGE_SIZE} addresses"
        )

    return [str(start + offset) for offset in range(int(end) - int(start) + 1)]


def parse_host_list(value: str) -> List[str]:
    """
    Expand a host argument into a list of addresses.

    Examples:
        >>> parse_host_list("192.168.0.2,192.168.0.3")
        ['192.168.0.2', '192.168.0.3']
        >>> parse_host_list("192.168.0.2-192.168.0.4")
        ['192.168.0.2', '192.168.0.3', '192.168.0.4']
        >>> parse_host_list("")
        []

    Raises:
        ValueError: If the value is not a valid list or range
    """
    value = value.strip()
    if not value:
        return []

    if "-" in value and "," not in value:
        return _expand_range(value)

    hosts = []
    for item in value.split(","):
        item = item.strip()
        if not item:
            continue
        try:
            ipaddress.ip_address(item)
        except ValueError as e:
            raise ValueError(f"Invalid IP '{item}' in host list '{value}'") from e
        hosts.append(item)
    return hosts


def new_cluster_from_args(image: str, args: ApplyArgs) -> Cluster:
    """
    Build a desired cluster from apply arguments.

    Args:
        image: Cluster image reference
        args: The parsed apply arguments

    Returns:
        A Cluster with one master host group and, when nodes were given, one
        node host group

    Raises:
        ValueError: If masters are missing or a host argument is invalid
    """
    masters = parse_host_list(args.masters)
    nodes = parse_host_list(args.nodes)
    if not masters:
        raise ValueError("at least one master is required")

    hosts = [Host(ips=masters, roles=[MASTER_ROLE])]
    if nodes:
        hosts.append(Host(ips=nodes, roles=[NODE_ROLE]))

    env = list(args.custom_env)
    if args.pod_cidr:
        env.append(f"PodCIDR={args.pod_cidr}")
    if args.svc_cidr:
        env.append(f"SvcCIDR={args.svc_cidr}")

    cluster = Cluster(
        metadata=ObjectMeta(name=args.cluster_name),
        spec=ClusterSpec(
            image=image,
            hosts=hosts,
            env=env,
            ssh=SSH(
                user=args.user,
                passwd=args.password,
                port=args.port,
                pk=args.pk,
                pk_passwd=args.pk_password,
            ),
            cmd_args=list(args.cmd_args),
        ),
    )
    logger.debug(
        "Built cluster %s from args: %d masters, %d nodes",
        args.cluster_name,
        len(masters),
        len(nodes),
    )
    return cluster
