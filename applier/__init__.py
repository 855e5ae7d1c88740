"""
Validated construction of cluster apply drivers.

Turns a declarative cluster (from a Clusterfile or built in memory) into an
apply driver, enforcing a non-empty cluster name and a single host address
family, and defaulting the host IP family env for IPv6 clusters.
"""

from applier.args import ApplyArgs, new_cluster_from_args
from applier.apply import (
    new_applier_from_file,
    new_applier_from_file_with_mode,
    new_default_applier,
    new_default_applier_with_mode,
)
from applier.clusterfile import ClusterFile
from applier.drivers import Applier, ApplierFactory, ApplyDriver, SubsystemProviders
from applier.models import APPLY_MODE_APPLY, APPLY_MODE_LOAD_IMAGE, Cluster

__all__ = [
    "new_applier_from_file",
    "new_applier_from_file_with_mode",
    "new_default_applier",
    "new_default_applier_with_mode",
    "ApplyArgs",
    "new_cluster_from_args",
    "ClusterFile",
    "Applier",
    "ApplierFactory",
    "ApplyDriver",
    "SubsystemProviders",
    "APPLY_MODE_APPLY",
    "APPLY_MODE_LOAD_IMAGE",
    "Cluster",
]
