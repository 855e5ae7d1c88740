"""Core driver abstractions and factory utilities."""

from applier.drivers.core.base import (
    ApplyDriver,
    ClusterImageMounter,
    ImageService,
    ImageStore,
    Subsystem,
)
from applier.drivers.core.factory import (
    ApplierFactory,
    SubsystemProviders,
    create_subsystem,
    get_subsystem_provider,
    register_subsystem,
)
from applier.drivers.core.utils import (
    check_all_hosts_same_family,
    classify_address,
    get_ip_list_from_hosts,
)

__all__ = [
    "ApplyDriver",
    "ClusterImageMounter",
    "ImageService",
    "ImageStore",
    "Subsystem",
    "ApplierFactory",
    "SubsystemProviders",
    "create_subsystem",
    "get_subsystem_provider",
    "register_subsystem",
    "check_all_hosts_same_family",
    "classify_address",
    "get_ip_list_from_hosts",
]
