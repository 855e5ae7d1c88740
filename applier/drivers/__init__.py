"""
Apply driver layer.

This package assembles the apply driver handed to the orchestration engine
and defines the pluggable subsystems (image service, cluster image mounter,
image store) it depends on.
"""

from applier.drivers.core.applier import Applier
from applier.drivers.core import (
    ApplierFactory,
    ApplyDriver,
    SubsystemProviders,
    register_subsystem,
)

__all__ = [
    "Applier",
    "ApplierFactory",
    "ApplyDriver",
    "SubsystemProviders",
    "register_subsystem",
]
