"""
Entry points for building apply drivers.

The path-based entry points load a Clusterfile and delegate to the
spec-based ones, which hand the cluster to an ``ApplierFactory``.
"""

import logging
import os
from typing import Any, Optional

from applier.clusterfile import ClusterFile
from applier.config import settings
from applier.drivers.core.base import ApplyDriver
from applier.drivers.core.factory import ApplierFactory
from applier.errors import PathResolutionError
from applier.models import CLUSTERFILE_NAME_ANNOTATION, Cluster

logger = logging.getLogger(__name__)


def resolve_path(path: str) -> str:
    """
    Make a Clusterfile path absolute against the current working directory.

    Relative paths are normalized after joining, so ``./Clusterfile`` and
    ``sub/../Clusterfile`` both resolve to ``<cwd>/Clusterfile``.

    Raises:
        PathResolutionError: If the working directory cannot be determined
    """
    if os.path.isabs(path):
        return path
    try:
        cwd = os.getcwd()
    except OSError as e:
        logger.error("Failed to get working directory for %s: %s", path, e)
        raise PathResolutionError(path, e) from e
    return os.path.normpath(os.path.join(cwd, path))


def new_applier_from_file(
    path: str, action: str, factory: Optional[ApplierFactory] = None
) -> ApplyDriver:
    """Build an apply driver from a Clusterfile with the default apply mode."""
    return new_applier_from_file_with_mode(
        path, action, settings.default_apply_mode, factory=factory
    )


def new_applier_from_file_with_mode(
    path: str, action: str, mode: str, factory: Optional[ApplierFactory] = None
) -> ApplyDriver:
    """
    Build an apply driver from a Clusterfile.

    The absolute Clusterfile path is recorded in the cluster's
    ``ClusterfileName`` annotation unless one is already set.

    Raises:
        PathResolutionError: If a relative path cannot be resolved
        ClusterFileLoadError: If the Clusterfile cannot be loaded
        ApplierError: Any error raised while building the driver
    """
    path = resolve_path(path)
    cluster_file = ClusterFile.load(path)

    cluster = cluster_file.get_cluster()
    if cluster.get_annotation(CLUSTERFILE_NAME_ANNOTATION) == "":
        cluster.set_annotation(CLUSTERFILE_NAME_ANNOTATION, path)

    return new_default_applier_with_mode(
        cluster, action, mode, cluster_file, factory=factory
    )


def new_default_applier(
    cluster: Cluster,
    action: str,
    cluster_file: Any,
    factory: Optional[ApplierFactory] = None,
) -> ApplyDriver:
    """
    Build an apply driver for an already constructed cluster.

    No raw data is accepted here: the cluster must have gone through the
    pre-process layer (Clusterfile loading or args conversion) first. The
    mode is ``settings.default_apply_mode``, as for ``new_applier_from_file``.
    """
    return new_default_applier_with_mode(
        cluster, action, settings.default_apply_mode, cluster_file, factory=factory
    )


def new_default_applier_with_mode(
    cluster: Cluster,
    action: str,
    mode: str,
    cluster_file: Any,
    factory: Optional[ApplierFactory] = None,
) -> ApplyDriver:
    factory = factory or ApplierFactory()
    return factory.build(cluster, action, mode, cluster_file)
