"""
Directory-backed cluster image mounter.

Each cluster gets one mount target under ``{root}/<cluster_name>``. The
mounter tracks the targets it created so ``close()`` can remove them.
"""

import logging
import os
import shutil
from pathlib import Path
from typing import Dict

from applier.drivers.core.base import ClusterImageMounter

logger = logging.getLogger(__name__)


class LocalClusterImageMounter(ClusterImageMounter):
    """Mounter that prepares plain directories as mount targets."""

    def __init__(self, root: str) -> None:
        self.root = Path(os.path.expanduser(root))
        self.root.mkdir(parents=True, exist_ok=True)
        self._mounts: Dict[str, Path] = {}

    def mount(self, cluster_name: str, image: str) -> Path:
        if not cluster_name:
            raise ValueError("cluster name cannot be empty")

        target = self.root / cluster_name
        target.mkdir(parents=True, exist_ok=True)
        self._mounts[cluster_name] = target
        logger.info("Mounted image %s for cluster %s at %s", image, cluster_name, target)
        return target

    def unmount(self, cluster_name: str) -> None:
        target = self._mounts.pop(cluster_name, self.root / cluster_name)
        if target.exists():
            shutil.rmtree(target)
            logger.info("Unmounted cluster %s from %s", cluster_name, target)

    def close(self) -> None:
        for cluster_name in list(self._mounts):
            self.unmount(cluster_name)
