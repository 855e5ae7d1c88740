"""The concrete apply driver assembled by the driver factory."""

from typing import Any, Optional

from applier.drivers.core.base import (
    ApplyDriver,
    ClusterImageMounter,
    ImageService,
    ImageStore,
)
from applier.models import Cluster


class Applier(ApplyDriver):
    """
    Validated apply driver.

    Holds the apply mode, the desired cluster and references to the injected
    subsystems. The subsystems are not owned by the driver: they outlive it
    for the duration of an apply run and are released by whoever acquired
    them.
    """

    def __init__(
        self,
        apply_mode: str,
        cluster_desired: Cluster,
        cluster_file: Any,
        image_manager: ImageService,
        cluster_image_mounter: ClusterImageMounter,
        image_store: ImageStore,
        action: Optional[str] = None,
    ) -> None:
        self._apply_mode = apply_mode
        self._cluster_desired = cluster_desired
        self._cluster_file = cluster_file
        self._image_manager = image_manager
        self._cluster_image_mounter = cluster_image_mounter
        self._image_store = image_store
        self.action = action

    @property
    def apply_mode(self) -> str:
        return self._apply_mode

    @property
    def cluster_desired(self) -> Cluster:
        return self._cluster_desired

    @property
    def cluster_file(self) -> Any:
        return self._cluster_file

    @property
    def image_manager(self) -> ImageService:
        return self._image_manager

    @property
    def cluster_image_mounter(self) -> ClusterImageMounter:
        return self._cluster_image_mounter

    @property
    def image_store(self) -> ImageStore:
        return self._image_store

    def __repr__(self) -> str:
        return (
            f"Applier(cluster={self._cluster_desired.name!r}, "
            f"mode={self._apply_mode!r}, action={self.action!r})"
        )
