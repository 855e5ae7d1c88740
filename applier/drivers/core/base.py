"""
Abstract interfaces for the apply driver and the subsystems it depends on.

The apply driver is the validated handle handed to the orchestration engine.
The image service, cluster image mounter and image store are collaborators
injected into the driver factory; any implementation of the interfaces below
can be used.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, List

from applier.models import Cluster


class Subsystem(ABC):
    """Common lifecycle of an injected subsystem."""

    def close(self) -> None:
        """
        Release resources held by the subsystem.

        The default implementation is a no-op for subsystems that hold
        nothing worth releasing.
        """
        return None


class ImageStore(Subsystem):
    """On-disk store of cluster images."""

    @abstractmethod
    def image_dir(self, image: str) -> Path:
        """Return the directory holding the given image."""
        pass

    @abstractmethod
    def has_image(self, image: str) -> bool:
        pass

    @abstractmethod
    def list_images(self) -> List[str]:
        pass


class ImageService(Subsystem):
    """Lookup and lifecycle of cluster images."""

    @abstractmethod
    def list_images(self) -> List[str]:
        pass

    @abstractmethod
    def image_exists(self, image: str) -> bool:
        pass


class ClusterImageMounter(Subsystem):
    """Mounts cluster images so their rootfs can be distributed to hosts."""

    @abstractmethod
    def mount(self, cluster_name: str, image: str) -> Path:
        """
        Mount an image for a cluster.

        Args:
            cluster_name: Name of the cluster the mount belongs to
            image: Image reference to mount

        Returns:
            The mount target directory
        """
        pass

    @abstractmethod
    def unmount(self, cluster_name: str) -> None:
        pass


class ApplyDriver(ABC):
    """
    Handle to an assembled, validated apply driver.

    Callers should depend on this interface rather than on the concrete
    ``Applier`` structure.
    """

    @property
    @abstractmethod
    def apply_mode(self) -> str:
        pass

    @property
    @abstractmethod
    def cluster_desired(self) -> Cluster:
        pass

    @property
    @abstractmethod
    def cluster_file(self) -> Any:
        pass

    @property
    @abstractmethod
    def image_manager(self) -> ImageService:
        pass

    @property
    @abstractmethod
    def cluster_image_mounter(self) -> ClusterImageMounter:
        pass

    @property
    @abstractmethod
    def image_store(self) -> ImageStore:
        pass
