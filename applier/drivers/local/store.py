"""
Directory-backed image store.

Images live under ``{root}/images/<image>``, where the image reference is
turned into a directory name by replacing ``/`` and ``:`` with ``_``.
"""

import logging
import os
from pathlib import Path
from typing import List

from applier.drivers.core.base import ImageStore

logger = logging.getLogger(__name__)


def image_dir_name(image: str) -> str:
    """
    Turn an image reference into a directory name.

    Examples:
        >>> image_dir_name("docker.io/library/kubernetes:v1.22.15")
        'docker.io_library_kubernetes_v1.22.15'
    """
    return image.replace("/", "_").replace(":", "_")


class LocalImageStore(ImageStore):
    """Image store rooted at a local directory."""

    def __init__(self, root: str) -> None:
        self.root = Path(os.path.expanduser(root))
        self.images_dir = self.root / "images"
        self.layers_dir = self.root / "layers"
        self.ensure_dirs()

    def ensure_dirs(self) -> None:
        """
        Create the store directories if they don't exist.

        Raises:
            OSError: If the directories cannot be created
        """
        try:
            self.images_dir.mkdir(parents=True, exist_ok=True)
            self.layers_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error("Failed to create image store under %s: %s", self.root, e)
            raise

    def image_dir(self, image: str) -> Path:
        return self.images_dir / image_dir_name(image)

    def has_image(self, image: str) -> bool:
        return self.image_dir(image).is_dir()

    def list_images(self) -> List[str]:
        return sorted(p.name for p in self.images_dir.iterdir() if p.is_dir())
