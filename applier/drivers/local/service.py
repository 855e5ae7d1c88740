"""Image service backed by a local image store."""

import logging
from typing import List

from applier.drivers.core.base import ImageService, ImageStore

logger = logging.getLogger(__name__)


class LocalImageService(ImageService):
    """Answers image queries from a ``LocalImageStore``."""

    def __init__(self, store: ImageStore) -> None:
        self.store = store

    def list_images(self) -> List[str]:
        return self.store.list_images()

    def image_exists(self, image: str) -> bool:
        exists = self.store.has_image(image)
        if not exists:
            logger.debug("Image %s not found in local store", image)
        return exists
