"""Local directory-backed subsystem implementations."""

from applier.drivers.local.mounter import LocalClusterImageMounter
from applier.drivers.local.service import LocalImageService
from applier.drivers.local.store import LocalImageStore, image_dir_name

__all__ = [
    "LocalClusterImageMounter",
    "LocalImageService",
    "LocalImageStore",
    "image_dir_name",
]
