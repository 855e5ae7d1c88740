import logging
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings

from applier.models import APPLY_MODE_APPLY


class Settings(BaseSettings):
    # Logging
    log_level: str = Field(default="INFO", description="Root logging level")

    # Local subsystem storage
    data_dir: str = Field(
        default="~/.applier/data", description="Root directory of the image store"
    )
    mount_dir: str = Field(
        default="~/.applier/mount",
        description="Root directory where cluster images are mounted",
    )

    # Subsystem providers
    # Supported providers:
    # - local: directory-backed implementations under data_dir / mount_dir
    image_service_provider: Literal["local"] = Field(
        default="local", description="Image service implementation to use"
    )
    mounter_provider: Literal["local"] = Field(
        default="local", description="Cluster image mounter implementation to use"
    )
    image_store_provider: Literal["local"] = Field(
        default="local", description="Image store implementation to use"
    )

    default_apply_mode: str = Field(
        default=APPLY_MODE_APPLY,
        description="Apply mode used by the path-based entry points",
    )

    class Config:
        env_prefix = "APPLIER_"
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for command line use."""
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
