"""
Driver factory for assembling validated apply drivers.

This module acquires the subsystems an apply driver needs, validates the
desired cluster and assembles the ``Applier`` handed to the orchestration
engine.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple
import logging
import os

from applier.config import settings
from applier.drivers.core.applier import Applier
from applier.drivers.core.base import (
    ApplyDriver,
    ClusterImageMounter,
    ImageService,
    ImageStore,
    Subsystem,
)
from applier.drivers.core.utils import (
    check_all_hosts_same_family,
    get_ip_list_from_hosts,
)
from applier.env import apply_host_ip_family_default
from applier.errors import ClusterIdentityError, SubsystemInitError
from applier.models import APPLY_MODE_APPLY, Cluster

logger = logging.getLogger(__name__)

IMAGE_SERVICE = "image_service"
MOUNTER = "mounter"
IMAGE_STORE = "image_store"

# Acquisition order of the subsystems
SUBSYSTEM_KINDS = (IMAGE_SERVICE, MOUNTER, IMAGE_STORE)

# Provider registry mapping subsystem kind -> provider name -> factory
_SUBSYSTEM_REGISTRY: Dict[str, Dict[str, Callable[[], Subsystem]]] = {
    kind: {} for kind in SUBSYSTEM_KINDS
}


# Local image stores by expanded root, shared by the local image service and
# the local image store provider
_LOCAL_IMAGE_STORES: Dict[str, Any] = {}


def _local_image_store() -> ImageStore:
    from applier.drivers.local import LocalImageStore

    root = os.path.expanduser(settings.data_dir)
    store = _LOCAL_IMAGE_STORES.get(root)
    if store is None:
        store = _LOCAL_IMAGE_STORES[root] = LocalImageStore(root)
    else:
        store.ensure_dirs()
    return store


def _local_image_service() -> ImageService:
    from applier.drivers.local import LocalImageService

    return LocalImageService(_local_image_store())


def _local_mounter() -> ClusterImageMounter:
    from applier.drivers.local import LocalClusterImageMounter

    return LocalClusterImageMounter(settings.mount_dir)


def _get_subsystem_registry() -> Dict[str, Dict[str, Callable[[], Subsystem]]]:
    """
    Lazily populate and return the provider registry.

    The built-in ``local`` providers are registered on first use so that
    providers registered explicitly beforehand are not overwritten.
    """
    _SUBSYSTEM_REGISTRY[IMAGE_SERVICE].setdefault("local", _local_image_service)
    _SUBSYSTEM_REGISTRY[MOUNTER].setdefault("local", _local_mounter)
    _SUBSYSTEM_REGISTRY[IMAGE_STORE].setdefault("local", _local_image_store)
    return _SUBSYSTEM_REGISTRY


def register_subsystem(
    kind: str, name: str, provider: Callable[[], Subsystem]
) -> None:
    """
    Register a subsystem provider.

    Args:
        kind: One of ``image_service``, ``mounter``, ``image_store``
        name: Provider name, as referenced from configuration
        provider: Zero-argument callable returning the subsystem

    Raises:
        ValueError: If the subsystem kind is unknown
    """
    if kind not in _SUBSYSTEM_REGISTRY:
        raise ValueError(
            f"Unknown subsystem kind: {kind}. "
            "Supported kinds: " + ", ".join(SUBSYSTEM_KINDS)
        )
    _SUBSYSTEM_REGISTRY[kind][name] = provider


def get_subsystem_provider(kind: str, name: str) -> Callable[[], Subsystem]:
    """
    Look up a registered subsystem provider.

    Raises:
        ValueError: If the kind or the provider name is unknown
    """
    registry = _get_subsystem_registry()
    if kind not in registry:
        raise ValueError(
            f"Unknown subsystem kind: {kind}. "
            "Supported kinds: " + ", ".join(SUBSYSTEM_KINDS)
        )
    providers = registry[kind]
    if name not in providers:
        raise ValueError(
            f"Unknown {kind} provider: {name}. "
            "Supported providers: " + ", ".join(sorted(providers))
        )
    return providers[name]


def create_subsystem(kind: str, name: str) -> Subsystem:
    """Create a subsystem instance with the named provider."""
    return get_subsystem_provider(kind, name)()


@dataclass
class SubsystemProviders:
    """The three subsystem providers injected into an ``ApplierFactory``."""

    image_service: Callable[[], ImageService]
    mounter: Callable[[], ClusterImageMounter]
    image_store: Callable[[], ImageStore]

    @classmethod
    def from_settings(cls) -> "SubsystemProviders":
        """Build providers from the names configured in settings."""
        return cls(
            image_service=get_subsystem_provider(
                IMAGE_SERVICE, settings.image_service_provider
            ),
            mounter=get_subsystem_provider(MOUNTER, settings.mounter_provider),
            image_store=get_subsystem_provider(
                IMAGE_STORE, settings.image_store_provider
            ),
        )

    def items(self) -> List[Tuple[str, Callable[[], Subsystem]]]:
        """Return (kind, provider) pairs in acquisition order."""
        return [(kind, getattr(self, kind)) for kind in SUBSYSTEM_KINDS]


class ApplierFactory:
    """
    Builds apply drivers from validated clusters.

    The identity check and host validation run before any subsystem is
    acquired, so an invalid cluster never touches the image store or the
    mounter. If one subsystem fails to initialize, the ones already acquired
    for the same call are closed before the error is raised.
    """

    def __init__(self, providers: Optional[SubsystemProviders] = None) -> None:
        self._providers = providers

    @property
    def providers(self) -> SubsystemProviders:
        if self._providers is None:
            self._providers = SubsystemProviders.from_settings()
        return self._providers

    def build(
        self,
        cluster: Cluster,
        action: str,
        mode: str = APPLY_MODE_APPLY,
        cluster_file: Any = None,
    ) -> ApplyDriver:
        """
        Validate a cluster and assemble its apply driver.

        Args:
            cluster: The desired cluster; its env may gain a HostIPFamily entry
            action: Name of the action the driver is built for
            mode: Apply mode, passed through uninterpreted
            cluster_file: The Clusterfile the cluster came from, if any

        Returns:
            The assembled apply driver

        Raises:
            ClusterIdentityError: If the cluster name is empty
            AddressParseError: If a host address is not an IP literal
            MixedFamilyError: If IPv4 and IPv6 hosts are mixed
            SubsystemInitError: If a subsystem cannot be initialized
        """
        if not cluster.name:
            raise ClusterIdentityError()

        host_list = get_ip_list_from_hosts(cluster.spec.hosts)
        family = check_all_hosts_same_family(host_list)
        env = apply_host_ip_family_default(cluster.spec.env, family)

        subsystems = self._acquire_subsystems()

        if env is not cluster.spec.env:
            cluster.spec.env = env

        applier = Applier(
            apply_mode=mode,
            cluster_desired=cluster,
            cluster_file=cluster_file,
            image_manager=subsystems[IMAGE_SERVICE],
            cluster_image_mounter=subsystems[MOUNTER],
            image_store=subsystems[IMAGE_STORE],
            action=action,
        )
        logger.info(
            "Apply driver assembled for cluster %s (action=%s, mode=%s, hosts=%d)",
            cluster.name,
            action,
            mode,
            len(host_list),
        )
        return applier

    def _acquire_subsystems(self) -> Dict[str, Subsystem]:
        acquired: Dict[str, Subsystem] = {}
        for kind, provider in self.providers.items():
            try:
                acquired[kind] = provider()
            except Exception as e:
                logger.error("Failed to initialize %s: %s", kind, e)
                self._release(acquired)
                raise SubsystemInitError(kind, e) from e
            logger.debug("Acquired %s: %s", kind, type(acquired[kind]).__name__)
        return acquired

    @staticmethod
    def _release(acquired: Dict[str, Subsystem]) -> None:
        for kind, subsystem in reversed(list(acquired.items())):
            try:
                subsystem.close()
            except Exception as e:
                logger.warning("Failed to release %s: %s", kind, e)
