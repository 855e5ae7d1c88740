"""
Errors raised while constructing a cluster apply driver.

Every failure on the construction path is one of these types, so callers can
tell an invalid cluster apart from an environment problem without parsing
messages.
"""

from typing import Optional, Sequence


class ApplierError(Exception):
    """Base class for all driver construction errors."""


class ClusterIdentityError(ApplierError):
    """Raised when the cluster has no name."""

    def __init__(self, message: str = "cluster name cannot be empty"):
        super().__init__(message)


class SubsystemInitError(ApplierError):
    """
    Raised when one of the injected subsystems cannot be acquired.

    The failing subsystem is recorded in ``subsystem`` (one of
    ``image_service``, ``mounter``, ``image_store``) and the original
    exception in ``cause``.
    """

    def __init__(self, subsystem: str, cause: Optional[BaseException] = None):
        self.subsystem = subsystem
        self.cause = cause
        message = f"failed to initialize {subsystem}"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)


class AddressParseError(ApplierError):
    """Raised when a host address is not a valid IPv4 or IPv6 literal."""

    def __init__(self, address: str, index: Optional[int] = None):
        self.address = address
        self.index = index
        message = f"failed to parse {address} as a valid ip"
        if index is not None:
            message += f" (host #{index})"
        super().__init__(message)


class MixedFamilyError(ApplierError):
    """Raised when the host list mixes IPv4 and IPv6 addresses."""

    def __init__(self, hosts: Sequence[str]):
        self.hosts = list(hosts)
        super().__init__(
            "all hosts must be in same ip family, but the node list given "
            f"are mixed with ipv4 and ipv6: {self.hosts}"
        )


class PathResolutionError(ApplierError):
    """Raised when a relative Clusterfile path cannot be made absolute."""

    def __init__(self, path: str, cause: Optional[BaseException] = None):
        self.path = path
        self.cause = cause
        message = f"failed to resolve path {path}"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)


class ClusterFileLoadError(ApplierError):
    """Raised when a Clusterfile cannot be read or does not describe a cluster."""

    def __init__(self, path: str, details: str = ""):
        self.path = path
        self.details = details
        message = f"failed to load Clusterfile {path}"
        if details:
            message += f": {details}"
        super().__init__(message)
