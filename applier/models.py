from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


# Apply mode constants
APPLY_MODE_APPLY = "apply"
APPLY_MODE_LOAD_IMAGE = "loadImage"

# Reserved cluster environment key recording the host IP family
ENV_HOST_IP_FAMILY = "HostIPFamily"
IPV6_MARKER = "IPv6"

# Annotation recording the Clusterfile a cluster was loaded from
CLUSTERFILE_NAME_ANNOTATION = "ClusterfileName"

CLUSTER_API_VERSION = "sealer.io/v2"
CLUSTER_KIND = "Cluster"


class AddressFamily(str, Enum):
    """Address family of a single host address."""

    IPV4 = "IPv4"
    IPV6 = "IPv6"
    INVALID = "Invalid"


class SSH(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    user: Optional[str] = Field(None, description="SSH user")
    passwd: Optional[str] = Field(None, description="SSH password")
    pk: Optional[str] = Field(None, description="Path to the private key")
    pk_passwd: Optional[str] = Field(
        None, alias="pkPasswd", description="Private key passphrase"
    )
    port: Optional[int] = Field(22, gt=0, le=65535, description="SSH port")


class Host(BaseModel):
    model_config = ConfigDict(extra="forbid")

    # Addresses are kept as raw strings; family checks happen at driver build time
    ips: List[str] = Field(default_factory=list, description="Host addresses")
    roles: List[str] = Field(
        default_factory=list, description="Roles, e.g. 'master', 'node'"
    )
    ssh: Optional[SSH] = Field(None, description="Per-host SSH override")
    env: List[str] = Field(
        default_factory=list, description="Per-host env in KEY=VALUE form"
    )


class ClusterSpec(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    image: str = Field("", description="Cluster image reference")
    hosts: List[Host] = Field(default_factory=list, description="Cluster hosts")
    env: List[str] = Field(
        default_factory=list, description="Cluster env in KEY=VALUE form"
    )
    ssh: Optional[SSH] = Field(None, description="Default SSH settings")
    cmd_args: List[str] = Field(
        default_factory=list, alias="cmdArgs", description="Extra command arguments"
    )


class ObjectMeta(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str = Field("", description="Cluster name")
    annotations: Dict[str, str] = Field(default_factory=dict)


class Cluster(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    api_version: str = Field(CLUSTER_API_VERSION, alias="apiVersion")
    kind: str = Field(CLUSTER_KIND)
    metadata: ObjectMeta = Field(default_factory=ObjectMeta)
    spec: ClusterSpec = Field(default_factory=ClusterSpec)
    # Observed state written by the apply engine; carried through untouched
    status: Optional[Dict[str, Any]] = Field(None)

    @property
    def name(self) -> str:
        return self.metadata.name

    def get_annotation(self, key: str) -> str:
        """Return the annotation value for key, or an empty string."""
        return self.metadata.annotations.get(key, "")

    def set_annotation(self, key: str, value: str) -> None:
        self.metadata.annotations[key] = value
