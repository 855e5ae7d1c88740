"""
Clusterfile loading.

A Clusterfile is a multi-document YAML file. Exactly one document has
``kind: Cluster``; the remaining documents (``Config``, ``Plugin`` and so on)
are kept as raw mappings for the components that consume them.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import ValidationError

from applier.errors import ClusterFileLoadError
from applier.models import CLUSTER_KIND, Cluster

logger = logging.getLogger(__name__)

CONFIG_KIND = "Config"
PLUGIN_KIND = "Plugin"

_INT_TAG = "tag:yaml.org,2002:int"
_FLOAT_TAG = "tag:yaml.org,2002:float"


class ClusterFileLoader(yaml.SafeLoader):
    """
    SafeLoader without YAML 1.1 base-60 numbers.

    Plain scalars such as ``2001:0:0:0:0:0:0:1`` stay strings instead of
    being read as sexagesimal integers.
    """


ClusterFileLoader.yaml_implicit_resolvers = {
    first: [
        (tag, regexp) for tag, regexp in resolvers if tag not in (_INT_TAG, _FLOAT_TAG)
    ]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
ClusterFileLoader.add_implicit_resolver(
    _INT_TAG,
    re.compile(
        r"""^(?:[-+]?0b[0-1_]+
        |[-+]?0[0-7_]+
        |[-+]?(?:0|[1-9][0-9_]*)
        |[-+]?0x[0-9a-fA-F_]+)$""",
        re.X,
    ),
    list("-+0123456789"),
)
ClusterFileLoader.add_implicit_resolver(
    _FLOAT_TAG,
    re.compile(
        r"""^(?:[-+]?(?:[0-9][0-9_]*)\.[0-9_]*(?:[eE][-+][0-9]+)?
        |\.[0-9][0-9_]*(?:[eE][-+][0-9]+)?
        |[-+]?\.(?:inf|Inf|INF)
        |\.(?:nan|NaN|NAN))$""",
        re.X,
    ),
    list("-+0123456789."),
)


class ClusterFile:
    """Parsed Clusterfile: the desired cluster plus its companion documents."""

    def __init__(
        self,
        cluster: Cluster,
        documents: Optional[Dict[str, List[Dict[str, Any]]]] = None,
        path: Optional[str] = None,
    ) -> None:
        self._cluster = cluster
        self._documents = documents or {}
        self.path = path

    @classmethod
    def from_cluster(cls, cluster: Cluster) -> ClusterFile:
        """Wrap an in-memory cluster in a Clusterfile with no companions."""
        return cls(cluster)

    @classmethod
    def load(cls, path: str | Path) -> ClusterFile:
        """
        Read and parse a Clusterfile.

        Raises:
            ClusterFileLoadError: If the file cannot be read, is not valid
                YAML, or does not hold exactly one valid Cluster document
        """
        path = str(path)
        try:
            text = Path(path).read_text(encoding="utf-8")
        except OSError as e:
            logger.error("Failed to read Clusterfile %s: %s", path, e)
            raise ClusterFileLoadError(path, str(e)) from e

        return cls.loads(text, path=path)

    @classmethod
    def loads(cls, text: str, path: str = "<memory>") -> ClusterFile:
        """Parse Clusterfile content."""
        try:
            raw_docs = [
                doc
                for doc in yaml.load_all(text, Loader=ClusterFileLoader)
                if doc is not None
            ]
        except yaml.YAMLError as e:
            logger.error("Invalid YAML in Clusterfile %s: %s", path, e)
            raise ClusterFileLoadError(path, f"invalid YAML: {e}") from e

        cluster_docs: List[Dict[str, Any]] = []
        documents: Dict[str, List[Dict[str, Any]]] = {}
        for doc in raw_docs:
            if not isinstance(doc, dict):
                raise ClusterFileLoadError(
                    path, f"expected a mapping document, got {type(doc).__name__}"
                )
            kind = doc.get("kind", "")
            if kind == CLUSTER_KIND:
                cluster_docs.append(doc)
            else:
                documents.setdefault(kind, []).append(doc)

        if len(cluster_docs) != 1:
            raise ClusterFileLoadError(
                path, f"expected exactly one {CLUSTER_KIND} document, found {len(cluster_docs)}"
            )

        try:
            cluster = Cluster.model_validate(cluster_docs[0])
        except ValidationError as e:
            raise ClusterFileLoadError(path, str(e)) from e

        logger.debug(
            "Loaded Clusterfile %s: cluster %s with %d companion documents",
            path,
            cluster.name,
            sum(len(docs) for docs in documents.values()),
        )
        return cls(cluster, documents, path=None if path == "<memory>" else path)

    def get_cluster(self) -> Cluster:
        return self._cluster

    def get_configs(self) -> List[Dict[str, Any]]:
        return list(self._documents.get(CONFIG_KIND, []))

    def get_plugins(self) -> List[Dict[str, Any]]:
        return list(self._documents.get(PLUGIN_KIND, []))

    def get_documents(self, kind: str) -> List[Dict[str, Any]]:
        return list(self._documents.get(kind, []))

    def dump(self) -> str:
        """Render the Clusterfile back to YAML, cluster document first."""
        docs: List[Dict[str, Any]] = [
            self._cluster.model_dump(by_alias=True, exclude_none=True)
        ]
        for kind_docs in self._documents.values():
            docs.extend(kind_docs)
        return yaml.safe_dump_all(docs, sort_keys=False)
