"""
Topic navigation over a conversation tree.

Clusters every message of a tree and maps cluster members back to nodes and
to the branch path that leads to them, so a caller can jump a thread view to
any message of a topic.
"""
from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from topictree.clustering import cluster_conversation_topics
from topictree.core.config import MAX_CLUSTERS, MIN_CLUSTERS, PREVIEW_LENGTH
from topictree.core.models import ChatNode, ClusterOptions, TopicCluster
from topictree.core.tree import flatten_nodes, get_branch_path_to_node

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")

INITIAL_K_CAP = 6


def preview(text: str, limit: int = PREVIEW_LENGTH) -> str:
    """Single-line preview: whitespace collapsed, cut at ``limit`` with an ellipsis."""
    one = _WHITESPACE.sub(" ", text or "").strip()
    return one[:limit] + "…" if len(one) > limit else one


def initial_k(num_messages: int) -> int:
    """Starting cluster count for a conversation of ``num_messages``."""
    return min(INITIAL_K_CAP, max(MIN_CLUSTERS, int(math.floor(math.sqrt(num_messages / 2) + 0.5))))


def max_k(num_messages: int) -> int:
    """Largest selectable cluster count."""
    return min(MAX_CLUSTERS, max(MIN_CLUSTERS, num_messages))


@dataclass
class TopicEntry:
    """A cluster member resolved to its node and jump path."""

    node: ChatNode
    path: List[str]
    preview: str

    def to_dict(self) -> Dict[str, object]:
        return {
            "id": self.node.id,
            "role": self.node.role.value,
            "preview": self.preview,
            "path": list(self.path),
        }


@dataclass
class TopicView:
    """A cluster together with its resolved members."""

    cluster: TopicCluster
    entries: List[TopicEntry] = field(default_factory=list)

    @property
    def size(self) -> int:
        return len(self.cluster.member_document_ids)

    def to_dict(self) -> Dict[str, object]:
        data = self.cluster.to_dict()
        data["size"] = self.size
        data["messages"] = [e.to_dict() for e in self.entries]
        return data


class TopicNavigator:
    """
    Clusters the messages of one conversation tree.

    Parameters
    ----
    root : ChatNode
        Root of the conversation
    """

    def __init__(self, root: ChatNode):
        self.root = root
        self.nodes = flatten_nodes(root)
        self._by_id = {n.id: n for n in self.nodes}

    @property
    def default_k(self) -> int:
        return initial_k(len(self.nodes))

    def clusters(
        self,
        k: Optional[int] = None,
        options: Optional[ClusterOptions] = None,
    ) -> List[TopicCluster]:
        """Cluster all messages; ``k`` defaults to the initial slider position."""
        opts = options or ClusterOptions()
        if k is not None or opts.k is None:
            opts = opts.model_copy(update={"k": k if k is not None else self.default_k})
        logger.debug("Clustering %d messages with k=%s", len(self.nodes), opts.k)
        return cluster_conversation_topics(self.nodes, opts)

    def members(self, cluster: TopicCluster) -> List[ChatNode]:
        """Nodes of a cluster in member order; unknown ids are skipped."""
        return [self._by_id[i] for i in cluster.member_document_ids if i in self._by_id]

    def jump_path(self, node_id: str) -> Optional[List[str]]:
        """Branch path that brings ``node_id`` into view, or None if unknown."""
        return get_branch_path_to_node(self.root, node_id)

    def topic_views(
        self,
        k: Optional[int] = None,
        options: Optional[ClusterOptions] = None,
        preview_length: int = PREVIEW_LENGTH,
    ) -> List[TopicView]:
        views = []
        for cluster in self.clusters(k=k, options=options):
            entries = []
            for node in self.members(cluster):
                path = self.jump_path(node.id) or [node.id]
                entries.append(TopicEntry(node=node, path=path, preview=preview(node.content, preview_length)))
            views.append(TopicView(cluster=cluster, entries=entries))
        return views
