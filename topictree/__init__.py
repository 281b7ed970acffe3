"""
topictree - topic clustering for branching chat conversations.

Groups the messages of a conversation tree into a handful of labeled topics
so long conversations can be navigated by subject.
"""
from topictree.clustering import cluster_conversation_topics
from topictree.core.models import ChatNode, ClusterOptions, Document, MessageRole, TopicCluster

__version__ = "0.1.0"

__all__ = [
    "cluster_conversation_topics",
    "ChatNode",
    "ClusterOptions",
    "Document",
    "MessageRole",
    "TopicCluster",
]
