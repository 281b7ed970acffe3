"""
Topic clustering API routes.
"""

import logging

from fastapi import APIRouter

from topictree.api.schemas import (
    Cluster,
    ClusterRequest,
    ClustersResponse,
    TopicWithMessages,
    TranscriptRequest,
    TranscriptTopicsResponse,
)
from topictree.clustering import cluster_conversation_topics
from topictree.core.config import get_max_terms_per_label, get_max_vocab
from topictree.core.models import ClusterOptions, Document
from topictree.core.parser import parse_transcript
from topictree.core.tree import get_default_path
from topictree.services.topic_navigator import TopicNavigator

logger = logging.getLogger(__name__)

router = APIRouter()


def _options(request) -> ClusterOptions:
    """Request options, with TOPICTREE_* environment defaults for omitted caps."""
    return ClusterOptions(
        k=request.k,
        max_vocab=request.max_vocab if request.max_vocab is not None else get_max_vocab(),
        max_terms_per_label=(
            request.max_terms_per_label
            if request.max_terms_per_label is not None
            else get_max_terms_per_label()
        ),
    )


@router.post("/topics", response_model=ClustersResponse)
def cluster_messages(request: ClusterRequest):
    """
    Cluster an ordered list of messages.

    Messages with blank text are ignored; ``total_messages`` counts the ones
    that were clustered.
    """
    docs = [Document(id=m.id, text=m.text) for m in request.messages]
    options = _options(request)
    clusters = cluster_conversation_topics(docs, options)
    logger.info("Clustered %d messages into %d topics", len(docs), len(clusters))
    return ClustersResponse(
        total_messages=sum(c.size for c in clusters),
        clusters=[Cluster(**c.to_dict(), size=c.size) for c in clusters],
    )


@router.post("/transcripts/topics", response_model=TranscriptTopicsResponse)
def cluster_transcript(request: TranscriptRequest):
    """Parse a pasted transcript and return its topics with jump paths."""
    root = parse_transcript(request.transcript)
    if root is None:
        return TranscriptTopicsResponse()

    navigator = TopicNavigator(root)
    views = navigator.topic_views(k=request.k, options=_options(request))
    return TranscriptTopicsResponse(
        total_messages=len(navigator.nodes),
        root_id=root.id,
        default_path=get_default_path(root),
        clusters=[TopicWithMessages(**v.to_dict()) for v in views],
    )
