"""
Pydantic schemas for API request/response models.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class MessageIn(BaseModel):
    """A message to cluster."""

    id: str
    text: str = ""


class ClusterRequest(BaseModel):
    """Cluster an explicit list of messages."""

    messages: List[MessageIn] = Field(default_factory=list)
    k: Optional[int] = None
    max_vocab: Optional[int] = Field(default=None, ge=0)
    max_terms_per_label: Optional[int] = Field(default=None, ge=0)


class TranscriptRequest(BaseModel):
    """Parse a transcript and cluster its messages."""

    transcript: str
    k: Optional[int] = None
    max_vocab: Optional[int] = Field(default=None, ge=0)
    max_terms_per_label: Optional[int] = Field(default=None, ge=0)


class Cluster(BaseModel):
    """A labeled topic cluster."""

    id: str
    label: str
    terms: List[str] = Field(default_factory=list)
    member_document_ids: List[str] = Field(default_factory=list)
    size: int = 0


class ClustersResponse(BaseModel):
    total_messages: int = 0
    clusters: List[Cluster] = Field(default_factory=list)


class TopicMessage(BaseModel):
    """A cluster member with the branch path that leads to it."""

    id: str
    role: str
    preview: str
    path: List[str] = Field(default_factory=list)


class TopicWithMessages(Cluster):
    messages: List[TopicMessage] = Field(default_factory=list)


class TranscriptTopicsResponse(BaseModel):
    total_messages: int = 0
    root_id: Optional[str] = None
    default_path: List[str] = Field(default_factory=list)
    clusters: List[TopicWithMessages] = Field(default_factory=list)
