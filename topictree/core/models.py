"""
Domain models for topic clustering.

These models describe conversation messages, the documents handed to the
clustering engine, and the labeled clusters it returns.

All models use Pydantic for validation, serialization, and type safety.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from topictree.core.config import DEFAULT_MAX_TERMS_PER_LABEL, DEFAULT_MAX_VOCAB


class MessageRole(str, Enum):
    """Message role types."""

    USER = "user"
    ASSISTANT = "assistant"


class ChatNode(BaseModel):
    """
    A single message in a branching conversation.

    Each node owns its children; a conversation is referenced by its root node.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    id: str
    role: MessageRole = MessageRole.USER
    content: str = ""
    parent_id: Optional[str] = None
    children: List["ChatNode"] = Field(default_factory=list)
    created_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary (children included)."""
        return {
            "id": self.id,
            "role": self.role.value,
            "content": self.content,
            "parent_id": self.parent_id,
            "children": [c.to_dict() for c in self.children],
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


ChatNode.model_rebuild()


class Document(BaseModel):
    """A piece of text to cluster, identified by an opaque id."""

    model_config = ConfigDict(frozen=True)

    # passed through untouched into TopicCluster.member_document_ids
    id: Any
    text: str = ""


class ClusterOptions(BaseModel):
    """
    Options for a clustering call.

    ``k`` is the requested number of clusters; when omitted it is derived from
    the number of documents. It is clamped, never rejected.
    """

    k: Optional[int] = None
    max_vocab: int = Field(default=DEFAULT_MAX_VOCAB, ge=0)
    max_terms_per_label: int = Field(default=DEFAULT_MAX_TERMS_PER_LABEL, ge=0)


class TopicCluster(BaseModel):
    """A labeled group of documents sharing vocabulary."""

    id: str
    label: str
    terms: List[str] = Field(default_factory=list)
    member_document_ids: List[Any] = Field(default_factory=list)

    @property
    def size(self) -> int:
        """Number of member documents."""
        return len(self.member_document_ids)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "terms": list(self.terms),
            "member_document_ids": list(self.member_document_ids),
        }
