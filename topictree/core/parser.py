"""
Plain-text transcript parser.

Turns a pasted chat log into a linear conversation tree (a single branch).
Supported layouts, tried in order:

1. Explicit roles: a line reading ``user:`` or ``assistant:`` starts a
   message; the following lines are its content.
2. Section separators: ``---`` lines split the text into messages that
   alternate assistant, user, assistant, ...
3. Fallback: the whole text is a single assistant message.
"""
import logging
import re
import uuid
from datetime import datetime
from typing import List, Optional, Tuple

from topictree.core.models import ChatNode, MessageRole

logger = logging.getLogger(__name__)

_USER_MARKER = re.compile(r"^user:\s*$", re.IGNORECASE)
_ASSISTANT_MARKER = re.compile(r"^assistant:\s*$", re.IGNORECASE)
_SECTION_SEPARATOR = re.compile(r"\n\s*---\s*\n")

Block = Tuple[MessageRole, str]


def parse_transcript(text: str) -> Optional[ChatNode]:
    """
    Parse a transcript into a conversation tree.

    Parameters
    ----
    text : str
        Raw transcript text

    Returns
    ----
    ChatNode or None
        Root of a linear tree, or None when the text is blank
    """
    trimmed = (text or "").strip()
    if not trimmed:
        return None

    blocks = _parse_explicit_roles(trimmed)
    layout = "roles"
    if not blocks:
        blocks = _parse_section_separators(trimmed)
        layout = "sections"
    if not blocks:
        blocks = [(MessageRole.ASSISTANT, trimmed)]
        layout = "single"

    logger.debug("Parsed transcript as %s layout: %d messages", layout, len(blocks))
    return _build_tree(blocks)


def _parse_explicit_roles(text: str) -> List[Block]:
    blocks: List[Block] = []
    current_role: Optional[MessageRole] = None
    current_lines: List[str] = []

    def flush():
        if current_role is not None and current_lines:
            blocks.append((current_role, "\n".join(current_lines).strip()))
            current_lines.clear()

    for line in re.split(r"\r?\n", text):
        if _USER_MARKER.match(line):
            flush()
            current_role = MessageRole.USER
        elif _ASSISTANT_MARKER.match(line):
            flush()
            current_role = MessageRole.ASSISTANT
        elif current_role is not None:
            current_lines.append(line)
    flush()
    return blocks


def _parse_section_separators(text: str) -> List[Block]:
    parts = [p.strip() for p in _SECTION_SEPARATOR.split(text)]
    parts = [p for p in parts if p]
    return [
        (MessageRole.ASSISTANT if i % 2 == 0 else MessageRole.USER, content)
        for i, content in enumerate(parts)
    ]


def _build_tree(blocks: List[Block]) -> ChatNode:
    now = datetime.now()
    root: Optional[ChatNode] = None
    parent: Optional[ChatNode] = None

    for role, content in blocks:
        node = ChatNode(
            id=str(uuid.uuid4()),
            role=role,
            content=content,
            parent_id=parent.id if parent else None,
            created_at=now,
        )
        if root is None:
            root = node
        else:
            parent.children.append(node)
        parent = node

    return root
