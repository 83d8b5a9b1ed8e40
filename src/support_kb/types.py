"""Shared domain models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class DocumentStatus(str, Enum):
    """Lifecycle of an uploaded knowledge-base document."""

    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(slots=True)
class KnowledgeDocument:
    """An uploaded document with its extracted text.

    ``content`` is whatever the storage layer handed over; it is normally a
    string but is not guaranteed to be one.
    """

    doc_id: str
    name: str | None
    content: Any
    status: DocumentStatus = DocumentStatus.PROCESSING


@dataclass(slots=True, frozen=True)
class TextContent:
    text: str


@dataclass(slots=True, frozen=True)
class MissingContent:
    pass


@dataclass(slots=True, frozen=True)
class WrongTypeContent:
    type_name: str


DocumentContent = TextContent | MissingContent | WrongTypeContent


def classify_content(value: Any) -> DocumentContent:
    """Map raw document content onto the text/missing/wrong-type variant."""
    if value is None:
        return MissingContent()
    if not isinstance(value, str):
        return WrongTypeContent(type_name=type(value).__name__)
    if not value:
        return MissingContent()
    return TextContent(text=value)


@dataclass(slots=True)
class DocumentChunk:
    """A passage cut from one document's text."""

    chunk_id: str
    doc_id: str
    source: str
    text: str


@dataclass(slots=True)
class ScoredPassage:
    """A retrieval hit ready for prompt injection."""

    content: str
    source: str
    score: float
    doc_id: str = ""
    chunk_id: str = ""
