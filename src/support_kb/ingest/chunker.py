"""Paragraph-packing chunker with a fixed-width fallback."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from support_kb.config import RetrievalConfig, require_positive
from support_kb.types import DocumentChunk

_PARAGRAPH_SPLIT = re.compile(r"\n{2,}|。\s*")


@dataclass(slots=True)
class _ChunkState:
    parts: list[str] = field(default_factory=list)
    length: int = 0

    def append(self, paragraph: str) -> None:
        if self.parts:
            self.length += 1
        self.parts.append(paragraph)
        self.length += len(paragraph)

    def text(self) -> str:
        return "\n".join(self.parts).strip()


def split_into_chunks(text: object, chunk_size: int = 600) -> list[str]:
    """Split ``text`` into ordered passages of roughly ``chunk_size`` characters.

    Paragraphs (blank-line or ``。`` delimited) are packed into a buffer
    joined by single newlines. The buffer is flushed when the next paragraph
    would push it past ``chunk_size``, so ``chunk_size`` is a soft bound: an
    oversized paragraph becomes a chunk on its own. Text that yields no
    paragraph at all is cut into fixed ``chunk_size`` windows instead.

    Raises:
        InvalidConfiguration: if ``chunk_size`` is not positive.
    """
    require_positive("chunk_size", chunk_size)
    if not isinstance(text, str) or not text:
        return []

    chunks: list[str] = []
    state = _ChunkState()

    for paragraph in _PARAGRAPH_SPLIT.split(text):
        trimmed = paragraph.strip()
        if not trimmed:
            continue

        if state.parts and state.length + len(trimmed) > chunk_size:
            chunks.append(state.text())
            state = _ChunkState()
        state.append(trimmed)

    if state.text():
        chunks.append(state.text())

    if not chunks and text.strip():
        chunks = [text[i : i + chunk_size] for i in range(0, len(text), chunk_size)]

    return chunks


class ParagraphChunker:
    """Cuts a document's text into ``DocumentChunk`` records in document order."""

    def __init__(self, config: RetrievalConfig | None = None) -> None:
        self.config = config or RetrievalConfig()

    def chunk_document(self, doc_id: str, source: str, text: str) -> list[DocumentChunk]:
        return [
            DocumentChunk(
                chunk_id=f"{doc_id}-chunk-{index:04d}",
                doc_id=doc_id,
                source=source,
                text=chunk_text,
            )
            for index, chunk_text in enumerate(
                split_into_chunks(text, self.config.chunk_size)
            )
        ]
