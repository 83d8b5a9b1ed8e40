"""In-memory knowledge base that hands retrieval a corpus snapshot."""

from __future__ import annotations

from typing import Protocol

from support_kb.types import DocumentStatus, KnowledgeDocument


class KnowledgeBase(Protocol):
    """Minimal document-store contract consumed by the chat layer."""

    def completed_corpus(self) -> list[KnowledgeDocument]:
        """Return completed documents that carry non-empty text."""


class InMemoryKnowledgeBase:
    """Deterministic document store used for tests and local prototyping."""

    def __init__(self) -> None:
        self._store: dict[str, KnowledgeDocument] = {}

    def add(self, document: KnowledgeDocument) -> None:
        if document.doc_id in self._store:
            raise ValueError(f"Document already registered: {document.doc_id}")
        self._store[document.doc_id] = document

    def get(self, doc_id: str) -> KnowledgeDocument:
        document = self._store.get(doc_id)
        if document is None:
            raise KeyError(f"Document not found: {doc_id}")
        return document

    def remove(self, doc_id: str) -> None:
        if self._store.pop(doc_id, None) is None:
            raise KeyError(f"Document not found: {doc_id}")

    def mark_completed(self, doc_id: str, text: str) -> KnowledgeDocument:
        document = self.get(doc_id)
        document.content = text
        document.status = DocumentStatus.COMPLETED
        return document

    def mark_failed(self, doc_id: str) -> KnowledgeDocument:
        document = self.get(doc_id)
        document.status = DocumentStatus.FAILED
        return document

    def completed_corpus(self) -> list[KnowledgeDocument]:
        """Snapshot of completed documents with text, in insertion order."""
        return [
            KnowledgeDocument(
                doc_id=document.doc_id,
                name=document.name,
                content=document.content,
                status=document.status,
            )
            for document in self._store.values()
            if document.status is DocumentStatus.COMPLETED
            and isinstance(document.content, str)
            and document.content != ""
        ]
