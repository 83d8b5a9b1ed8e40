"""Lexical retriever over a caller-supplied corpus snapshot."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from support_kb.config import RetrievalConfig, require_positive
from support_kb.ingest.chunker import ParagraphChunker
from support_kb.obs.tracing import RetrievalTrace, Timer
from support_kb.retrieval.scorer import score
from support_kb.types import (
    MissingContent,
    ScoredPassage,
    TextContent,
    WrongTypeContent,
    classify_content,
)

logger = logging.getLogger(__name__)


class KnowledgeRetriever:
    """Chunks, scores and ranks every document of a corpus against a query.

    The retriever holds only its config; the corpus is passed in on every
    call and is read, never modified. Ties in score keep the order in which
    passages were encountered: document order first, then chunk order within
    a document.
    """

    def __init__(self, config: RetrievalConfig | None = None) -> None:
        self.config = config or RetrievalConfig()
        self._chunker = ParagraphChunker(self.config)

    def retrieve(
        self,
        query: str,
        corpus: Iterable[Any] | None,
        *,
        top_k: int | None = None,
    ) -> list[ScoredPassage]:
        passages, _ = self.retrieve_with_trace(query, corpus, top_k=top_k)
        return passages

    def retrieve_with_trace(
        self,
        query: str,
        corpus: Iterable[Any] | None,
        *,
        top_k: int | None = None,
    ) -> tuple[list[ScoredPassage], RetrievalTrace]:
        limit = require_positive("top_k", self.config.top_k if top_k is None else top_k)
        max_chars = require_positive("passage_max_chars", self.config.passage_max_chars)
        require_positive("chunk_size", self.config.chunk_size)
        documents = list(corpus or [])
        if not documents:
            logger.info("Knowledge base has no processed documents")
            return [], RetrievalTrace(
                query=query,
                documents_scanned=0,
                documents_skipped=0,
                chunks_scored=0,
                matches=0,
                returned=0,
                latency_ms=0.0,
            )

        logger.info("Searching %d documents", len(documents))
        logger.debug("Query: %r", query)

        candidates: list[ScoredPassage] = []
        skipped = 0
        chunks_scored = 0
        with Timer() as timer:
            for document in documents:
                doc_id = str(_field(document, "doc_id", "id") or "")
                source = _field(document, "name") or self.config.unknown_source
                raw = _field(document, "content", "content_text")

                match classify_content(raw):
                    case TextContent(text=text):
                        pass
                    case MissingContent():
                        logger.warning("Skipping document %s: content is empty", source)
                        skipped += 1
                        continue
                    case WrongTypeContent(type_name=type_name):
                        logger.warning(
                            "Skipping document %s: content has type %s", source, type_name
                        )
                        skipped += 1
                        continue

                for chunk in self._chunker.chunk_document(doc_id, source, text):
                    chunks_scored += 1
                    relevance = score(query, chunk.text)
                    if relevance > 0:
                        candidates.append(
                            ScoredPassage(
                                content=chunk.text[:max_chars],
                                source=source,
                                score=relevance,
                                doc_id=doc_id,
                                chunk_id=chunk.chunk_id,
                            )
                        )

            # sorted() is stable, so equal scores keep encounter order.
            ranked = sorted(candidates, key=lambda item: item.score, reverse=True)[:limit]

        logger.info(
            "Found %d relevant passages, returning top %d (%.1f ms)",
            len(candidates),
            limit,
            timer.elapsed_ms,
        )
        trace = RetrievalTrace(
            query=query,
            documents_scanned=len(documents),
            documents_skipped=skipped,
            chunks_scored=chunks_scored,
            matches=len(candidates),
            returned=len(ranked),
            latency_ms=timer.elapsed_ms,
        )
        return ranked, trace


def search_knowledge(
    query: str,
    corpus: Iterable[Any] | None,
    top_k: int | None = None,
    *,
    config: RetrievalConfig | None = None,
) -> list[ScoredPassage]:
    """Return the ``top_k`` passages of ``corpus`` most relevant to ``query``.

    ``top_k`` defaults to ``config.top_k`` (3 when no config is given).
    ``corpus`` holds documents already filtered to completed ones with text,
    either ``KnowledgeDocument`` objects or mappings with ``name`` and
    ``content_text`` keys. An empty corpus or a query that matches nothing
    returns ``[]``.

    Raises:
        InvalidConfiguration: if ``top_k`` or a configured size is not positive.
    """
    return KnowledgeRetriever(config).retrieve(query, corpus, top_k=top_k)


def _field(document: Any, *names: str) -> Any:
    for name in names:
        if isinstance(document, Mapping):
            if name in document:
                return document[name]
        elif hasattr(document, name):
            return getattr(document, name)
    return None
