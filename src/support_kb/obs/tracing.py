"""Timing and per-call retrieval trace records."""

from __future__ import annotations

import time
from dataclasses import dataclass


@dataclass(slots=True)
class RetrievalTrace:
    """Summary of one retrieval call, for logging and chat replies."""

    query: str
    documents_scanned: int
    documents_skipped: int
    chunks_scored: int
    matches: int
    returned: int
    latency_ms: float


class Timer:
    """Simple context timer used by the retriever and chat responder."""

    def __init__(self) -> None:
        self._start = 0.0
        self.elapsed_ms = 0.0

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        return self

    def __exit__(self, exc_type: object, exc: object, tb: object) -> None:
        self.elapsed_ms = (time.perf_counter() - self._start) * 1000.0
