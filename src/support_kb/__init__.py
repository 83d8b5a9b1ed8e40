"""Lexical knowledge retrieval for a customer-support chat assistant."""

from .config import ChatConfig, InvalidConfiguration, RetrievalConfig
from .retrieval.retriever import KnowledgeRetriever, search_knowledge

__all__ = [
    "ChatConfig",
    "InvalidConfiguration",
    "KnowledgeRetriever",
    "RetrievalConfig",
    "search_knowledge",
]
