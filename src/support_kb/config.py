"""Configuration models for the knowledge-retrieval engine and chat layer."""

from __future__ import annotations

import os
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError


class InvalidConfiguration(ValueError):
    """Raised when a retrieval or chat setting cannot be honoured."""


class _Settings(BaseModel):
    """Validates on construction and on assignment, failing as ``InvalidConfiguration``."""

    model_config = ConfigDict(validate_assignment=True)

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except ValidationError as exc:
            raise InvalidConfiguration(str(exc)) from exc

    def __setattr__(self, name: str, value: Any) -> None:
        try:
            super().__setattr__(name, value)
        except ValidationError as exc:
            raise InvalidConfiguration(str(exc)) from exc


class RetrievalConfig(_Settings):
    """Configures chunking, passage truncation and result count."""

    chunk_size: int = Field(default=600, ge=1)
    passage_max_chars: int = Field(default=800, ge=1)
    top_k: int = Field(default=3, ge=1)
    unknown_source: str = Field(default="unknown document", min_length=1)


class ChatConfig(_Settings):
    """Configures chat history windowing, titles and model call parameters."""

    history_window: int = Field(default=10, ge=1)
    title_max_chars: int = Field(default=20, ge=1)
    model: str = Field(default="glm-4-flash", min_length=1)
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    max_tokens: int = Field(default=2048, ge=1)


def require_positive(name: str, value: int) -> int:
    """Fail fast on a non-positive size or count passed at call time."""
    if value <= 0:
        raise InvalidConfiguration(f"{name} must be > 0, got {value}")
    return value


def load_retrieval_config() -> RetrievalConfig:
    overrides: dict[str, Any] = {}
    for field_name, env_name in (
        ("chunk_size", "SUPPORT_KB_CHUNK_SIZE"),
        ("passage_max_chars", "SUPPORT_KB_PASSAGE_MAX_CHARS"),
        ("top_k", "SUPPORT_KB_TOP_K"),
    ):
        raw = os.getenv(env_name)
        if raw is not None:
            overrides[field_name] = raw
    return RetrievalConfig(**overrides)


def load_chat_config() -> ChatConfig:
    overrides: dict[str, Any] = {}
    for field_name, env_name in (
        ("history_window", "SUPPORT_KB_HISTORY_WINDOW"),
        ("model", "SUPPORT_KB_CHAT_MODEL"),
        ("temperature", "SUPPORT_KB_TEMPERATURE"),
        ("max_tokens", "SUPPORT_KB_MAX_TOKENS"),
    ):
        raw = os.getenv(env_name)
        if raw is not None:
            overrides[field_name] = raw
    return ChatConfig(**overrides)


def create_chat_model(config: ChatConfig | None = None) -> Any:
    """Build the remote chat model, or return ``None`` when no key is configured."""
    api_key = os.getenv("OPENAI_API_KEY")
    if not api_key:
        return None

    from langchain_openai import ChatOpenAI

    settings = config or load_chat_config()
    return ChatOpenAI(
        model=settings.model,
        temperature=settings.temperature,
        max_tokens=settings.max_tokens,
        base_url=os.getenv("OPENAI_BASE_URL"),
    )
