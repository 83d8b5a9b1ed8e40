"""Knowledge-augmented chat turn around an external chat model."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Literal

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage

from support_kb.chat.prompt import build_system_prompt
from support_kb.config import ChatConfig
from support_kb.obs.tracing import Timer
from support_kb.retrieval.retriever import KnowledgeRetriever
from support_kb.retrieval.store import KnowledgeBase

logger = logging.getLogger(__name__)

WELCOME_MESSAGE = "您好！我是您的智能客服助手。我已经准备好基于知识库为您提供解答。请问有什么可以帮您？"
MODEL_ERROR_REPLY = "抱歉，我暂时无法回答您的问题，请稍后重试。"
EMPTY_REPLY = "抱歉，我暂时无法生成回复，请稍后重试。"


@dataclass(slots=True)
class ChatMessage:
    """One stored turn of a conversation."""

    role: Literal["user", "assistant"]
    content: str


@dataclass(slots=True)
class ChatReply:
    """Outcome of one chat turn."""

    answer: str
    knowledge_used: bool
    sources: list[str] = field(default_factory=list)
    latency_ms: float = 0.0


class ChatResponder:
    """Answers a user message with retrieved passages injected as system context.

    Steps per turn:
    1. Retrieve passages from the knowledge base's completed-document snapshot.
    2. Build the system prompt (knowledge context, or the plain instruction).
    3. Send the system prompt plus the last ``history_window`` messages.
    4. Replace a failed or empty model reply with a fixed apology.
    """

    def __init__(
        self,
        *,
        llm: Any,
        knowledge_base: KnowledgeBase,
        retriever: KnowledgeRetriever | None = None,
        config: ChatConfig | None = None,
    ) -> None:
        self.llm = llm
        self.knowledge_base = knowledge_base
        self.retriever = retriever or KnowledgeRetriever()
        self.config = config or ChatConfig()

    def start_conversation(self) -> ChatMessage:
        """Greeting posted as the first assistant message of a new conversation."""
        return ChatMessage(role="assistant", content=WELCOME_MESSAGE)

    def title_for(self, first_message: str) -> str:
        return derive_conversation_title(first_message, self.config.title_max_chars)

    def reply(
        self,
        question: str,
        *,
        history: Sequence[ChatMessage] | None = None,
    ) -> ChatReply:
        with Timer() as timer:
            passages = self.retriever.retrieve(
                question, self.knowledge_base.completed_corpus()
            )
            system_prompt = build_system_prompt(passages)

            messages: list[BaseMessage] = [SystemMessage(content=system_prompt)]
            window = [*(history or []), ChatMessage(role="user", content=question)]
            messages.extend(_to_langchain(m) for m in window[-self.config.history_window :])

            answer = self._invoke(messages)

        sources: list[str] = []
        for passage in passages:
            if passage.source not in sources:
                sources.append(passage.source)

        return ChatReply(
            answer=answer,
            knowledge_used=bool(passages),
            sources=sources,
            latency_ms=timer.elapsed_ms,
        )

    def _invoke(self, messages: list[BaseMessage]) -> str:
        if self.llm is None:
            logger.warning("No chat model configured")
            return MODEL_ERROR_REPLY
        try:
            response = self.llm.invoke(messages)
        except Exception:
            logger.exception("Chat model call failed")
            return MODEL_ERROR_REPLY

        content = getattr(response, "content", response)
        if not isinstance(content, str) or not content.strip():
            logger.warning("Chat model returned an empty reply")
            return EMPTY_REPLY
        return content


def derive_conversation_title(first_message: str, max_chars: int = 20) -> str:
    """Title a conversation after its first user message."""
    if len(first_message) > max_chars:
        return first_message[:max_chars] + "..."
    return first_message


def _to_langchain(message: ChatMessage) -> BaseMessage:
    if message.role == "assistant":
        return AIMessage(content=message.content)
    return HumanMessage(content=message.content)
