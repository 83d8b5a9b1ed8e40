"""System-prompt construction from retrieved knowledge passages."""

from __future__ import annotations

from collections.abc import Sequence

from support_kb.types import ScoredPassage

PASSAGE_SEPARATOR = "\n\n---\n\n"

BASE_SYSTEM_PROMPT = "你是一个智能客服助手，请用中文回答用户的问题。请保持回答简洁、准确、友好。"

KNOWLEDGE_SYSTEM_PROMPT = """
你是一个智能客服助手。请优先根据以下知识库内容来回答用户的问题。如果知识库中没有相关信息，请根据你的知识自主回答。回答请使用中文，保持简洁、准确、友好。

知识库参考内容：
{context}
""".strip()


def format_passage(passage: ScoredPassage) -> str:
    return f"[source: {passage.source}]\n{passage.content}"


def build_knowledge_context(passages: Sequence[ScoredPassage]) -> str:
    """Render passages under ``[source: <name>]`` headings, separated by ``---``."""
    return PASSAGE_SEPARATOR.join(format_passage(passage) for passage in passages)


def build_system_prompt(passages: Sequence[ScoredPassage]) -> str:
    """Build the system instruction, falling back to general knowledge when empty."""
    if not passages:
        return BASE_SYSTEM_PROMPT
    return KNOWLEDGE_SYSTEM_PROMPT.format(context=build_knowledge_context(passages))
