import pytest

from support_kb.config import (
    ChatConfig,
    InvalidConfiguration,
    RetrievalConfig,
    create_chat_model,
    load_chat_config,
    load_retrieval_config,
)


def test_retrieval_defaults() -> None:
    config = RetrievalConfig()

    assert config.chunk_size == 600
    assert config.passage_max_chars == 800
    assert config.top_k == 3
    assert config.unknown_source == "unknown document"


@pytest.mark.parametrize("field", ["chunk_size", "passage_max_chars", "top_k"])
def test_non_positive_sizes_are_rejected(field: str) -> None:
    with pytest.raises(InvalidConfiguration):
        RetrievalConfig(**{field: 0})


def test_invalid_configuration_is_a_value_error() -> None:
    assert issubclass(InvalidConfiguration, ValueError)


def test_retrieval_config_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SUPPORT_KB_CHUNK_SIZE", "300")
    monkeypatch.setenv("SUPPORT_KB_TOP_K", "5")
    monkeypatch.delenv("SUPPORT_KB_PASSAGE_MAX_CHARS", raising=False)

    config = load_retrieval_config()

    assert config.chunk_size == 300
    assert config.top_k == 5
    assert config.passage_max_chars == 800


def test_bad_environment_value_fails_fast(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SUPPORT_KB_TOP_K", "0")

    with pytest.raises(InvalidConfiguration):
        load_retrieval_config()


def test_chat_config_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SUPPORT_KB_HISTORY_WINDOW", "4")
    monkeypatch.delenv("SUPPORT_KB_CHAT_MODEL", raising=False)
    monkeypatch.delenv("SUPPORT_KB_TEMPERATURE", raising=False)
    monkeypatch.delenv("SUPPORT_KB_MAX_TOKENS", raising=False)

    config = load_chat_config()

    assert config.history_window == 4
    assert config.model == ChatConfig().model


def test_chat_model_is_none_without_api_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)

    assert create_chat_model() is None


def test_assignment_is_validated() -> None:
    config = RetrievalConfig()

    with pytest.raises(InvalidConfiguration):
        config.passage_max_chars = -1
    assert config.passage_max_chars == 800

    config.top_k = 5
    assert config.top_k == 5


def test_invalid_chat_config_raises_invalid_configuration() -> None:
    with pytest.raises(InvalidConfiguration):
        ChatConfig(history_window=0)
