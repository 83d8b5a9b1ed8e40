import re

from support_kb.retrieval.tokenizer import cjk_blocks, tokenize


def test_alnum_tokens_are_lowercased_and_at_least_two_chars() -> None:
    assert tokenize("Hello World 42 a B") == {"hello", "world", "42"}


def test_cjk_run_yields_all_ngrams_up_to_four() -> None:
    tokens = tokenize("忘记密码")

    assert len(tokens) == 10
    assert {"忘", "忘记", "忘记密", "忘记密码", "记密码", "码"} <= tokens


def test_cjk_ngrams_never_exceed_four_characters() -> None:
    tokens = tokenize("一二三四五")

    assert "一二三四" in tokens
    assert "二三四五" in tokens
    assert "一二三四五" not in tokens


def test_single_ideograph_run_contributes_unigram() -> None:
    assert tokenize("a 好 b") == {"好"}


def test_mixed_script_text() -> None:
    assert tokenize("ABC登录x") == {"abc", "登", "录", "登录"}


def test_empty_and_non_string_input_yield_empty_set() -> None:
    assert tokenize("") == set()
    assert tokenize(None) == set()
    assert tokenize(123) == set()


def test_token_shapes_hold_for_mixed_text() -> None:
    text = "Reset your Password 在登录页点击忘记密码, then check e-mail #42!"
    tokens = tokenize(text)

    assert tokens == tokenize(text)
    for token in tokens:
        assert token == token.lower()
        assert re.fullmatch(r"[a-z0-9]{2,}", token) or re.fullmatch(
            r"[一-龥]{1,4}", token
        )


def test_cjk_blocks_splits_on_non_ideographs() -> None:
    assert cjk_blocks("密码忘记了怎么办？请帮忙") == ["密码忘记了怎么办", "请帮忙"]
