import re

import pytest

from support_kb.config import InvalidConfiguration, RetrievalConfig
from support_kb.ingest.chunker import ParagraphChunker, split_into_chunks


def test_paragraphs_are_packed_with_single_newlines() -> None:
    assert split_into_chunks("Para one.\n\n\nPara two.") == ["Para one.\nPara two."]


def test_cjk_full_stop_is_a_paragraph_boundary() -> None:
    assert split_into_chunks("第一句。 第二句。") == ["第一句\n第二句"]


def test_buffer_flushes_when_next_paragraph_overflows() -> None:
    text = "\n\n".join(["a" * 300, "b" * 300, "c" * 300])

    chunks = split_into_chunks(text, chunk_size=600)

    assert chunks == ["a" * 300 + "\n" + "b" * 300, "c" * 300]


def test_oversized_paragraph_is_kept_whole() -> None:
    assert split_into_chunks("x" * 1000, chunk_size=600) == ["x" * 1000]


def test_fixed_width_fallback_when_no_paragraph_survives() -> None:
    assert split_into_chunks("。。。", chunk_size=2) == ["。。", "。"]


def test_empty_whitespace_and_non_string_input() -> None:
    assert split_into_chunks("") == []
    assert split_into_chunks("   \n\n  ") == []
    assert split_into_chunks(None) == []


@pytest.mark.parametrize("chunk_size", [0, -5])
def test_non_positive_chunk_size_fails_fast(chunk_size: int) -> None:
    with pytest.raises(InvalidConfiguration):
        split_into_chunks("some text", chunk_size=chunk_size)


def test_chunks_cover_all_paragraph_text_in_order() -> None:
    text = (
        "退货政策说明。七天内可无理由退货。\n\n"
        + "Refund requests are reviewed within two days.\n\n" * 20
        + "如有疑问请联系客服。"
    )
    chunks = split_into_chunks(text, chunk_size=120)

    assert len(chunks) > 1
    assert re.sub(r"\s|。", "", "".join(chunks)) == re.sub(r"\s|。", "", text)


def test_chunker_stamps_ids_in_document_order() -> None:
    chunker = ParagraphChunker(RetrievalConfig(chunk_size=10))

    chunks = chunker.chunk_document("doc-1", "FAQ", "alpha beta\n\ngamma delta")

    assert [chunk.chunk_id for chunk in chunks] == ["doc-1-chunk-0000", "doc-1-chunk-0001"]
    assert [chunk.text for chunk in chunks] == ["alpha beta", "gamma delta"]
    assert all(chunk.source == "FAQ" for chunk in chunks)
