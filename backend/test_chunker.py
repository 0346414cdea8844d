"""
チャンク分割のテスト
"""
import pytest

from qagen.docs.chunker import (
    segment,
    split_by_headings,
    split_by_paragraphs,
    split_into_sections,
    split_whole,
)
from qagen.docs.models import Chunk, count_words

SAMPLE = """Intro line before any heading.

# Install

Run the installer.
## Configure
Edit the config file.



Then restart.
### Details
Deep detail.
"""


def _texts(chunks):
    return [c.text for c in chunks]


def test_count_words_splits_on_any_whitespace():
    assert count_words("") == 0
    assert count_words("  one\ttwo\n\nthree  ") == 3
    assert Chunk(text="a b c").word_count == 3


def test_whole_returns_single_chunk():
    chunks = split_whole(SAMPLE)
    assert _texts(chunks) == [SAMPLE]


def test_headings_start_new_chunks_with_leading_chunk():
    chunks = split_by_headings(SAMPLE)
    texts = _texts(chunks)
    assert len(texts) == 4
    assert texts[0].startswith("Intro line")
    assert texts[1].startswith("# Install")
    assert texts[2].startswith("## Configure")
    assert texts[3].startswith("### Details")
    assert [c.index for c in chunks] == [0, 1, 2, 3]


def test_heading_marker_without_space_counts():
    text = "#Title\nbody\n#Other\nmore\n"
    assert _texts(split_by_headings(text)) == ["#Title\nbody\n", "#Other\nmore\n"]


def test_sections_split_only_on_top_level_headings():
    texts = _texts(split_into_sections(SAMPLE))
    assert len(texts) == 3
    assert texts[1].startswith("# Install")
    assert texts[2].startswith("## Configure")
    assert "### Details" in texts[2]


def test_paragraphs_need_two_blank_lines():
    text = "first para\n\nstill first\n\n\nsecond para\n"
    texts = _texts(split_by_paragraphs(text))
    assert texts == ["first para\n\nstill first\n\n\n", "second para\n"]


def test_no_break_returns_whole_text():
    text = "just one line"
    assert _texts(split_by_headings(text)) == [text]
    assert _texts(split_by_paragraphs(text)) == [text]
    assert _texts(split_into_sections(text)) == [text]


def test_empty_and_blank_text_still_yield_one_chunk():
    assert _texts(split_by_headings("")) == [""]
    assert _texts(split_by_paragraphs("   \n\n\n  ")) == ["   \n\n\n  "]


def test_whitespace_only_material_is_folded_into_neighbours():
    text = "\n\n# A\nalpha\n\n\n\n# B\nbeta\n\n\n"
    for splitter in (split_by_headings, split_by_paragraphs, split_into_sections):
        chunks = splitter(text)
        assert all(c.text.strip() for c in chunks)
        assert "".join(_texts(chunks)) == text


@pytest.mark.parametrize("text", [
    SAMPLE,
    "no trailing newline\n# H\nend",
    "a\r\n\r\n\r\nb\r\n# c\r\n",
    "# only heading",
    "\n\n\n",
])
@pytest.mark.parametrize("strategy", ["whole", "section", "heading", "paragraph"])
def test_concatenation_reproduces_text(text, strategy):
    chunks = segment(text, strategy)
    assert chunks
    assert "".join(_texts(chunks)) == text


def test_unknown_strategy():
    with pytest.raises(ValueError):
        segment("text", "sentence")
