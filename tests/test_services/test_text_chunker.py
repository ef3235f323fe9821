"""Tests for transcript chunking."""

import pytest

from services.text_chunker import chunk_text


def test_chunks_reassemble_to_input():
    """Concatenated chunks equal the original text."""
    text = "Kill Tony is a live podcast recorded in Austin. " * 7

    chunks = chunk_text(text, 4)

    assert len(chunks) == 4
    assert "".join(chunks) == text


def test_chunk_size_is_ceiling_of_length():
    """Ten characters in four parts gives sizes 3, 3, 3, 1."""
    assert chunk_text("abcdefghij", 4) == ["abc", "def", "ghi", "j"]


def test_trailing_empty_chunks_dropped():
    """Short text yields fewer chunks than requested."""
    assert chunk_text("abc", 4) == ["a", "b", "c"]
    assert chunk_text("abcde", 4) == ["ab", "cd", "e"]


def test_empty_text_has_no_chunks():
    assert chunk_text("", 4) == []


def test_parts_must_be_positive():
    with pytest.raises(ValueError):
        chunk_text("text", 0)


def test_hundred_characters_four_parts():
    text = "x" * 100

    chunks = chunk_text(text)

    assert len(chunks) == 4
    assert all(len(chunk) <= 25 for chunk in chunks)
    assert "".join(chunks) == text
