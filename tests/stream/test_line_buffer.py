"""
Tests for LineReassembler
"""
import pytest

from a2ui_stream.stream.line_buffer import LineReassembler


def test_partial_line_is_buffered():
    lines = LineReassembler()

    assert list(lines.feed('{"a":')) == []
    assert lines.pending == '{"a":'
    assert list(lines.feed(' 1}\n{"b"')) == ['{"a": 1}']
    assert lines.pending == '{"b"'


def test_multiple_lines_in_one_chunk():
    lines = LineReassembler()
    assert list(lines.feed("one\ntwo\nthree\n")) == ["one", "two", "three"]
    assert lines.pending == ""


def test_blank_lines_are_yielded():
    """The reassembler does not interpret content"""
    lines = LineReassembler()
    assert list(lines.feed("a\n\n  \nb")) == ["a", "", "  "]
    assert lines.pending == "b"


def test_buffer_updated_even_if_not_iterated():
    lines = LineReassembler()
    lines.feed("first\nsec")
    assert lines.pending == "sec"


def test_flush_and_reset():
    lines = LineReassembler()
    list(lines.feed("x\ntail"))

    assert lines.flush() == "tail"
    assert lines.pending == ""

    list(lines.feed("more"))
    lines.reset()
    assert lines.pending == ""


def test_custom_separator():
    lines = LineReassembler(separator="\r\n")
    assert list(lines.feed("a\r\nb\r")) == ["a"]
    assert list(lines.feed("\n")) == ["b"]


def test_empty_separator_rejected():
    with pytest.raises(ValueError):
        LineReassembler(separator="")


@pytest.mark.parametrize("size", [1, 2, 3, 7, 100])
def test_chunking_invariance(size):
    """Output does not depend on where chunks are cut"""
    text = '{"a":1}\n{"b":2}\n\n{"c":3}\npartial'
    lines = LineReassembler()

    collected = []
    for start in range(0, len(text), size):
        collected.extend(lines.feed(text[start:start + size]))

    assert collected == ['{"a":1}', '{"b":2}', "", '{"c":3}']
    assert lines.pending == "partial"
