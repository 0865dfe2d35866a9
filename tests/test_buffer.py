from __future__ import annotations

import pytest

from acpi_workspace.buffer import (
    Buffer,
    BufferValidationError,
    detect_newline,
    motions,
    split_lines,
)


def make_buffer(text: str = "alpha beta\ngamma\n", *, history: int = 100) -> Buffer:
    return Buffer.from_text(text, name="test.dsl", history_size=history, page_height=2)


def test_split_lines_drops_single_trailing_separator() -> None:
    assert split_lines("a\nb\n") == ["a", "b"]
    assert split_lines("a\r\nb", "\r\n") == ["a", "b"]
    assert split_lines("") == [""]
    assert split_lines("a\n\n") == ["a", ""]


def test_detect_newline_needs_every_break_to_be_crlf() -> None:
    assert detect_newline("a\r\nb\r\n") == "\r\n"
    assert detect_newline("a\r\nb\n") == "\n"
    assert detect_newline("abc") == "\n"


@pytest.mark.parametrize(
    "text",
    ["one\ntwo\n", "one\ntwo", "", "a\r\nb\r\n", "a\r\nb", "a\r\nb\nc\n", "x\n\n"],
)
def test_text_round_trips_byte_for_byte(text: str) -> None:
    assert make_buffer(text).text == text


def test_edits_keep_line_ending_style() -> None:
    buffer = make_buffer("ab\r\ncd")

    buffer.open_line_below()
    buffer.insert_text("x")

    assert buffer.text == "ab\r\nx\r\ncd"


def test_forward_and_back_cross_lines() -> None:
    buffer = make_buffer("ab\ncd\n")
    buffer.set_cursor(0, 2)

    assert buffer.move(motions.forward) == (1, 0)
    assert buffer.move(motions.back) == (0, 2)


def test_vertical_moves_clamp_column() -> None:
    buffer = make_buffer("long line\nab\n")
    buffer.set_cursor(0, 8)

    assert buffer.move(motions.down) == (1, 2)
    assert buffer.move(motions.down) == (1, 2)
    assert buffer.move(motions.up) == (0, 2)


def test_word_motions() -> None:
    buffer = make_buffer("foo.bar baz\nnext\n")

    assert buffer.move(motions.word_forward) == (0, 3)
    assert buffer.move(motions.word_forward) == (0, 4)
    assert buffer.move(motions.word_forward) == (0, 8)
    assert buffer.move(motions.word_forward) == (1, 0)
    assert buffer.move(motions.word_back) == (0, 11)
    assert buffer.move(motions.word_back) == (0, 8)


def test_top_bottom_head_end() -> None:
    buffer = make_buffer("abc\nde\nfghij\n")
    buffer.set_cursor(1, 1)

    assert buffer.move(motions.end) == (1, 2)
    assert buffer.move(motions.head) == (1, 0)
    assert buffer.move(motions.bottom) == (2, 0)
    buffer.set_cursor(2, 4)
    assert buffer.move(motions.top) == (0, 3)


def test_page_moves_use_page_height() -> None:
    buffer = make_buffer("\n".join(str(i) for i in range(6)) + "\n")

    assert buffer.page_down() == (2, 0)
    assert buffer.page_down() == (4, 0)
    assert buffer.page_down() == (5, 0)
    assert buffer.page_up() == (3, 0)


def test_insert_text_and_newline() -> None:
    buffer = make_buffer("ac\n")
    buffer.set_cursor(0, 1)

    buffer.insert_text("b")
    buffer.insert_newline()

    assert buffer.lines == ("ab", "c")
    assert buffer.cursor == (1, 0)


def test_delete_prev_char_joins_at_column_zero() -> None:
    buffer = make_buffer("ab\ncd\n")
    buffer.set_cursor(1, 0)

    assert buffer.delete_prev_char()
    assert buffer.lines == ("abcd",)
    assert buffer.cursor == (0, 2)


def test_delete_next_char_joins_at_line_end() -> None:
    buffer = make_buffer("ab\ncd\n")
    buffer.set_cursor(0, 2)

    assert buffer.delete_next_char()
    assert buffer.lines == ("abcd",)
    assert buffer.cursor == (0, 2)


def test_delete_next_char_on_last_line_end_is_noop() -> None:
    buffer = make_buffer("ab\n")
    buffer.set_cursor(0, 2)

    assert not buffer.delete_next_char()
    assert len(buffer.undo_history) == 0


def test_delete_next_word() -> None:
    buffer = make_buffer("Name (FOO, 1)\nnext\n")

    assert buffer.delete_next_word()
    assert buffer.lines[0] == "(FOO, 1)"

    buffer.set_cursor(0, 8)
    assert buffer.delete_next_word()
    assert buffer.lines == ("(FOO, 1)next",)


def test_open_lines() -> None:
    buffer = make_buffer("one\ntwo\n")
    buffer.set_cursor(0, 2)

    buffer.open_line_below()
    assert buffer.lines == ("one", "", "two")
    assert buffer.cursor == (1, 0)

    buffer.open_line_above()
    assert buffer.lines == ("one", "", "", "two")
    assert buffer.cursor == (1, 0)


def test_transaction_groups_edits_into_one_undo_step() -> None:
    buffer = make_buffer("abc def\n")
    buffer.set_cursor(0, 3)

    with buffer.transaction("clear_line"):
        buffer.delete_to_line_end()
        buffer.delete_to_line_head()

    assert buffer.lines == ("",)
    assert len(buffer.undo_history) == 1
    assert buffer.undo()
    assert buffer.lines == ("abc def",)
    assert buffer.cursor == (0, 3)


def test_undo_without_history_returns_false() -> None:
    buffer = make_buffer()

    assert not buffer.undo()


def test_undo_history_is_bounded() -> None:
    buffer = make_buffer("\n", history=100)

    for _ in range(150):
        buffer.insert_text("x")

    assert len(buffer.undo_history) == 100
    while buffer.undo():
        pass
    assert buffer.lines == ("x" * 50,)


def test_set_cursor_rejects_out_of_range() -> None:
    buffer = make_buffer("ab\n")

    with pytest.raises(BufferValidationError):
        buffer.set_cursor(5, 0)
