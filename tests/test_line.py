import pytest

from voider.buffer import Line, SearchDirection
from voider.syntax import NORMAL, RESET_FOREGROUND, Highlight


def test_tabs_expand_to_next_stop() -> None:
    line = Line("a\tb", tab_stop=4)

    assert line.rendered == "a   b"
    assert line.display_width == 5
    assert line.render_column(2) == 4
    assert line.render_column(3) == 5


def test_control_characters_render_as_placeholder() -> None:
    line = Line("a\x01b")

    assert line.rendered == "a?b"
    assert line.display_width == 3


def test_wide_characters_use_two_columns() -> None:
    line = Line("日本")

    assert line.display_width == 4
    assert line.render(0, 4) == "日本"
    assert line.render(0, 3) == "日"
    assert line.render(1, 4) == " 本"


def test_render_window_is_empty_past_the_end() -> None:
    line = Line("abc")

    assert line.render(3, 10) == ""
    assert line.render(1, 2) == "b"


def test_insert_and_delete_clamp_out_of_range_columns() -> None:
    line = Line("ab")

    line.insert_at(10, "c")
    line.delete_at(99)
    line.delete_at(-1)

    assert line.content == "abc"
    assert len(line.highlights) == 3


def test_split_at_keeps_tab_stop() -> None:
    left, right = Line("abc", tab_stop=8).split_at(1)

    assert (left.content, right.content) == ("a", "bc")
    assert right.tab_stop == 8


def test_find_forward_and_backward() -> None:
    line = Line("abcabc")

    assert line.find("bc", 0) == 1
    assert line.find("bc", 2) == 4
    assert line.find("bc", 5) is None
    assert line.find("bc", 4, SearchDirection.BACKWARD) == 1
    assert line.find("bc", 5, SearchDirection.BACKWARD) == 4
    assert line.find("bc", 0, SearchDirection.BACKWARD) is None
    assert line.find("", 0) is None


def test_render_emits_markers_on_classification_change() -> None:
    line = Line("1a2")
    line.apply_highlights(
        [Highlight.NUMBER, Highlight.NONE, Highlight.NUMBER],
        state_in=NORMAL,
        state_out=NORMAL,
    )

    rendered = line.render(0, 3)

    number = Highlight.NUMBER.marker
    assert rendered == f"{number}1{RESET_FOREGROUND}a{number}2{RESET_FOREGROUND}"


def test_edit_resets_highlights() -> None:
    line = Line("12")
    line.apply_highlights(
        [Highlight.NUMBER, Highlight.NUMBER], state_in=NORMAL, state_out=NORMAL
    )
    assert line.is_highlighted

    line.insert_at(2, "3")

    assert not line.is_highlighted
    assert line.highlights == (Highlight.NONE,) * 3
    assert line.needs_highlight(NORMAL)


def test_apply_highlights_rejects_wrong_length() -> None:
    line = Line("abc")

    with pytest.raises(ValueError):
        line.apply_highlights([Highlight.NONE], state_in=NORMAL, state_out=NORMAL)


def test_tab_stop_must_be_positive() -> None:
    with pytest.raises(ValueError):
        Line("x", tab_stop=0)
