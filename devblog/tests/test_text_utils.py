"""
Tests for body line-break handling and list previews.
"""

from devblog.utils.text_utils import (
    PREVIEW_MARKER,
    make_preview,
    strip_line_breaks,
    to_display,
    to_storage,
)


def test_to_storage_rewrites_newlines():
    assert to_storage("Hello\nWorld") == "Hello<br />World"
    assert to_storage("a\r\nb") == "a<br />b"


def test_display_round_trip():
    text = "line one\nline two\n\nline four"
    assert to_display(to_storage(text)) == text


def test_to_storage_keeps_existing_tokens():
    assert to_storage("a<br />b") == "a<br />b"


def test_strip_line_breaks_does_not_convert():
    assert strip_line_breaks("Hello<br />World") == "HelloWorld"
    assert strip_line_breaks("Hello\nWorld\r\n") == "HelloWorld"


def test_preview_of_display_text_matches_stored_text():
    assert make_preview("Hello\nWorld") == make_preview(to_storage("Hello\nWorld")) == "HelloWorld"


def test_empty_values():
    assert to_storage("") == ""
    assert to_display(None) == ""
    assert make_preview(None) == ""


def test_preview_truncates_long_body():
    body = "x" * 500
    preview = make_preview(body)
    assert preview == "x" * 400 + PREVIEW_MARKER


def test_preview_keeps_short_body():
    body = "y" * 300
    assert make_preview(body) == body


def test_preview_at_exact_limit_is_unchanged():
    body = "z" * 400
    assert make_preview(body) == body


def test_preview_strips_tokens_before_measuring():
    body = "a" * 398 + "<br />" + "b" * 2
    assert make_preview(body) == "a" * 398 + "bb"


def test_literal_token_in_typed_text_reads_back_as_line_break():
    typed = "use <br /> for breaks"
    assert to_display(to_storage(typed)) == "use \n for breaks"
