"""
Post body formatting helpers.

Bodies are stored with line breaks replaced by an HTML break token so the
stored text renders as typed. The edit form works with plain newlines.
"""
import re

STORAGE_LINE_BREAK = "<br />"
DISPLAY_LINE_BREAK = "\n"

PREVIEW_LENGTH = 400
PREVIEW_MARKER = "..."

_DISPLAY_BREAK_PATTERN = re.compile(r'\r?\n')


def to_storage(text: str) -> str:
    """Rewrite display line breaks (\\n or \\r\\n) to the storage token."""
    if not text:
        return ""
    return _DISPLAY_BREAK_PATTERN.sub(STORAGE_LINE_BREAK, text)


def to_display(text: str) -> str:
    """
    Rewrite storage tokens back to display line breaks.

    Stored bodies do not escape the token, so a literal "<br />" typed by
    the author reads back as a line break.
    """
    if not text:
        return ""
    return text.replace(STORAGE_LINE_BREAK, DISPLAY_LINE_BREAK)


def strip_line_breaks(text: str) -> str:
    """Remove storage tokens and display line breaks without replacing them (previews)."""
    if not text:
        return ""
    return _DISPLAY_BREAK_PATTERN.sub("", text.replace(STORAGE_LINE_BREAK, ""))


def make_preview(text: str, limit: int = PREVIEW_LENGTH) -> str:
    """
    Build a preview of a body in storage or display form.

    Line breaks of either form are stripped first, then the text is cut to
    `limit` characters with PREVIEW_MARKER appended when it was longer.
    """
    preview = strip_line_breaks(text)
    if len(preview) > limit:
        return preview[:limit] + PREVIEW_MARKER
    return preview
