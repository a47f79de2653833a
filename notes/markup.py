"""Escaping for note text rendered into HTML."""

from __future__ import annotations

from typing import Any

_HTML_ESCAPES = str.maketrans(
    {
        "&": "&amp;",
        "<": "&lt;",
        ">": "&gt;",
        '"': "&quot;",
        "'": "&#039;",
    }
)


def escape_html(text: Any) -> Any:
    """Escape ``& < > " '`` so note text cannot inject markup.

    Non-string values are returned unchanged.
    """
    if not isinstance(text, str):
        return text
    return text.translate(_HTML_ESCAPES)
