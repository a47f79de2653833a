"""Tests for notes.markup and the card markup in ui.components.preview."""

from __future__ import annotations

import pytest

from notes.markup import escape_html
from notes.models import ChecklistItem, ChecklistNote, TextNote
from ui.components.preview import (
    PREVIEW_ITEMS,
    card_html,
    completion_label,
    format_timestamp,
    literal_markdown,
)

STAMP = "2025-03-04T09:30:00+00:00"


class TestEscapeHtml:
    def test_escapes_all_five(self) -> None:
        assert escape_html("<a href=\"x\">Tom & Jerry's</a>") == (
            "&lt;a href=&quot;x&quot;&gt;Tom &amp; Jerry&#039;s&lt;/a&gt;"
        )

    def test_ampersand_escaped_once(self) -> None:
        assert escape_html("&lt;") == "&amp;lt;"

    @pytest.mark.parametrize("value", [None, 3, ["<b>"]])
    def test_non_strings_pass_through(self, value) -> None:
        assert escape_html(value) is value


class TestFormatTimestamp:
    def test_iso(self) -> None:
        assert format_timestamp(STAMP) == "Mar 4, 2025 at 09:30"

    def test_zulu_suffix(self) -> None:
        assert format_timestamp("2024-12-25T18:05:00.000Z") == "Dec 25, 2024 at 18:05"

    def test_unparseable_returned_as_is(self) -> None:
        assert format_timestamp("yesterday") == "yesterday"

    def test_unparseable_markup_is_escaped(self) -> None:
        assert format_timestamp("<b>soon</b>") == "&lt;b&gt;soon&lt;/b&gt;"


class TestLiteralMarkdown:
    def test_plain_text_unchanged(self) -> None:
        assert literal_markdown("milk and eggs") == "milk and eggs"

    def test_emphasis_escaped(self) -> None:
        assert literal_markdown("**bold** _it_") == r"\*\*bold\*\* \_it\_"

    def test_link_escaped(self) -> None:
        assert literal_markdown("[a](b)") == r"\[a\]\(b\)"

    def test_html_and_heading_escaped(self) -> None:
        assert literal_markdown("# <b>") == r"\# \<b\>"


class TestCardHtml:
    def test_text_note_escaped(self) -> None:
        note = TextNote(
            id=1,
            title="<script>alert(1)</script>",
            content="a < b",
            created_at=STAMP,
            updated_at=STAMP,
        )
        html = card_html(note)
        assert "<script>" not in html
        assert "&lt;script&gt;" in html
        assert "a &lt; b" in html
        assert "5 characters" in html
        assert "Mar 4, 2025 at 09:30" in html

    def test_unparseable_timestamp_escaped(self) -> None:
        note = TextNote(id=1, title="t", updated_at="<img src=x onerror=alert(1)>")
        html = card_html(note)
        assert "<img" not in html
        assert "&lt;img src=x onerror=alert(1)&gt;" in html

    def test_empty_text_note(self) -> None:
        note = TextNote(id=1, title="t", updated_at=STAMP)
        assert "Empty note" in card_html(note)

    def test_empty_checklist(self) -> None:
        note = ChecklistNote(id=2, title="t", updated_at=STAMP)
        assert "No items" in card_html(note)

    def test_checklist_preview_truncated(self) -> None:
        items = [ChecklistItem(text=f"item {i}", completed=i < 2) for i in range(6)]
        note = ChecklistNote(id=2, title="t", content=items, updated_at=STAMP)
        html = card_html(note)
        assert f"item {PREVIEW_ITEMS - 1}" in html
        assert f"item {PREVIEW_ITEMS}" not in html
        assert "+ 2 more items" in html
        assert "2/6 completed" in html

    def test_completion_label(self) -> None:
        note = ChecklistNote(
            id=2,
            title="t",
            content=[ChecklistItem(text="a", completed=True), ChecklistItem(text="b")],
        )
        assert completion_label(note) == "1/2 items completed"
