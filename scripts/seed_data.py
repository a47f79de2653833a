"""Seed the local note store with realistic notes for screenshots.

Writes straight into the storage directory used by the Streamlit board and
the MCP server, so neither needs to be running.

Usage:
    python scripts/seed_data.py [--data-dir ~/.rupertg_notes]
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Ensure the project root is on sys.path so `notes.*` imports resolve.
_project_root = str(Path(__file__).resolve().parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from notes.app import NotesApp  # noqa: E402
from notes.config import Settings  # noqa: E402

# Each entry: (type, title, text content or checklist items as (text, done))
SEED_NOTES: list[tuple[str, str, object]] = [
    (
        "text",
        "Project Ideas",
        "Build a notes board that syncs nothing and loses nothing.\n"
        "Try a keyboard-first editor for checklists.",
    ),
    (
        "checklist",
        "Groceries",
        [("Milk", True), ("Eggs", False), ("Bread", False), ("Coffee", True), ("Apples", False)],
    ),
    (
        "text",
        "Meeting Notes",
        "Discussed moving the board to a three-column layout. "
        "Decision: keep newest notes first, allow manual reordering.",
    ),
    (
        "checklist",
        "Weekend",
        [("Fix the bike", False), ("Call grandma", True)],
    ),
]


def main() -> None:
    """Append the seed notes to the configured store."""
    parser = argparse.ArgumentParser(description="Seed notes for screenshots")
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help="Storage directory (default: NOTES_DATA_DIR or ~/.rupertg_notes)",
    )
    args = parser.parse_args()

    settings = Settings()
    if args.data_dir is not None:
        settings = settings.model_copy(update={"data_dir": args.data_dir})

    print(f"\n  Seeding notes into {settings.data_dir}")
    print("  " + "=" * 58)

    with NotesApp.from_settings(settings) as app:
        # Create in reverse so the first seed note ends up on top.
        for i, (note_type, title, content) in enumerate(reversed(SEED_NOTES), 1):
            note = app.create(note_type)
            if note_type == "checklist":
                items = [{"text": text, "completed": done} for text, done in content]
                app.update_title_and_content(note.id, title, items)
            else:
                app.update_title_and_content(note.id, title, content)
            print(f"  [{i}/{len(SEED_NOTES)}] {note_type:<9} #{note.id} {title}")

        total = len(app.list_notes())

    print("  " + "=" * 58)
    print(f"  Done! The store now holds {total} notes.")
    print("    - Streamlit board:  streamlit run ui/app.py")
    print("    - MCP server:       python -m mcp_servers.note_manager.server")
    print()


if __name__ == "__main__":
    main()
