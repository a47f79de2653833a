"""Prometheus metrics for the notes application.

All metric objects are defined here so they can be imported from any module.
"""

from prometheus_client import Counter, Gauge

# ---------------------------------------------------------------------------
# Note operations
# ---------------------------------------------------------------------------

NOTE_OPERATIONS = Counter(
    "notes_operations_total",
    "Total number of note operations",
    ["operation", "result"],  # applied, ignored, rejected
)

NOTES_STORED = Gauge(
    "notes_stored",
    "Number of notes in the collection",
)

# ---------------------------------------------------------------------------
# Persistence
# ---------------------------------------------------------------------------

PERSISTENCE_FAILURES = Counter(
    "notes_persistence_failures_total",
    "Storage reads or writes that failed and fell back",
    ["operation"],  # load, save
)
