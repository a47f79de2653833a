"""Pydantic models for notes, checklist items and the persisted note state."""

from datetime import UTC, datetime
from typing import Annotated, ClassVar, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator
from pydantic.alias_generators import to_camel

STATE_VERSION = "1.0.0"


def utc_now() -> str:
    """Return the current time as an ISO-8601 string."""
    return datetime.now(UTC).isoformat()


class _CamelModel(BaseModel):
    """Base model serialized with camelCase keys (``createdAt``, ``nextId``)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ChecklistItem(_CamelModel):
    """A single line of a checklist note."""

    text: str
    completed: bool = False


class _NoteBase(_CamelModel):
    id: int = Field(..., gt=0, description="Unique note id, never reused")
    title: str = Field(..., description="Note title")
    created_at: str = Field(
        default_factory=utc_now,
        description="ISO-8601 creation timestamp",
    )
    updated_at: str = Field(
        default_factory=utc_now,
        description="ISO-8601 last update timestamp",
    )

    default_title: ClassVar[str]


class TextNote(_NoteBase):
    """A free-text note."""

    type: Literal["text"] = "text"
    content: str = ""

    default_title: ClassVar[str] = "Untitled Note"


class ChecklistNote(_NoteBase):
    """A note made of checkable items, kept in display order."""

    type: Literal["checklist"] = "checklist"
    content: list[ChecklistItem] = Field(default_factory=list)

    default_title: ClassVar[str] = "Untitled Checklist"

    @property
    def completed_count(self) -> int:
        """Number of items ticked off."""
        return sum(1 for item in self.content if item.completed)


Note = Annotated[Union[TextNote, ChecklistNote], Field(discriminator="type")]

NOTE_CLASSES: dict[str, type[TextNote] | type[ChecklistNote]] = {
    "text": TextNote,
    "checklist": ChecklistNote,
}


class NoteState(_CamelModel):
    """Everything that gets persisted: ordered notes plus the id counter."""

    notes: list[Note] = Field(default_factory=list)
    next_id: int = 1
    version: str = STATE_VERSION

    @field_validator("notes", mode="before")
    @classmethod
    def _null_notes(cls, value):
        return [] if value is None else value

    @field_validator("next_id", mode="before")
    @classmethod
    def _null_next_id(cls, value):
        # Older blobs may carry a null or zero counter.
        return value or 1

    @field_validator("version", mode="before")
    @classmethod
    def _null_version(cls, value):
        return STATE_VERSION if value is None else value


checklist_items_adapter: TypeAdapter[list[ChecklistItem]] = TypeAdapter(
    list[ChecklistItem]
)
