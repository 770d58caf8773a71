"""Pydantic models for the note store."""

from datetime import UTC, datetime
from typing import Annotated

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    model_validator,
)

DEFAULT_TITLE = "Untitled Note"


def to_timestamp(moment: datetime) -> str:
    """Format *moment* as ISO-8601 UTC with millisecond precision and a Z suffix."""
    return moment.astimezone(UTC).isoformat(timespec="milliseconds").replace(
        "+00:00", "Z"
    )


def parse_timestamp(value: str) -> datetime:
    """Parse a stored timestamp back into an aware datetime."""
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def _check_timestamp(value: str) -> str:
    parse_timestamp(value)
    return value


Timestamp = Annotated[str, AfterValidator(_check_timestamp)]


class Note(BaseModel):
    """A single note with metadata."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, strict=True)

    id: str = Field(..., min_length=1)
    title: str = Field(default=DEFAULT_TITLE, description="Note title")
    content: str = Field(default="", description="Note content")
    created_at: Timestamp = Field(
        ...,
        alias="createdAt",
        description="ISO-8601 creation timestamp",
    )
    updated_at: Timestamp = Field(
        ...,
        alias="updatedAt",
        description="ISO-8601 last update timestamp",
    )

    @model_validator(mode="after")
    def _updated_not_before_created(self) -> "Note":
        if parse_timestamp(self.updated_at) < parse_timestamp(self.created_at):
            raise ValueError("updatedAt is earlier than createdAt")
        return self

    def to_record(self) -> dict[str, str]:
        """Return the storage representation (camelCase keys)."""
        return self.model_dump(by_alias=True)


NoteList = TypeAdapter(list[Note])
