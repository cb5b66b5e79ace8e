"""Task schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_serializer

CREATED_AT_FORMAT = "%Y-%m-%d %H:%M:%S"


class TaskCreate(BaseModel):
    """Create a new task. Length and blank checks happen in the task service."""

    title: str | None = None
    description: str | None = None


class TaskUpdate(BaseModel):
    """Update a task (used by both PUT and PATCH)."""

    model_config = ConfigDict(populate_by_name=True)

    title: str | None = None
    description: str | None = None
    is_done: bool | None = Field(None, alias="isDone")

    def provided_fields(self) -> dict:
        """Fields explicitly sent with a non-null value."""
        return {
            name: value
            for name, value in self.model_dump(exclude_unset=True).items()
            if value is not None
        }


class TaskResponse(BaseModel):
    """Task response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    is_done: bool = Field(serialization_alias="isDone")
    created_at: datetime = Field(serialization_alias="createdAt")

    @field_serializer("created_at")
    def serialize_created_at(self, value: datetime) -> str:
        return value.strftime(CREATED_AT_FORMAT)


class TaskPageResponse(BaseModel):
    """One page of the caller's tasks."""

    data: list[TaskResponse]
    total: int
    page: int
    pages: int
