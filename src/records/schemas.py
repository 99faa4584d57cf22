from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .models import Record


# PUBLIC_INTERFACE
class RecordOut(BaseModel):
    """
    Wire shape of a record returned by the service.
    Absent title/description decode to None; unknown fields are ignored.
    """

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "example": {
                "id": "8d4c3b7e-6a0f-4c3e-9b52-1f0e2d3c4b5a",
                "title": "Buy groceries",
                "description": "Milk, eggs, bread",
                "last_modified": 1737800130123,
            }
        },
    )

    id: str = Field(..., description="Unique identifier of the record")
    title: Optional[str] = Field(default=None, description="Short title")
    description: Optional[str] = Field(default=None, description="Detailed description")
    last_modified: int = Field(..., description="Last modification timestamp (epoch ms)")

    def to_record(self) -> Record:
        return Record(
            id=self.id,
            title=self.title,
            description=self.description,
            last_modified=self.last_modified,
        )


# PUBLIC_INTERFACE
class RecordBody(BaseModel):
    """
    Writable record fields, sent by create and update requests.
    Fields left out are untouched by a partial update.
    """

    model_config = ConfigDict(
        json_schema_extra={"example": {"title": "Buy groceries", "description": "Milk, eggs, bread"}}
    )

    title: Optional[str] = Field(default=None, description="Short title", max_length=200)
    description: Optional[str] = Field(default=None, description="Detailed description")


class RecordPayload(BaseModel):
    """Request envelope: {"data": {...}}."""

    data: RecordBody = Field(default_factory=RecordBody)


class RecordEnvelope(BaseModel):
    data: RecordOut


class RecordListEnvelope(BaseModel):
    data: List[RecordOut]


class DeletedRecordOut(BaseModel):
    """Tombstone returned by a delete."""

    id: str
    last_modified: int
    deleted: bool = True


class DeletedRecordEnvelope(BaseModel):
    data: DeletedRecordOut
