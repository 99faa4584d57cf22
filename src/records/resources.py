from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Type
from urllib.parse import quote

from pydantic import BaseModel

from .models import Record
from .schemas import RecordOut


# PUBLIC_INTERFACE
@dataclass(frozen=True)
class Resource:
    """
    Identifies a remote record collection and the schema its records decode with.
    """

    bucket: str
    collection: str
    schema: Type[BaseModel] = RecordOut

    @property
    def records_path(self) -> str:
        return f"/buckets/{self.bucket}/collections/{self.collection}/records"

    def record_path(self, record_id: str) -> str:
        # Escaped so "/", "?" or "#" in an id cannot address another record.
        return f"{self.records_path}/{quote(record_id, safe='')}"

    def decode(self, data: Mapping[str, Any]) -> Record:
        """Validate one wire record; raises pydantic.ValidationError on bad shapes."""
        return self.schema.model_validate(data).to_record()  # type: ignore[attr-defined]
