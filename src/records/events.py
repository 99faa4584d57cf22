"""
Events accepted by the state controller.

Result-carrying events hold either the success value or the ClientError
raised by the record service client.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from .errors import ClientError
from .models import Page, Record

RecordResult = Union[Record, ClientError]
PageResult = Union[Page, ClientError]


@dataclass(frozen=True)
class TimeTick:
    time: Any


@dataclass(frozen=True)
class FetchRecords:
    pass


@dataclass(frozen=True)
class FetchNextRecords:
    pass


@dataclass(frozen=True)
class RecordFetched:
    result: RecordResult


@dataclass(frozen=True)
class RecordsFetched:
    result: PageResult


@dataclass(frozen=True)
class RecordCreated:
    result: RecordResult


@dataclass(frozen=True)
class StartEdit:
    record_id: str


@dataclass(frozen=True)
class RecordEdited:
    result: RecordResult


@dataclass(frozen=True)
class StartDelete:
    record_id: str


@dataclass(frozen=True)
class RecordDeleted:
    result: RecordResult


@dataclass(frozen=True)
class EditFormTitle:
    value: str


@dataclass(frozen=True)
class EditFormDescription:
    value: str


@dataclass(frozen=True)
class Submit:
    pass


@dataclass(frozen=True)
class ChangeSortColumn:
    column: str


@dataclass(frozen=True)
class SetLimitText:
    text: str


@dataclass(frozen=True)
class ApplyLimit:
    pass


Event = Union[
    TimeTick,
    FetchRecords,
    FetchNextRecords,
    RecordFetched,
    RecordsFetched,
    RecordCreated,
    StartEdit,
    RecordEdited,
    StartDelete,
    RecordDeleted,
    EditFormTitle,
    EditFormDescription,
    Submit,
    ChangeSortColumn,
    SetLimitText,
    ApplyLimit,
]
