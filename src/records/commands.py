"""Outgoing requests emitted by the transition function."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional, Tuple, Union

from .resources import Resource


@dataclass(frozen=True)
class ListRecords:
    resource: Resource
    sort_keys: Tuple[str, ...]
    limit: Optional[int] = None


@dataclass(frozen=True)
class FetchNextPage:
    resource: Resource
    url: str


@dataclass(frozen=True)
class GetRecord:
    resource: Resource
    record_id: str


@dataclass(frozen=True)
class CreateRecord:
    resource: Resource
    body: Mapping[str, str]

    def __post_init__(self) -> None:
        object.__setattr__(self, "body", MappingProxyType(dict(self.body)))

    def __hash__(self) -> int:
        return hash((self.resource, tuple(sorted(self.body.items()))))


@dataclass(frozen=True)
class UpdateRecord:
    resource: Resource
    record_id: str
    body: Mapping[str, str]

    def __post_init__(self) -> None:
        object.__setattr__(self, "body", MappingProxyType(dict(self.body)))

    def __hash__(self) -> int:
        return hash((self.resource, self.record_id, tuple(sorted(self.body.items()))))


@dataclass(frozen=True)
class DeleteRecord:
    resource: Resource
    record_id: str


Command = Union[ListRecords, FetchNextPage, GetRecord, CreateRecord, UpdateRecord, DeleteRecord]
