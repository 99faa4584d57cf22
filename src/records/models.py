from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional, Tuple, Union

from .settings import DEFAULT_LIMIT

if TYPE_CHECKING:
    from .pager import Pager


# PUBLIC_INTERFACE
@dataclass(frozen=True)
class Record:
    """
    Cached read-only copy of a remote record.

    Fields:
    - id: Server-assigned identifier
    - title: Optional short title (absent on the wire decodes to None)
    - description: Optional detailed description
    - last_modified: Server timestamp (epoch milliseconds)
    """

    id: str
    title: Optional[str] = None
    description: Optional[str] = None
    last_modified: int = 0


# PUBLIC_INTERFACE
@dataclass(frozen=True)
class FormData:
    """
    Local draft of a record. id=None means the form creates a new record,
    otherwise it edits the record with that id.
    """

    id: Optional[str] = None
    title: str = ""
    description: str = ""


EMPTY_FORM = FormData()


@dataclass(frozen=True)
class Ascending:
    column: str

    @property
    def key(self) -> str:
        return self.column


@dataclass(frozen=True)
class Descending:
    column: str

    @property
    def key(self) -> str:
        return "-" + self.column


Sort = Union[Ascending, Descending]
DEFAULT_SORT: Sort = Descending("last_modified")


# PUBLIC_INTERFACE
@dataclass(frozen=True)
class Page:
    """
    One page of records as returned by the service.

    continuation is True when the page was fetched through a next-page cursor,
    so it extends the records already loaded instead of replacing them.
    """

    objects: Tuple[Record, ...] = ()
    next_page: Optional[str] = None
    total: Optional[int] = None
    continuation: bool = False


# PUBLIC_INTERFACE
@dataclass(frozen=True)
class Model:
    """Aggregate application state. Only ever replaced by the transition function."""

    pager: Pager
    error: Optional[str] = None
    form_data: FormData = EMPTY_FORM
    current_time: Any = None
    sort: Sort = DEFAULT_SORT
    limit: Optional[int] = DEFAULT_LIMIT
