from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Tuple

from .commands import FetchNextPage
from .models import Page, Record
from .resources import Resource


# PUBLIC_INTERFACE
@dataclass(frozen=True)
class Pager:
    """
    Records loaded so far for a resource, in server order, plus the cursor of
    the next page. Local changes only touch fields of existing entries, except
    remove() which drops an entry by id.
    """

    resource: Resource
    objects: Tuple[Record, ...] = ()
    next_page: Optional[str] = None
    total: Optional[int] = None

    @classmethod
    def empty(cls, resource: Resource) -> "Pager":
        return cls(resource=resource)

    def update(self, page: Page) -> "Pager":
        """
        Fold a fetched page in. A first page replaces the loaded records, a
        continuation page is appended to them. The cursor and total always
        come from the incoming page.
        """
        objects = self.objects + page.objects if page.continuation else page.objects
        return replace(self, objects=objects, next_page=page.next_page, total=page.total)

    def has_next(self) -> bool:
        return self.next_page is not None

    def load_next(self) -> Optional[FetchNextPage]:
        if self.next_page is None:
            return None
        return FetchNextPage(resource=self.resource, url=self.next_page)

    def remove(self, record_id: str) -> "Pager":
        return replace(self, objects=tuple(r for r in self.objects if r.id != record_id))

    def patch(self, record_id: str, **changes) -> "Pager":
        """Overwrite fields of the entry with record_id; order is kept."""
        objects = tuple(replace(r, **changes) if r.id == record_id else r for r in self.objects)
        return replace(self, objects=objects)
