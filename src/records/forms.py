"""Mapping between records, the edit form and request bodies."""

from __future__ import annotations

from typing import Dict

from .models import FormData, Record
from .pager import Pager


def record_to_form(record: Record) -> FormData:
    return FormData(
        id=record.id,
        title=record.title or "",
        description=record.description or "",
    )


def form_to_wire_record(form: FormData) -> Dict[str, str]:
    # The id is addressed through the request target, never sent in the body.
    return {"title": form.title, "description": form.description}


def reflect_form(pager: Pager, form: FormData) -> Pager:
    """Mirror unsaved form fields into the listed record being edited, if any."""
    if form.id is None:
        return pager
    return pager.patch(form.id, title=form.title, description=form.description)
