"""
State controller: a pure transition function mapping (event, model) to the
next model and the requests to send.

Nothing here performs I/O or reads the clock; time arrives through TimeTick and
request outcomes arrive through the result events.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Callable, Dict, List, Optional, Tuple, Type

from . import events as ev
from .commands import Command, CreateRecord, DeleteRecord, GetRecord, ListRecords, UpdateRecord
from .errors import ClientError
from .forms import form_to_wire_record, record_to_form, reflect_form
from .models import DEFAULT_SORT, EMPTY_FORM, Ascending, Descending, Model, Sort
from .pager import Pager
from .resources import Resource
from .settings import DEFAULT_LIMIT

Transition = Tuple[Model, List[Command]]


# PUBLIC_INTERFACE
def initial_model(resource: Resource, limit: Optional[int] = DEFAULT_LIMIT) -> Model:
    """Startup state: newest records first, empty pager and form."""
    return Model(pager=Pager.empty(resource), sort=DEFAULT_SORT, limit=limit)


# PUBLIC_INTERFACE
def next_sort(current: Sort, column: str) -> Sort:
    """Sort selected when the header of column is clicked."""
    if isinstance(current, Ascending):
        if current.column == column:
            return Descending(current.column)
        return Ascending(column)
    if current.column == column:
        return Ascending(current.column)
    return Ascending(column)


# PUBLIC_INTERFACE
def parse_limit(text: str) -> Optional[int]:
    """Integer text becomes the limit; anything else (or a non-positive value) means no limit."""
    try:
        value = int(text)
    except ValueError:
        return None
    return value if value > 0 else None


# PUBLIC_INTERFACE
def list_request(model: Model) -> ListRecords:
    return ListRecords(
        resource=model.pager.resource,
        sort_keys=(model.sort.key,),
        limit=model.limit,
    )


def _failed(model: Model, error: ClientError) -> Transition:
    return replace(model, error=str(error)), []


def _on_time_tick(event: ev.TimeTick, model: Model) -> Transition:
    return replace(model, current_time=event.time), []


def _on_fetch_records(event: ev.FetchRecords, model: Model) -> Transition:
    model = replace(model, pager=Pager.empty(model.pager.resource), error=None)
    return model, [list_request(model)]


def _on_fetch_next_records(event: ev.FetchNextRecords, model: Model) -> Transition:
    request = model.pager.load_next()
    return replace(model, error=None), [request] if request is not None else []


def _on_record_fetched(event: ev.RecordFetched, model: Model) -> Transition:
    if isinstance(event.result, ClientError):
        return _failed(model, event.result)
    return replace(model, form_data=record_to_form(event.result), error=None), []


def _on_records_fetched(event: ev.RecordsFetched, model: Model) -> Transition:
    if isinstance(event.result, ClientError):
        return _failed(model, event.result)
    return replace(model, pager=model.pager.update(event.result)), []


def _on_record_created(event: ev.RecordCreated, model: Model) -> Transition:
    if isinstance(event.result, ClientError):
        return _failed(model, event.result)
    return replace(model, form_data=EMPTY_FORM), [list_request(model)]


def _on_start_edit(event: ev.StartEdit, model: Model) -> Transition:
    return model, [GetRecord(resource=model.pager.resource, record_id=event.record_id)]


def _on_record_edited(event: ev.RecordEdited, model: Model) -> Transition:
    if isinstance(event.result, ClientError):
        return _failed(model, event.result)
    return model, [list_request(model)]


def _on_start_delete(event: ev.StartDelete, model: Model) -> Transition:
    return model, [DeleteRecord(resource=model.pager.resource, record_id=event.record_id)]


def _on_record_deleted(event: ev.RecordDeleted, model: Model) -> Transition:
    if isinstance(event.result, ClientError):
        return _failed(model, event.result)
    return replace(model, pager=model.pager.remove(event.result.id), error=None), []


def _on_edit_form_title(event: ev.EditFormTitle, model: Model) -> Transition:
    form = replace(model.form_data, title=event.value)
    return replace(model, form_data=form, pager=reflect_form(model.pager, form)), []


def _on_edit_form_description(event: ev.EditFormDescription, model: Model) -> Transition:
    form = replace(model.form_data, description=event.value)
    return replace(model, form_data=form, pager=reflect_form(model.pager, form)), []


def _on_submit(event: ev.Submit, model: Model) -> Transition:
    form = model.form_data
    resource = model.pager.resource
    body = form_to_wire_record(form)
    command: Command
    if form.id is None:
        command = CreateRecord(resource=resource, body=body)
    else:
        command = UpdateRecord(resource=resource, record_id=form.id, body=body)
    return replace(model, form_data=EMPTY_FORM), [command]


def _on_change_sort_column(event: ev.ChangeSortColumn, model: Model) -> Transition:
    model = replace(model, sort=next_sort(model.sort, event.column))
    return model, [list_request(model)]


def _on_set_limit_text(event: ev.SetLimitText, model: Model) -> Transition:
    return replace(model, limit=parse_limit(event.text)), []


def _on_apply_limit(event: ev.ApplyLimit, model: Model) -> Transition:
    return model, [list_request(model)]


_HANDLERS: Dict[Type, Callable[..., Transition]] = {
    ev.TimeTick: _on_time_tick,
    ev.FetchRecords: _on_fetch_records,
    ev.FetchNextRecords: _on_fetch_next_records,
    ev.RecordFetched: _on_record_fetched,
    ev.RecordsFetched: _on_records_fetched,
    ev.RecordCreated: _on_record_created,
    ev.StartEdit: _on_start_edit,
    ev.RecordEdited: _on_record_edited,
    ev.StartDelete: _on_start_delete,
    ev.RecordDeleted: _on_record_deleted,
    ev.EditFormTitle: _on_edit_form_title,
    ev.EditFormDescription: _on_edit_form_description,
    ev.Submit: _on_submit,
    ev.ChangeSortColumn: _on_change_sort_column,
    ev.SetLimitText: _on_set_limit_text,
    ev.ApplyLimit: _on_apply_limit,
}


# PUBLIC_INTERFACE
def transition(event: ev.Event, model: Model) -> Transition:
    """
    Compute the next model and the outgoing requests for an event.

    Raises:
        TypeError: if event is not one of the controller's event types.
    """
    handler = _HANDLERS.get(type(event))
    if handler is None:
        raise TypeError(f"Unsupported event: {event!r}")
    return handler(event, model)
