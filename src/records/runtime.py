"""
Event loop wiring between the state controller and the record service client.

Transitions run to completion on the asyncio loop; each emitted command runs
as a task whose outcome is dispatched back as a result event. Responses may
arrive in any order and the last one wins.
"""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, List, Optional, Set, Tuple, Type

from . import events as ev
from .client import RecordServiceClient
from .commands import (
    Command,
    CreateRecord,
    DeleteRecord,
    FetchNextPage,
    GetRecord,
    ListRecords,
    UpdateRecord,
)
from .controller import transition
from .errors import ClientError
from .logger import get_logger
from .models import Model

logger = get_logger(__name__)

Listener = Callable[[Model], None]


# PUBLIC_INTERFACE
class Program:
    """
    Holds the single Model instance and the dispatch entry point for the view.

    dispatch() must be called from a running event loop whenever the event can
    emit requests.
    """

    def __init__(self, client: RecordServiceClient, model: Model) -> None:
        self._client = client
        self._model = model
        self._listeners: List[Listener] = []
        self._tasks: Set[asyncio.Task] = set()

    @property
    def model(self) -> Model:
        return self._model

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call listener with every new model; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def dispatch(self, event: ev.Event) -> List[Command]:
        logger.debug("dispatch %s", type(event).__name__)
        previous_error = self._model.error
        self._model, commands = transition(event, self._model)
        if self._model.error is not None and self._model.error != previous_error:
            logger.info("record service error: %s", self._model.error)

        for listener in tuple(self._listeners):
            listener(self._model)
        for command in commands:
            self._schedule(command)
        return commands

    def _schedule(self, command: Command) -> None:
        task = asyncio.get_running_loop().create_task(self._complete(command))
        self._tasks.add(task)
        task.add_done_callback(self._on_done)

    def _on_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("request task failed: %r", exc, exc_info=exc)

    async def _complete(self, command: Command) -> None:
        self.dispatch(await self.execute(command))

    def _call(self, command: Command) -> Tuple[Awaitable[Any], Type]:
        client = self._client
        if isinstance(command, ListRecords):
            return client.list(command.resource, command.sort_keys, command.limit), ev.RecordsFetched
        if isinstance(command, FetchNextPage):
            return client.fetch_next(command), ev.RecordsFetched
        if isinstance(command, GetRecord):
            return client.get(command.resource, command.record_id), ev.RecordFetched
        if isinstance(command, CreateRecord):
            return client.create(command.resource, command.body), ev.RecordCreated
        if isinstance(command, UpdateRecord):
            return (
                client.update(command.resource, command.record_id, command.body),
                ev.RecordEdited,
            )
        if isinstance(command, DeleteRecord):
            return client.delete(command.resource, command.record_id), ev.RecordDeleted
        raise TypeError(f"Unsupported command: {command!r}")

    async def execute(self, command: Command) -> ev.Event:
        """Run one request and wrap its outcome in the matching result event."""
        call, result_event = self._call(command)
        try:
            result = await call
        except ClientError as exc:
            result = exc
        return result_event(result)

    async def drain(self) -> None:
        """Wait until no request is in flight, including follow-up requests."""
        while self._tasks:
            await asyncio.gather(*tuple(self._tasks))

    async def run_ticker(
        self,
        clock: Callable[[], Any],
        interval: float,
        ticks: Optional[int] = None,
    ) -> None:
        """Dispatch TimeTick(clock()) every interval seconds; forever unless ticks is given."""
        count = 0
        while ticks is None or count < ticks:
            self.dispatch(ev.TimeTick(clock()))
            count += 1
            await asyncio.sleep(interval)
