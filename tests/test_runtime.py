import asyncio
import logging

import httpx
import pytest

from records.client import RecordServiceClient
from records.commands import ListRecords
from records.controller import initial_model
from records.errors import ClientError
from records.events import (
    ChangeSortColumn,
    EditFormDescription,
    EditFormTitle,
    FetchNextRecords,
    FetchRecords,
    RecordsFetched,
    StartDelete,
    StartEdit,
    Submit,
)
from records.models import EMPTY_FORM, Ascending, FormData, Page, Record
from records.runtime import Program
from records.server.main import create_app
from records.server.repositories import InMemoryRepository
from records.settings import ClientConfig, ServerSettings


def make_program(limit=5):
    app = create_app(ServerSettings(), InMemoryRepository())
    client = RecordServiceClient(
        ClientConfig(server_url="http://testserver/v1"),
        transport=httpx.ASGITransport(app=app),
    )
    return Program(client, initial_model(client.resource, limit)), client


async def seed(client, *titles):
    return [await client.create(client.resource, {"title": t, "description": ""}) for t in titles]


class TestProgram:
    @pytest.mark.asyncio
    async def test_fetch_records_populates_pager(self):
        program, client = make_program()
        async with client:
            await seed(client, "one", "two")
            program.dispatch(FetchRecords())
            await program.drain()
        assert [r.title for r in program.model.pager.objects] == ["two", "one"]
        assert program.model.error is None

    @pytest.mark.asyncio
    async def test_create_through_form_refreshes_list(self):
        program, client = make_program()
        async with client:
            program.dispatch(EditFormTitle("Buy milk"))
            program.dispatch(EditFormDescription("2L"))
            program.dispatch(Submit())
            assert program.model.form_data == EMPTY_FORM
            await program.drain()
        records = program.model.pager.objects
        assert [(r.title, r.description) for r in records] == [("Buy milk", "2L")]

    @pytest.mark.asyncio
    async def test_edit_flow_uses_server_copy_and_saves(self):
        program, client = make_program()
        async with client:
            (record,) = await seed(client, "Draft")
            program.dispatch(FetchRecords())
            await program.drain()

            program.dispatch(StartEdit(record.id))
            await program.drain()
            assert program.model.form_data == FormData(id=record.id, title="Draft", description="")

            program.dispatch(EditFormTitle("Final"))
            # unsaved edit is already visible in the list
            assert program.model.pager.objects[0].title == "Final"

            program.dispatch(Submit())
            await program.drain()
            saved = await client.get(client.resource, record.id)
        assert saved.title == "Final"
        assert program.model.pager.objects[0].last_modified == saved.last_modified

    @pytest.mark.asyncio
    async def test_delete_removes_entry(self):
        program, client = make_program()
        async with client:
            first, second = await seed(client, "keep", "drop")
            program.dispatch(FetchRecords())
            await program.drain()
            program.dispatch(StartDelete(second.id))
            await program.drain()
        assert [r.id for r in program.model.pager.objects] == [first.id]

    @pytest.mark.asyncio
    async def test_load_more_appends(self):
        program, client = make_program(limit=2)
        async with client:
            await seed(client, "a", "b", "c")
            program.dispatch(ChangeSortColumn("title"))
            await program.drain()
            assert program.model.sort == Ascending("title")
            assert [r.title for r in program.model.pager.objects] == ["a", "b"]
            assert program.model.pager.has_next()

            program.dispatch(FetchNextRecords())
            await program.drain()
        assert [r.title for r in program.model.pager.objects] == ["a", "b", "c"]
        assert not program.model.pager.has_next()

    @pytest.mark.asyncio
    async def test_failure_is_stored_as_error(self):
        program, client = make_program()
        async with client:
            program.dispatch(StartEdit("missing"))
            await program.drain()
        assert program.model.error == "Record not found (HTTP 404)"
        assert program.model.form_data == EMPTY_FORM

    @pytest.mark.asyncio
    async def test_ticker_uses_injected_clock(self):
        program, client = make_program()
        ticks = iter([10, 11, 12])
        async with client:
            await program.run_ticker(lambda: next(ticks), 0, ticks=3)
        assert program.model.current_time == 12

    @pytest.mark.asyncio
    async def test_subscribers_see_every_model(self):
        program, client = make_program()
        seen = []
        unsubscribe = program.subscribe(seen.append)
        async with client:
            program.dispatch(EditFormTitle("x"))
            unsubscribe()
            program.dispatch(EditFormTitle("xy"))
        assert [m.form_data.title for m in seen] == ["x"]


class SlowFirstClient:
    """Answers list requests in reverse order of arrival."""

    def __init__(self):
        self.release_first = asyncio.Event()
        self.calls = 0

    async def list(self, resource, sort_keys, limit):
        self.calls += 1
        if self.calls == 1:
            await self.release_first.wait()
            return Page(objects=(Record(id="stale", last_modified=1),))
        return Page(objects=(Record(id="fresh", last_modified=2),))


class TestOrdering:
    @pytest.mark.asyncio
    async def test_last_response_wins(self, resource):
        fake = SlowFirstClient()
        program = Program(fake, initial_model(resource))
        commands = program.dispatch(FetchRecords())
        assert commands == [ListRecords(resource=resource, sort_keys=("-last_modified",), limit=5)]
        program.dispatch(FetchRecords())
        await asyncio.sleep(0)
        await asyncio.sleep(0)
        assert [r.id for r in program.model.pager.objects] == ["fresh"]

        fake.release_first.set()
        await program.drain()
        assert [r.id for r in program.model.pager.objects] == ["stale"]

    @pytest.mark.asyncio
    async def test_unexpected_task_failure_is_logged(self, resource, caplog):
        class BrokenClient:
            async def list(self, resource, sort_keys, limit):
                raise RuntimeError("boom")

        caplog.set_level(logging.ERROR, logger="records.runtime")
        program = Program(BrokenClient(), initial_model(resource))
        program.dispatch(FetchRecords())
        for _ in range(3):
            await asyncio.sleep(0)
        assert "request task failed" in caplog.text
        assert "boom" in caplog.text

    @pytest.mark.asyncio
    async def test_execute_wraps_client_errors(self, resource):
        class FailingClient:
            async def list(self, resource, sort_keys, limit):
                raise ClientError("Network error: timed out")

        program = Program(FailingClient(), initial_model(resource))
        event = await program.execute(ListRecords(resource=resource, sort_keys=("title",)))
        assert event == RecordsFetched(ClientError("Network error: timed out"))
