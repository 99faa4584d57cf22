"""
Headless runner: loads the configured collection and logs the list whenever it
changes.

Usage:
    python -m records
"""
from __future__ import annotations

import asyncio
import time

from .client import RecordServiceClient
from .controller import initial_model
from .events import FetchRecords
from .logger import get_logger, setup_logging
from .models import Model
from .runtime import Program
from .settings import ClientConfig, get_client_config

logger = get_logger("records")


class _ListLogger:
    """Logs records and errors, skipping models that only differ by time."""

    def __init__(self) -> None:
        self._seen = None

    def __call__(self, model: Model) -> None:
        state = (model.pager.objects, model.error)
        if state == self._seen:
            return
        self._seen = state
        if model.error:
            logger.error("%s", model.error)
        total = model.pager.total if model.pager.total is not None else "?"
        logger.info("%d of %s record(s), sorted by %s", len(model.pager.objects), total, model.sort.key)
        for record in model.pager.objects:
            logger.info("  %s  %s  %s", record.id, record.title or "", record.description or "")


async def run(config: ClientConfig) -> None:
    async with RecordServiceClient(config) as client:
        program = Program(client, initial_model(client.resource, config.default_limit))
        program.subscribe(_ListLogger())
        program.dispatch(FetchRecords())
        await program.run_ticker(time.time, config.tick_interval)


def main() -> None:
    setup_logging()
    try:
        asyncio.run(run(get_client_config()))
    except KeyboardInterrupt:
        logger.info("Stopped")


if __name__ == "__main__":
    main()
