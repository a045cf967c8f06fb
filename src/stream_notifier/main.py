"""Process entry point for the stream notifier."""

import asyncio
import logging

from stream_notifier.app_logging import configure_logging
from stream_notifier.containers import AppContainer, build_container

_logger = logging.getLogger(__name__)


async def run(container: AppContainer, max_ticks: int | None = None) -> None:
    """Run the polling loop and release clients on exit."""
    _logger.info(
        "Starting up: channels=%s interval=%ss",
        ", ".join(container.scheduler.channels),
        container.scheduler.interval_seconds,
    )
    try:
        await container.scheduler.run_forever(max_ticks=max_ticks)
    finally:
        await container.close_resources()


def main() -> None:
    """Console script entry point."""
    configure_logging()
    try:
        asyncio.run(run(build_container()))
    except KeyboardInterrupt:
        _logger.info("Shutting down")
