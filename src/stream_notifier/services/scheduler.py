"""Fixed-interval polling loop."""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass

from stream_notifier.services.errors import ErrorRecorder
from stream_notifier.services.lifecycle import ReconcileOutcome, SessionLifecycleService

_logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL_SECONDS = 60.0


@dataclass
class PollScheduler:
    """Drives the lifecycle service over every configured channel.

    Channels are reconciled one at a time in configuration order. The next
    tick is scheduled after the previous one completes, so ticks drift later
    when processing is slow.
    """

    lifecycle_service: SessionLifecycleService
    channels: Sequence[str]
    error_recorder: ErrorRecorder
    interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep

    async def run_tick(self) -> dict[str, ReconcileOutcome]:
        """Reconcile every channel once and return the per-channel outcomes."""
        outcomes: dict[str, ReconcileOutcome] = {}
        for channel_name in self.channels:
            try:
                outcomes[channel_name] = await self.lifecycle_service.reconcile(
                    channel_name
                )
            except Exception as exc:
                self.error_recorder.record(exc, "CheckAllChannels")
                outcomes[channel_name] = ReconcileOutcome.FAILED
        return outcomes

    async def run_forever(self, max_ticks: int | None = None) -> None:
        """Poll until cancelled, or for ``max_ticks`` ticks when given."""
        ticks = 0
        while max_ticks is None or ticks < max_ticks:
            try:
                outcomes = await self.run_tick()
                _logger.debug("Tick complete: %s", outcomes)
            except Exception as exc:
                self.error_recorder.record(exc, "MainLoop")
            finally:
                ticks += 1
            await self.sleep(self.interval_seconds)
