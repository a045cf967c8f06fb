"""Durable error recording."""

import logging
import traceback
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from stream_notifier.domain.sessions import ErrorRecord
from stream_notifier.services.clock import Clock

_logger = logging.getLogger(__name__)


class ErrorRepository(Protocol):
    """Persistence interface for error records."""

    def create_error(self, record: ErrorRecord) -> None:
        """Append an error record."""


@dataclass
class ErrorRecorder:
    """Logs failures and persists them for later inspection."""

    repository: ErrorRepository
    clock: Clock

    def record(self, error: BaseException, category: str) -> ErrorRecord:
        """Persist an error under a category and return the stored record."""
        record = ErrorRecord(
            timestamp=self.clock.now(),
            category=category,
            description=str(error) or type(error).__name__,
            location=_source_location(error),
            trace="".join(traceback.format_exception(error)),
        )
        _logger.error(
            "%s => %s (%s)\n%s",
            category,
            record.description,
            record.location,
            record.trace,
        )
        try:
            self.repository.create_error(record)
        except Exception:
            _logger.exception("Failed to persist error record: category=%s", category)
        return record


def _source_location(error: BaseException) -> str | None:
    """Return ``file:line`` of the innermost frame that raised the error."""
    frames = traceback.extract_tb(error.__traceback__)
    if not frames:
        return None
    frame = frames[-1]
    return f"{Path(frame.filename).name}:{frame.lineno}"
