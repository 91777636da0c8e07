# ABOUTME: Batch driver that runs metadata extraction over a list of comics, one at a time.
# ABOUTME: Confirms, reports progress, honors cancellation between files, and isolates faults.

from __future__ import annotations

import enum
import logging
import threading
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from comicmeta.core.events import BOOK_METADATA_CHANGED, INVALIDATE_METADATA_CACHE, Event, EventBus
from comicmeta.core.extractor import extract_and_merge
from comicmeta.core.isolation import Isolation, ProcessIsolation
from comicmeta.core.scanner import scan_for_comics
from comicmeta.core.selector import sort_scan_result

logger = logging.getLogger(__name__)

START_MESSAGE = (
    "This will extract comic metadata from {total} comic file(s).\n"
    "Once extraction has started, you can abort between files with Ctrl-C."
)
NO_COMICS_MESSAGE = "No comics found."
SUMMARY_MESSAGE = "Comic metadata extraction complete.\nSuccessfully extracted {succeeded} / {attempted}"


class Interaction(Protocol):
    """User-facing side of a batch run: prompts, notices, and progress."""

    def confirm(self, message: str, cancel_label: str, ok_label: str) -> bool: ...

    def info(self, message: str) -> None: ...

    def progress(self, index: int, total: int, path: Path) -> None: ...


class CancelToken:
    """Cooperative cancellation flag, checked by the runner between files."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


class BatchState(enum.Enum):
    IDLE = "idle"
    CONFIRMING = "confirming"
    ITERATING = "iterating"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


@dataclass
class BatchOutcome:
    """Counts for one batch run."""

    attempted: int = 0
    succeeded: int = 0

    @property
    def failed(self) -> int:
        return self.attempted - self.succeeded


@dataclass
class BatchContext:
    """Everything a batch run needs from its host, passed in explicitly.

    `process_file` is called as `process_file(path, toc=...)` inside the
    isolation strategy and must return True on success.
    """

    root: Path
    ui: Interaction
    events: EventBus = field(default_factory=EventBus)
    cancel: CancelToken = field(default_factory=CancelToken)
    isolation: Isolation = field(default_factory=ProcessIsolation)
    toc: bool = True
    process_file: Callable[..., bool] = extract_and_merge


class BatchRunner:
    """Runs extraction over an ordered list of comic paths.

    Files are processed strictly one after another: each document's settings
    are opened, changed and flushed before the next file starts.
    """

    def __init__(self, context: BatchContext) -> None:
        self.context = context
        self.state = BatchState.IDLE

    def run(self, paths: Sequence[Path]) -> BatchOutcome | None:
        """Process every path and report a summary.

        Returns:
            The outcome, or None if the user declined or cancelled the run.
            A cancelled run reports no summary.
        """
        ctx = self.context
        total = len(paths)

        self.state = BatchState.CONFIRMING
        if not ctx.ui.confirm(START_MESSAGE.format(total=total), "Cancel", "Continue"):
            self.state = BatchState.CANCELLED
            return None

        self.state = BatchState.ITERATING
        outcome = BatchOutcome()

        for index, path in enumerate(paths, start=1):
            real_path = Path(path).resolve()
            logger.debug("Processing file %s", real_path)
            ctx.ui.progress(index, total, real_path)

            if ctx.cancel.cancelled:
                logger.info("Extraction cancelled before %s (%d/%d)", real_path, index, total)
                self.state = BatchState.CANCELLED
                return None

            outcome.attempted += 1
            result = ctx.isolation.run(ctx.process_file, real_path, toc=ctx.toc)
            if result.succeeded:
                outcome.succeeded += 1
                ctx.events.broadcast(Event(INVALIDATE_METADATA_CACHE, (real_path,)))
                ctx.events.broadcast(Event(BOOK_METADATA_CHANGED))
            elif not result.complete:
                logger.warning("Extraction faulted for %s: %s", real_path, result.error)

        self.state = BatchState.COMPLETED
        ctx.ui.info(SUMMARY_MESSAGE.format(succeeded=outcome.succeeded, attempted=outcome.attempted))
        return outcome


def run_batch(paths: Sequence[Path], context: BatchContext) -> BatchOutcome | None:
    """Convenience wrapper: run one batch with a fresh BatchRunner."""
    return BatchRunner(context).run(paths)


def process_directory(folder: Path, recursive: bool, context: BatchContext) -> BatchOutcome | None:
    """Scan a folder for comics and run a batch over everything found."""
    logger.debug("Processing folder %s (recursive=%s)", folder, recursive)
    context.ui.info("Scanning for comics...")

    comic_files = scan_for_comics(folder, recursive)
    if not comic_files:
        context.ui.info(NO_COMICS_MESSAGE)
        return None

    logger.debug("Found %d comic files to process", len(comic_files))
    return run_batch(sort_scan_result(comic_files, folder), context)
