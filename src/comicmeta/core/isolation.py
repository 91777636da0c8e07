# ABOUTME: Fault isolation for per-file work: run a callable and get a tagged result back.
# ABOUTME: ProcessIsolation uses a throwaway worker process; InlineIsolation catches in-process.

import logging
import signal
from collections.abc import Callable
from concurrent.futures import ProcessPoolExecutor
from concurrent.futures.process import BrokenProcessPool
from dataclasses import dataclass
from typing import Any, Protocol

logger = logging.getLogger(__name__)


@dataclass
class WorkerResult:
    """Result of one isolated call.

    `complete` is False when the call raised or its worker died; `value` is
    only meaningful when `complete` is True.
    """

    complete: bool
    value: Any = None
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.complete and bool(self.value)


class Isolation(Protocol):
    """Strategy for running one unit of work without letting its faults escape."""

    def run(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> WorkerResult: ...


def _describe(exc: BaseException) -> str:
    return f"{type(exc).__name__}: {exc}" if str(exc) else type(exc).__name__


class InlineIsolation:
    """Run in the calling process behind an exception boundary.

    Contains Python exceptions only; a crash of the interpreter itself
    takes the caller down with it.
    """

    def run(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> WorkerResult:
        try:
            value = fn(*args, **kwargs)
        except Exception as exc:
            logger.error("Isolated call failed: %s", _describe(exc), exc_info=True)
            return WorkerResult(complete=False, error=_describe(exc))
        return WorkerResult(complete=True, value=value)


def _ignore_sigint() -> None:
    """Worker initializer: Ctrl-C is handled by the driver, not the file being processed."""
    signal.signal(signal.SIGINT, signal.SIG_IGN)


class ProcessIsolation:
    """Run each call in a fresh single-worker process.

    Exceptions raised by `fn` and abrupt worker deaths (segfaults in a
    decompressor, os._exit, ...) both come back as incomplete results.
    `fn` and its arguments must be picklable.
    """

    def __init__(self, mp_context: Any = None) -> None:
        self._mp_context = mp_context

    def run(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> WorkerResult:
        with ProcessPoolExecutor(
            max_workers=1,
            mp_context=self._mp_context,
            initializer=_ignore_sigint,
        ) as pool:
            future = pool.submit(fn, *args, **kwargs)
            try:
                value = future.result()
            except BrokenProcessPool as exc:
                logger.error("Worker process died: %s", exc)
                return WorkerResult(complete=False, error="worker process died")
            except Exception as exc:
                logger.error("Isolated call failed: %s", _describe(exc))
                return WorkerResult(complete=False, error=_describe(exc))
        return WorkerResult(complete=True, value=value)
