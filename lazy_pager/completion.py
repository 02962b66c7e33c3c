"""Async result cell wrapping a single in-flight fetch."""
from __future__ import annotations

import asyncio
import inspect
import logging
import traceback
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Generic

from .errors import FailedFetchError, NotReadyError
from .types import CellState, T

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FetchFailure:
    """Error captured from a failed fetch, with diagnostic context."""

    error: BaseException
    label: str = ""
    traceback: str = ""

    @classmethod
    def from_exception(cls, error: BaseException, label: str = "") -> FetchFailure:
        formatted = "".join(
            traceback.format_exception(type(error), error, error.__traceback__)
        )
        return cls(error=error, label=label, traceback=formatted)

    @property
    def error_type(self) -> str:
        return type(self.error).__name__

    def describe(self) -> str:
        message = str(self.error)
        return f"{self.error_type}: {message}" if message else self.error_type


FailureSink = Callable[[FetchFailure], None]
DoneCallback = Callable[["Completion[Any]"], None]


def log_failure(failure: FetchFailure) -> None:
    """Default failure sink: log the failure once with its traceback."""
    logger.error(
        "Unhandled fetch failure in %s: %s\n%s",
        failure.label or "fetch",
        failure.describe(),
        failure.traceback,
    )


async def _await(awaitable: Awaitable[Any]) -> Any:
    return await awaitable


class Completion(Generic[T]):
    """Non-blocking view over one asynchronous fetch.

    The wrapped operation is scheduled on the running event loop when the cell
    is created and is never restarted. State moves exactly once from PENDING to
    RESOLVED or FAILED; the transition is applied from a done-callback, so it
    always happens on the loop's thread.
    """

    __slots__ = (
        "label",
        "_task",
        "_state",
        "_value",
        "_failure",
        "_discarded",
        "_on_failure",
        "_callbacks",
    )

    def __init__(
        self,
        operation: Awaitable[T] | None,
        *,
        label: str = "",
        on_failure: FailureSink | None = None,
    ) -> None:
        self.label = label
        self._state = CellState.PENDING
        self._value: T | None = None
        self._failure: FetchFailure | None = None
        self._discarded = False
        self._on_failure = on_failure or log_failure
        self._callbacks: list[DoneCallback] = []
        self._task: asyncio.Future[T] | None = None
        if operation is not None:
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError:
                if inspect.iscoroutine(operation):
                    operation.close()
                raise
            # Coroutines and plain awaitables both go through a task so that a
            # loader raising before its first await still lands in FAILED.
            self._task = loop.create_task(_await(operation))
            self._task.add_done_callback(self._on_done)

    @classmethod
    def resolved(cls, value: T, *, label: str = "") -> Completion[T]:
        """Build a cell that is already RESOLVED, without any async work."""
        cell: Completion[T] = cls(None, label=label)
        cell._state = CellState.RESOLVED
        cell._value = value
        return cell

    def __repr__(self) -> str:
        return f"Completion({self.label!r}, state={self._state.value})"

    @property
    def task(self) -> asyncio.Future[T] | None:
        return self._task

    @property
    def state(self) -> CellState:
        return self._state

    @property
    def failure(self) -> FetchFailure | None:
        return self._failure

    @property
    def discarded(self) -> bool:
        return self._discarded

    @property
    def is_pending(self) -> bool:
        return self._state is CellState.PENDING

    @property
    def is_resolved(self) -> bool:
        return self._state is CellState.RESOLVED

    @property
    def is_failed(self) -> bool:
        return self._state is CellState.FAILED

    def peek(self) -> CellState:
        return self._state

    def get(self) -> T:
        """Return the resolved value.

        Raises:
            NotReadyError: the fetch has not completed yet.
            FailedFetchError: the fetch raised; the loader error is chained.
        """
        if self._state is CellState.PENDING:
            raise NotReadyError(f"Cell '{self.label}' is still pending")
        if self._state is CellState.FAILED:
            assert self._failure is not None
            raise FailedFetchError(self._failure) from self._failure.error
        return self._value  # type: ignore[return-value]

    def add_done_callback(self, callback: DoneCallback) -> None:
        """Call ``callback(cell)`` once the cell settles.

        Runs immediately when the cell has already settled. Callbacks are never
        invoked for a discarded cell.
        """
        if self._discarded:
            return
        if self._state is CellState.PENDING:
            self._callbacks.append(callback)
            return
        callback(self)

    def discard(self, *, cancel: bool = False) -> None:
        """Detach the cell from its owner; a later completion has no effect."""
        if self._discarded:
            return
        self._discarded = True
        self._callbacks.clear()
        if self._state is CellState.PENDING:
            logger.debug("Discarding pending %s", self.label or "fetch")
            if cancel and self._task is not None:
                self._task.cancel()

    async def wait(self) -> CellState:
        """Wait until the cell settles and return its state. Never raises."""
        if self._task is not None and not self._task.done():
            await asyncio.wait([self._task])
        # Done-callbacks are scheduled with call_soon; give them a turn.
        while self._state is CellState.PENDING and self._task is not None and not self._discarded:
            await asyncio.sleep(0)
        return self._state

    def _on_done(self, task: asyncio.Future[T]) -> None:
        cancelled = task.cancelled()
        if cancelled:
            self._failure = FetchFailure(error=asyncio.CancelledError(), label=self.label)
            self._state = CellState.FAILED
        else:
            error = task.exception()
            if error is None:
                self._value = task.result()
                self._state = CellState.RESOLVED
            else:
                self._failure = FetchFailure.from_exception(error, self.label)
                self._state = CellState.FAILED

        if self._discarded:
            logger.debug("Ignoring late %s result for discarded %s", self._state.value, self.label)
            return

        # Cancellation is not a loader error; owners still see the FAILED state.
        if self._failure is not None and not cancelled:
            try:
                self._on_failure(self._failure)
            except Exception:
                logger.exception("Failure sink raised for %s", self.label)

        callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            callback(self)
