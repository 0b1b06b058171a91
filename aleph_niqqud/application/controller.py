"""Debounced, cancellable background vocalization for interactive callers."""
from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import wait as wait_futures
from dataclasses import dataclass, field
from enum import Enum
import itertools
import threading
from typing import Callable

from ..constants import DEFAULT_DEBOUNCE_SECONDS
from ..domain.alphabet import strip_diacritics
from ..errors import NiqqudError, PredictionError
from .state import NiqqudState


class GenerationStatus(str, Enum):
    IDLE = "idle"
    DEBOUNCING = "debouncing"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True)
class GenerationRequest:
    request_id: int
    text: str
    normalized_text: str


@dataclass(frozen=True)
class GenerationResult:
    request_id: int
    output: str = ""
    error: NiqqudError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class _Run:
    request: GenerationRequest
    cancel_event: threading.Event = field(default_factory=threading.Event)
    future: Future | None = None


class GenerationController:
    """Last-request-wins front end over :class:`NiqqudState`.

    ``generate`` supersedes any pending or running request, waits a quiet
    interval on a background worker and then vocalizes. Only the newest,
    uncancelled run may publish into ``output``/``error``; everything else is
    dropped silently. ``dispatch`` lets the owner marshal publication onto its
    own thread (for example ``lambda fn: root.after(0, fn)``).

    The observer is called while the controller lock is held, so a newer
    ``generate`` cannot slip in between the currency check and the callback.
    It may call back into the controller from the same thread.
    """

    def __init__(
        self,
        state: NiqqudState,
        logger,
        *,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
        observer: Callable[[GenerationResult], None] | None = None,
        dispatch: Callable[[Callable[[], None]], None] | None = None,
    ) -> None:
        self.state = state
        self.logger = logger
        self.debounce_seconds = max(0.0, float(debounce_seconds))
        self.observer = observer
        self.dispatch = dispatch
        self.output = ""
        self.is_generating = False
        self.error: NiqqudError | None = None
        self.status = GenerationStatus.IDLE
        self._request_ids = itertools.count(1)
        self._current: _Run | None = None
        self._lock = threading.RLock()
        self._executor = ThreadPoolExecutor(
            max_workers=1,
            thread_name_prefix="niqqud-generate",
        )

    def generate(self, text: str) -> GenerationRequest:
        with self._lock:
            self._cancel_current_locked()
            request = GenerationRequest(
                request_id=next(self._request_ids),
                text=text,
                normalized_text=strip_diacritics(text),
            )
            if not text:
                self.output = ""
                self.error = None
                self.is_generating = False
                self.status = GenerationStatus.COMPLETED
                self._notify(GenerationResult(request.request_id))
                return request
            run = _Run(request)
            self._current = run
            self.status = GenerationStatus.DEBOUNCING
            run.future = self._executor.submit(self._execute, run)
        self.logger.debug("Queued niqqud request id=%s chars=%s", request.request_id, len(text))
        return request

    def cancel(self) -> None:
        with self._lock:
            cancelled = self._cancel_current_locked()
            self.is_generating = False
            self.status = GenerationStatus.IDLE
        if cancelled is not None:
            self.logger.debug("Cancelled niqqud request id=%s", cancelled.request_id)

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the current run finished; ``False`` on timeout."""
        with self._lock:
            run = self._current
        if run is None or run.future is None:
            return True
        done, _ = wait_futures([run.future], timeout=timeout)
        return bool(done)

    def shutdown(self) -> None:
        self.cancel()
        self._executor.shutdown(wait=False, cancel_futures=True)

    def _cancel_current_locked(self) -> GenerationRequest | None:
        run = self._current
        self._current = None
        if run is None:
            return None
        run.cancel_event.set()
        return run.request

    def _is_current(self, run: _Run) -> bool:
        return self._current is run and not run.cancel_event.is_set()

    def _execute(self, run: _Run) -> None:
        if run.cancel_event.wait(self.debounce_seconds):
            return
        with self._lock:
            if not self._is_current(run):
                return
            self.status = GenerationStatus.RUNNING
            self.is_generating = True
            self.error = None
        request = run.request
        try:
            output = self.state.add_niqqud(request.normalized_text, run.cancel_event)
        except NiqqudError as exc:
            self.logger.warning("Niqqud request id=%s failed: %s", request.request_id, exc)
            self._publish(run, GenerationResult(request.request_id, error=exc))
            return
        except Exception as exc:
            self.logger.exception("Niqqud request id=%s failed unexpectedly", request.request_id)
            error = PredictionError(str(exc) or type(exc).__name__)
            self._publish(run, GenerationResult(request.request_id, error=error))
            return
        if output is None:
            return
        self._publish(run, GenerationResult(request.request_id, output=output))

    def _publish(self, run: _Run, result: GenerationResult) -> None:
        if self.dispatch is None:
            self._apply(run, result)
        else:
            self.dispatch(lambda: self._apply(run, result))

    def _apply(self, run: _Run, result: GenerationResult) -> None:
        with self._lock:
            if not self._is_current(run):
                self.logger.debug("Dropped stale niqqud result id=%s", result.request_id)
                return
            self._current = None
            self.is_generating = False
            if result.ok:
                self.output = result.output
                self.error = None
                self.status = GenerationStatus.COMPLETED
            else:
                self.error = result.error
                self.status = GenerationStatus.FAILED
            self._notify(result)

    def _notify(self, result: GenerationResult) -> None:
        if self.observer is None:
            return
        try:
            self.observer(result)
        except Exception:
            self.logger.exception("Niqqud observer failed for request id=%s", result.request_id)
