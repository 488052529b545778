"""Reassemble a streamed completion into lines, with cooperative cancellation."""

from __future__ import annotations

import inspect
import logging
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, List, Optional, Protocol

from ..utils.log import log_exception

logger = logging.getLogger(__name__)

# Number of completed lines shown while an answer is still streaming
DISPLAY_WINDOW = 30
TRUNCATION_MARKER = "…"


class StreamProvider(Protocol):
    def stream(
        self,
        model: str,
        messages: List[Dict[str, Any]],
        temperature: Optional[float] = None,
    ) -> Iterable[str]: ...


class StreamState(Enum):
    IDLE = "idle"
    STREAMING = "streaming"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    FAILED = "failed"


class CancellationToken:
    """Flag shared between the render loop and the stream consumer."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


@dataclass
class StreamingAnswer:
    """Line-structured view of a partially received answer."""

    completed_lines: List[str] = field(default_factory=list)
    current_line: Optional[str] = None

    def feed(self, chunk: str) -> None:
        pending = (self.current_line or "") + chunk
        *closed, rest = pending.split("\n")
        self.completed_lines.extend(closed)
        self.current_line = rest or None

    def lines(self) -> List[str]:
        if self.current_line:
            return self.completed_lines + [self.current_line]
        return list(self.completed_lines)

    @property
    def text(self) -> str:
        return "\n".join(self.lines())

    def visible_lines(self, window: int = DISPLAY_WINDOW) -> List[str]:
        """Lines to draw while streaming: a bounded tail of the completed lines."""
        shown = self.completed_lines
        if len(shown) > window:
            shown = [TRUNCATION_MARKER] + shown[-window:]
        else:
            shown = list(shown)
        if self.current_line:
            shown.append(self.current_line)
        return shown

    def copy(self) -> "StreamingAnswer":
        return StreamingAnswer(list(self.completed_lines), self.current_line)


@dataclass
class AssemblyResult:
    text: str
    state: StreamState
    error: Optional[BaseException] = None


class StreamAssembler:
    """Drain one provider stream into a :class:`StreamingAnswer`.

    :meth:`run` is meant to execute on a worker thread while the foreground
    polls :meth:`snapshot` for rendering. Chunks are appended under a lock and
    the cancellation token is checked under the same lock, so once
    :meth:`cancel` returns no further chunk can reach the answer. Cancelling
    also closes the provider stream right away, which unblocks a worker stuck
    waiting on a hung connection.
    """

    def __init__(self, provider: StreamProvider, token: Optional[CancellationToken] = None):
        self.provider = provider
        self.token = token or CancellationToken()
        self.state = StreamState.IDLE
        self.error: Optional[BaseException] = None
        self._answer = StreamingAnswer()
        self._lock = threading.Lock()
        self._subscription: Optional[Iterable[str]] = None

    def snapshot(self) -> StreamingAnswer:
        with self._lock:
            return self._answer.copy()

    def cancel(self) -> StreamingAnswer:
        """Trip the token, release the stream and return the answer as it stands."""
        with self._lock:
            self.token.cancel()
            answer = self._answer.copy()
            subscription = self._subscription
        self._release(subscription)
        return answer

    def result(self) -> AssemblyResult:
        with self._lock:
            return AssemblyResult(self._answer.text, self.state, self.error)

    @staticmethod
    def _release(subscription: Optional[Iterable[str]]) -> None:
        # A generator can only be closed by the thread iterating it; run()
        # closes those itself once it wakes.
        if subscription is None or inspect.isgenerator(subscription):
            return
        close = getattr(subscription, "close", None)
        if close is not None:
            close()

    def run(
        self,
        model: str,
        messages: List[Dict[str, Any]],
        temperature: Optional[float] = None,
    ) -> AssemblyResult:
        self.state = StreamState.STREAMING
        chunks: Optional[Iterator[str]] = None
        subscription: Optional[Iterable[str]] = None
        try:
            subscription = self.provider.stream(model, messages, temperature=temperature)
            with self._lock:
                self._subscription = subscription
                cancelled_early = self.token.cancelled
            if cancelled_early:
                self._release(subscription)
            chunks = iter(subscription)
            for chunk in chunks:
                with self._lock:
                    if self.token.cancelled:
                        break
                    self._answer.feed(chunk)
        except Exception as exc:
            if self.token.cancelled:
                # Reading from a stream closed by cancel() fails; that is the cancellation.
                logger.debug("stream closed after cancel: %s", exc)
            else:  # fail-soft: keep whatever arrived
                log_exception(exc, "stream interrupted")
                self.error = exc
                self.state = StreamState.FAILED
        finally:
            close = getattr(chunks, "close", None)
            if close is not None:
                close()
            self._release(subscription)

        with self._lock:
            if self.state is StreamState.STREAMING:
                self.state = (
                    StreamState.CANCELLED if self.token.cancelled else StreamState.COMPLETED
                )
        logger.debug(
            "stream finished: state=%s lines=%d",
            self.state.value,
            len(self._answer.completed_lines),
        )
        return self.result()
