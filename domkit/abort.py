"""Abort signals and the controllers that trigger them."""

from __future__ import annotations

import threading
from typing import Any, Callable, Iterable, Optional

from domkit.events import Event, EventTarget
from domkit.exceptions import AbortError


def _contains(signals: list[AbortSignal], signal: AbortSignal) -> bool:
    return any(existing is signal for existing in signals)


class AbortSignal(EventTarget):
    """Signals that an operation should be aborted."""

    def __init__(self) -> None:
        super().__init__()
        self.reason: Any = None
        self.abort_algorithms: list[Callable[[], None]] = []
        self.dependent = False
        self.source_signals: list[AbortSignal] = []
        self.dependent_signals: list[AbortSignal] = []
        self.onabort: Optional[Callable[[Event], None]] = None

    @property
    def aborted(self) -> bool:
        return self.reason is not None

    @classmethod
    def abort(cls, reason: Any = None) -> AbortSignal:
        """Return a signal that is already aborted."""
        signal = cls()
        signal.reason = reason if reason is not None else AbortError("Aborting...")
        return signal

    @classmethod
    def timeout(cls, milliseconds: int) -> AbortSignal:
        """Return a signal that aborts with TimeoutError after *milliseconds*."""
        if milliseconds < 0:
            raise ValueError("milliseconds must not be negative")
        signal = cls()
        timer = threading.Timer(
            milliseconds / 1000.0,
            signal.signal_abort,
            args=(TimeoutError("signal timed out"),),
        )
        timer.daemon = True
        timer.start()
        return signal

    @classmethod
    def any(cls, signals: Iterable[AbortSignal]) -> AbortSignal:
        """Return a signal that aborts as soon as any of *signals* does."""
        signals = list(signals)
        result = cls()
        for signal in signals:
            if signal.aborted:
                result.reason = signal.reason
                return result
        result.dependent = True
        for signal in signals:
            sources = signal.source_signals if signal.dependent else [signal]
            for source in sources:
                if not _contains(result.source_signals, source):
                    result.source_signals.append(source)
                    source.dependent_signals.append(result)
        return result

    def throw_if_aborted(self) -> None:
        if not self.aborted:
            return
        if isinstance(self.reason, BaseException):
            raise self.reason
        raise AbortError(str(self.reason))

    def signal_abort(self, reason: Any = None) -> None:
        """Abort this signal and every signal that depends on it."""
        if self.aborted:
            return
        self.reason = reason if reason is not None else AbortError("Aborting...")
        to_abort = []
        for dependent in self.dependent_signals:
            if not dependent.aborted:
                dependent.reason = self.reason
                to_abort.append(dependent)
        self._run_abort_steps()
        for dependent in to_abort:
            dependent._run_abort_steps()

    def _run_abort_steps(self) -> None:
        algorithms, self.abort_algorithms = self.abort_algorithms, []
        for algorithm in algorithms:
            algorithm()
        event = Event("abort")
        if self.onabort is not None:
            self.onabort(event)
        self.dispatch_event(event)


class AbortController:
    """Owns an AbortSignal and aborts it on request."""

    def __init__(self) -> None:
        self.signal = AbortSignal()

    def abort(self, reason: Any = None) -> None:
        self.signal.signal_abort(reason)