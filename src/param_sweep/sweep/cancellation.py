"""Cooperative cancellation for the trial loop."""

from __future__ import annotations

import logging
import signal
import sys
import threading

logger = logging.getLogger(__name__)


class CancellationToken:
    """Flag any thread or signal handler may raise; the loop polls it between trials."""

    def __init__(self) -> None:
        self._event = threading.Event()
        self.reason: str | None = None

    def cancel(self, reason: str = "cancelled") -> None:
        if not self._event.is_set():
            self.reason = reason
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def __bool__(self) -> bool:
        return self.cancelled

    def __repr__(self) -> str:
        return f"CancellationToken(cancelled={self.cancelled}, reason={self.reason!r})"


class interrupt_on_sigint:  # noqa: N801 (used as a context manager)
    """Context manager that turns the first Ctrl-C into a cancellation request.

    The second Ctrl-C exits immediately with status 130. The previous handler
    is restored on exit. Must be entered from the main thread.
    """

    def __init__(self, token: CancellationToken) -> None:
        self.token = token
        self._orig_handler = None

    def __enter__(self) -> CancellationToken:
        self._orig_handler = signal.getsignal(signal.SIGINT)
        signal.signal(signal.SIGINT, self._handle)
        return self.token

    def __exit__(self, exc_type, exc, tb) -> bool:
        signal.signal(signal.SIGINT, self._orig_handler)  # type: ignore[arg-type]
        return False

    def _handle(self, signum, frame) -> None:
        if self.token.cancelled:
            sys.exit(130)
        logger.warning("Interrupt received, stopping after the current trial")
        self.token.cancel("interrupt")
