"""Signal-driven graceful shutdown."""

import os
import signal
import sys
import threading
from collections.abc import Callable, Iterable
from types import FrameType

import structlog

logger = structlog.get_logger()

SHUTDOWN_SIGNALS: tuple[signal.Signals, ...] = (signal.SIGINT, signal.SIGTERM)


def _default_exit(code: int) -> None:
    if threading.current_thread() is threading.main_thread():
        sys.exit(code)
    # SystemExit would only end a worker thread
    os._exit(code)


class ShutdownHook:
    """Run cleanup callbacks, in order, once the process is asked to stop.

    ``install`` must be called from the main thread (a Python restriction
    on signal handlers); ``wait`` may then block on any thread::

        hook = ShutdownHook(server.close, db.dispose)
        hook.install()
        threading.Thread(target=hook.wait, daemon=True).start()
    """

    def __init__(
        self,
        *callbacks: Callable[[], object],
        signals: Iterable[signal.Signals] = SHUTDOWN_SIGNALS,
        exit_code: int = 0,
        exit_func: Callable[[int], object] = _default_exit,
    ) -> None:
        self._callbacks = list(callbacks)
        self._signals = tuple(signals)
        self._exit_code = exit_code
        self._exit = exit_func
        self._event = threading.Event()
        self.received: signal.Signals | None = None

    def register(self, callback: Callable[[], object]) -> None:
        """Append a callback; callbacks run in registration order."""
        self._callbacks.append(callback)

    def install(self) -> None:
        """Subscribe to the shutdown signals."""
        for sig in self._signals:
            signal.signal(sig, self._handle)

    def _handle(self, signum: int, frame: FrameType | None) -> None:
        self.received = signal.Signals(signum)
        self._event.set()

    def trigger(self) -> None:
        """Request shutdown without a signal."""
        self._event.set()

    @property
    def triggered(self) -> bool:
        return self._event.is_set()

    def wait(self) -> None:
        """Block until shutdown is requested, run the callbacks, then exit."""
        logger.info("Running, press ctrl+c to quit")
        self._event.wait()

        logger.info(
            "Shutting down",
            signal=self.received.name if self.received else None,
            callbacks=len(self._callbacks),
        )
        for callback in self._callbacks:
            callback()
        self._exit(self._exit_code)


def ctrl_c(*callbacks: Callable[[], object]) -> None:
    """Block the main thread until SIGINT/SIGTERM, run ``callbacks`` and exit."""
    hook = ShutdownHook(*callbacks)
    hook.install()
    hook.wait()
