"""Rate-shaping helpers for callbacks fired from UI or file events"""
import functools
import threading
import time
from typing import Any, Callable, Optional

from utils.logger import log_error


def throttle(func: Callable, limit: float) -> Callable:
    """
    Run ``func`` at most once per ``limit`` seconds.

    The first call runs immediately. Calls made while the window is open
    do not run ``func`` and return the result of the last call that did.
    """
    lock = threading.Lock()
    state = {'until': 0.0, 'result': None}

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        with lock:
            now = time.monotonic()
            if now < state['until']:
                return state['result']
            state['until'] = now + limit
        result = func(*args, **kwargs)
        state['result'] = result
        return result

    return wrapper


class _Debounced:
    """Callable wrapper returned by :func:`debounce`."""

    def __init__(self, func: Callable, wait: float):
        self.func = func
        self.wait = wait
        self._timer: Optional[threading.Timer] = None
        self._pending: Optional[tuple] = None
        self._generation = 0
        self._lock = threading.Lock()
        functools.update_wrapper(self, func, updated=())

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        with self._lock:
            # Each call pushes the deadline back
            if self._timer is not None:
                self._timer.cancel()

            self._generation += 1
            self._pending = (args, kwargs)
            timer = threading.Timer(self.wait, self._fire, args=[self._generation])
            timer.daemon = True
            timer.start()
            self._timer = timer

    def _fire(self, generation: Optional[int] = None) -> None:
        with self._lock:
            # A timer superseded after it started running must not take the newer call
            if generation is not None and generation != self._generation:
                return
            pending = self._pending
            self._pending = None
            self._timer = None

        if pending is None:
            return

        args, kwargs = pending
        try:
            self.func(*args, **kwargs)
        except Exception as e:
            log_error(f"Error in debounced call to {getattr(self.func, '__name__', self.func)}", e)

    def cancel(self) -> None:
        """Drop the pending call, if any"""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = None
            self._pending = None

    def flush(self) -> None:
        """Run the pending call now instead of waiting for the timer"""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = None
        self._fire()

    @property
    def pending(self) -> bool:
        return self._pending is not None


def debounce(func: Callable, wait: float) -> _Debounced:
    """
    Delay ``func`` until ``wait`` seconds have passed without another call.

    Only the most recent arguments are used. The returned wrapper also
    exposes ``cancel()`` and ``flush()``.
    """
    return _Debounced(func, wait)
