"""
Bounded boundary calls.

A call that overruns is abandoned on a daemon thread; it cannot be
interrupted, but it no longer blocks the control loop or interpreter exit.
"""

import threading
from collections.abc import Callable
from typing import Any, TypeVar

T = TypeVar("T")


class CallTimeout(Exception):
    """Raised when a bounded call does not finish in time."""


def call_with_timeout(
    func: Callable[..., T], timeout: float | None, *args: Any, **kwargs: Any
) -> T:
    """
    Run ``func`` and wait at most ``timeout`` seconds for it.

    With ``timeout=None`` the call runs inline. Exceptions raised by
    ``func`` propagate unchanged.
    """
    if timeout is None:
        return func(*args, **kwargs)

    outcome: dict[str, Any] = {}

    def _target() -> None:
        try:
            outcome["value"] = func(*args, **kwargs)
        except BaseException as e:  # re-raised in the caller's thread
            outcome["error"] = e

    worker = threading.Thread(
        target=_target, name=f"bounded-{getattr(func, '__name__', 'call')}", daemon=True
    )
    worker.start()
    worker.join(timeout)

    if worker.is_alive():
        raise CallTimeout(f"{getattr(func, '__name__', 'call')} exceeded {timeout}s")
    if "error" in outcome:
        raise outcome["error"]
    return outcome["value"]
