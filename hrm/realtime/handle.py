"""Process-wide handle to the realtime server.

ASGI bootstrap registers the Socket.IO server once with ``set_server``; any
other code can then ``broadcast`` to every connected client without importing
the server module (and its JWT/ORM dependencies).

Broadcasting is best effort: realtime notification is auxiliary, so a failing
emit is logged and counted but never raised to the caller.
"""

from __future__ import annotations

import inspect
import logging
import threading
from typing import Any

from asgiref.sync import async_to_sync

logger = logging.getLogger(__name__)

_server: Any | None = None
_failure_count = 0
_failure_lock = threading.Lock()


def set_server(server: Any | None) -> None:
    """Register ``server`` as the process-wide realtime server.

    Replaces any previous value unconditionally; ``None`` clears the slot.
    """

    global _server  # noqa: PLW0603
    if server is not None and _server is not None and server is not _server:
        logger.warning(
            "Replacing realtime server %r with %r",
            _server,
            server,
        )
    _server = server


def get_server() -> Any | None:
    return _server


def broadcast_failure_count() -> int:
    """Number of broadcasts whose emit failed since process start."""
    return _failure_count


def _record_failure(event: str) -> None:
    global _failure_count  # noqa: PLW0603
    # Sync views run on a thread pool under ASGI.
    with _failure_lock:
        _failure_count += 1
    logger.warning("Realtime broadcast of %r failed", event, exc_info=True)


async def _wait(awaitable: Any) -> Any:
    return await awaitable


def broadcast(event: str, payload: Any) -> None:
    """Emit ``event`` with ``payload`` to all connected clients.

    Safe to call from sync Django code (signals, views). No-op when no server
    is registered. Never raises.
    """

    server = _server
    if server is None:
        return
    try:
        result = server.emit(event, payload)
        if inspect.isawaitable(result):
            try:
                async_to_sync(_wait)(result)
            finally:
                # Close the coroutine if the loop never ran it.
                if inspect.iscoroutine(result):
                    result.close()
    except Exception:  # noqa: BLE001 - broadcast must degrade, not crash
        _record_failure(event)


async def abroadcast(event: str, payload: Any) -> None:
    """Async counterpart of ``broadcast`` for code already on the event loop."""

    server = _server
    if server is None:
        return
    try:
        result = server.emit(event, payload)
        if inspect.isawaitable(result):
            await result
    except Exception:  # noqa: BLE001 - broadcast must degrade, not crash
        _record_failure(event)
