"""
In-memory Change Notifier Implementation

Process-local pub/sub for "ticket collection changed" signals. Used directly
when every client talks to one process, and as the local fan-out inside the
Kvrocks notifier.
"""

from typing import Dict

from src.platform.logging.loguru_io import Logger
from src.service.queue_board.app.interface.i_change_notifier import (
    ChangeListener,
    Unsubscribe,
)


class InMemoryChangeNotifierImpl:
    """
    Listener registry keyed by subscription token

    - The same callable may be subscribed twice, each subscription is independent
    - Unsubscribe handles are idempotent
    - A raising listener is logged and skipped
    """

    def __init__(self) -> None:
        self._listeners: Dict[object, ChangeListener] = {}

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def subscribe(self, listener: ChangeListener) -> Unsubscribe:
        token = object()
        self._listeners[token] = listener
        Logger.base.debug(f'📡 [NOTIFIER] Subscribed (total listeners: {len(self._listeners)})')

        def unsubscribe() -> None:
            if self._listeners.pop(token, None) is not None:
                Logger.base.debug(
                    f'📡 [NOTIFIER] Unsubscribed (remaining: {len(self._listeners)})'
                )

        return unsubscribe

    async def publish(self) -> None:
        self.fan_out()

    def fan_out(self) -> int:
        delivered = 0
        # Copy: a listener may unsubscribe itself while being notified
        for listener in list(self._listeners.values()):
            try:
                listener()
                delivered += 1
            except Exception as e:
                Logger.base.warning(f'⚠️ [NOTIFIER] Listener failed: {type(e).__name__}: {e}')

        Logger.base.debug(f'📡 [NOTIFIER] Reload signal delivered={delivered}')
        return delivered
