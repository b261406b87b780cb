"""
Change Notifier Interface

Tells observers that the ticket collection changed. No payload is sent:
observers re-fetch through the list query.

Follows Dependency Inversion Principle:
- Use cases depend on this interface
- Platform notifiers (in-memory, Kvrocks pub/sub) implement it
"""

from typing import Callable, Protocol


ChangeListener = Callable[[], None]
Unsubscribe = Callable[[], None]


class IChangeNotifier(Protocol):
    def subscribe(self, listener: ChangeListener) -> Unsubscribe:
        """
        Register listener for reload signals

        Returns:
            Handle that deregisters the listener. Calling it more than once is a no-op.
        """
        ...

    async def publish(self) -> None:
        """
        Signal every listener that the collection changed

        Note:
            Called only after the mutation is persisted. A failing listener is
            logged and skipped, it never fails the mutation.
        """
        ...
