"""
Signal connections owned by a component and torn down together.
"""
from typing import Callable, List, Tuple


class Subscriptions:
    """
    Records signal/slot connections so they can all be disconnected at once.

    Page widgets are rebuilt on every zoom change; disconnecting through
    this object keeps stale slots from firing on destroyed widgets.
    """

    def __init__(self):
        self._connections: List[Tuple[object, Callable]] = []

    def connect(self, signal, slot: Callable) -> None:
        signal.connect(slot)
        self._connections.append((signal, slot))

    def clear(self) -> None:
        """Disconnect everything recorded so far."""
        while self._connections:
            signal, slot = self._connections.pop()
            try:
                signal.disconnect(slot)
            except (TypeError, RuntimeError):
                # Already disconnected or the sender was deleted
                pass

    def __len__(self) -> int:
        return len(self._connections)
