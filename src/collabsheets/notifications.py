"""
Change notification fan-out.

Sinks subscribe to sheets by name. ``notify`` calls every sink attached to
the sheet exactly once, synchronously, with ``(sheet_name, (row, col),
value)``. Delivery order across sinks is unspecified.
"""

import logging
from typing import Dict, FrozenSet, Hashable, Protocol, Set, runtime_checkable

from collabsheets.spreadsheet.model import Position

logger = logging.getLogger(__name__)


@runtime_checkable
class NotificationSink(Protocol):
    """Anything that can receive sheet change events.

    Sinks are kept in sets, so they must be hashable.
    """

    def update(self, sheet_name: str, position: Position, value: str) -> None:
        ...


class NotificationHub:
    """Per-sheet subscriber sets with synchronous delivery.

    A sheet may have a subscription record with no sinks left in it (after a
    detach); that is treated the same as having no record at all.
    """

    def __init__(self) -> None:
        self._subscribers: Dict[str, Set[NotificationSink]] = {}

    def attach(self, sink: NotificationSink, sheet_name: str) -> None:
        """Subscribe ``sink`` to ``sheet_name``. Attaching twice is a no-op."""
        self._subscribers.setdefault(sheet_name, set()).add(sink)
        logger.debug("Attached %s to %s", _describe(sink), sheet_name)

    def detach(self, sink: NotificationSink, sheet_name: str) -> None:
        """Unsubscribe ``sink`` from ``sheet_name``. Unknown sinks are ignored."""
        sinks = self._subscribers.get(sheet_name)
        if sinks is not None:
            sinks.discard(sink)
            logger.debug("Detached %s from %s", _describe(sink), sheet_name)

    def notify(self, sheet_name: str, position: Position, value: str) -> int:
        """Deliver a change event to every sink attached to ``sheet_name``.

        A sink that raises is logged and skipped; the remaining sinks are
        still called.

        Returns:
            Number of sinks the event was delivered to
        """
        delivered = 0
        for sink in list(self._subscribers.get(sheet_name, ())):
            try:
                sink.update(sheet_name, position, value)
            except Exception:
                logger.exception("Sink %s failed to handle update for %s", _describe(sink), sheet_name)
                continue
            delivered += 1
        return delivered

    def subscribers(self, sheet_name: str) -> FrozenSet[NotificationSink]:
        return frozenset(self._subscribers.get(sheet_name, ()))

    def has_subscription(self, sheet_name: str) -> bool:
        """True if a subscription record exists, even an empty one."""
        return sheet_name in self._subscribers

    def is_attached(self, sink: Hashable, sheet_name: str) -> bool:
        return sink in self._subscribers.get(sheet_name, ())


def _describe(sink: object) -> str:
    return getattr(sink, "name", None) or type(sink).__name__
