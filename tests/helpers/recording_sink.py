"""
Recording doubles for notification and diagnostic sinks.

``RecordingSink`` captures every change event delivered by the hub so tests
can assert on exactly who was notified, how often, and with what payload.
``RecordingDiagnostics`` captures diagnostic lines instead of writing them
to a file.
"""

from typing import List, Tuple


class RecordingSink:
    """Notification sink that remembers every ``update`` call.

    Sinks are stored in sets by the hub, so equality and hashing stay
    identity-based: two recorders with the same name are distinct sinks.

    Usage::

        sink = RecordingSink("A")
        hub.attach(sink, "S1")
        hub.notify("S1", (0, 0), "5")

        assert sink.events == [("S1", (0, 0), "5")]
    """

    def __init__(self, name: str = "sink") -> None:
        self.name = name
        self.events: List[Tuple[str, Tuple[int, int], str]] = []

    def update(self, sheet_name: str, position: Tuple[int, int], value: str) -> None:
        self.events.append((sheet_name, position, value))

    @property
    def count(self) -> int:
        return len(self.events)

    def events_for(self, sheet_name: str) -> List[Tuple[str, Tuple[int, int], str]]:
        return [e for e in self.events if e[0] == sheet_name]

    def __repr__(self) -> str:
        return f"RecordingSink({self.name!r}, events={len(self.events)})"


class FailingSink(RecordingSink):
    """Sink whose ``update`` always raises after recording the call."""

    def update(self, sheet_name: str, position: Tuple[int, int], value: str) -> None:
        super().update(sheet_name, position, value)
        raise RuntimeError("sink is broken")


class RecordingDiagnostics:
    """Diagnostic sink that keeps lines in memory."""

    def __init__(self) -> None:
        self.lines: List[str] = []

    def log(self, message: str) -> None:
        self.lines.append(message)

    def contains(self, fragment: str) -> bool:
        return any(fragment in line for line in self.lines)
