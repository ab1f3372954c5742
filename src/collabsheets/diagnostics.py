"""
Append-only diagnostic log.

The collaboration service reports every notable event (users and sheets
created, cells updated, access changes, denied edits) to a diagnostic sink.
The log is write-only and fire-and-forget: it is never read back, and a
failure to persist a line must never reach the caller.

``DiagnosticLog`` writes ``"YYYY-mm-dd HH:MM:SS - message"`` lines to a file
through a ``logging.FileHandler``. The file is opened on first write; I/O
errors are routed to ``Handler.handleError``, which reports them on stderr
and carries on.
"""

import logging
from pathlib import Path
from typing import Optional, Protocol, Union

logger = logging.getLogger(__name__)

DEFAULT_LOG_FILE = "collaborative_system.log"
LINE_FORMAT = "%(asctime)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class DiagnosticSink(Protocol):
    """Consumer of human-readable event lines. Implementations must not raise."""

    def log(self, message: str) -> None:
        ...


class DiagnosticLog:
    """File-backed diagnostic sink.

    Every line is also forwarded to this module's logger at DEBUG level, so a
    sink with no file (``path=None``) still leaves a trace when debug logging
    is on.

    Attributes:
        path: The log file, or None when file output is disabled
    """

    def __init__(self, path: Optional[Union[str, Path]] = DEFAULT_LOG_FILE) -> None:
        self.path = Path(path) if path else None
        self._handler: Optional[logging.Handler] = None
        if self.path is not None:
            self._handler = logging.FileHandler(self.path, encoding="utf-8", delay=True)
            self._handler.setFormatter(logging.Formatter(LINE_FORMAT, datefmt=DATE_FORMAT))

    def log(self, message: str) -> None:
        logger.debug(message)
        if self._handler is None:
            return
        record = logging.makeLogRecord({
            "name": logger.name,
            "levelno": logging.INFO,
            "levelname": "INFO",
            "msg": message,
        })
        try:
            self._handler.handle(record)
        except OSError:
            self._handler.handleError(record)

    def close(self) -> None:
        if self._handler is not None:
            self._handler.close()

    def __repr__(self) -> str:
        return f"DiagnosticLog(path={str(self.path) if self.path else None!r})"
