"""
collabsheets - An in-memory, multi-user spreadsheet simulator.

Users create named sheets, edit cells holding simple arithmetic expressions,
and are notified of edits to sheets they collaborate on. Write access can be
restricted per user and sheet.

Usage:
    >>> from collabsheets import CollaborationService
    >>> service = CollaborationService()
    >>> service.create_user("alice").ok
    True
    >>> service.create_sheet("alice", "Budget").ok
    True
    >>> sheet = service.update_cell("alice", "Budget", 0, 0, "100 + 50").unwrap()
    >>> sheet.cell_at(0, 0).value
    150.0

Key components:
- CollaborationService: single entry point for every operation
- Registry: user and sheet store
- NotificationHub: per-sheet change fan-out
- OpenPolicy / RestrictedPolicy: write access strategies
- evaluate: left-to-right arithmetic expression evaluator
"""

from .access import AccessPolicy, OpenPolicy, RestrictedPolicy
from .diagnostics import DiagnosticLog
from .notifications import NotificationHub, NotificationSink
from .registry import Registry
from .result import ErrorKind, Result
from .service import CollaborationService
from .spreadsheet import Cell, Evaluation, Sheet, User, evaluate, try_evaluate
from .exceptions import *

__version__ = "0.1.0"

__all__ = [
    'CollaborationService',
    'Registry',
    'NotificationHub',
    'NotificationSink',
    'AccessPolicy',
    'OpenPolicy',
    'RestrictedPolicy',
    'DiagnosticLog',
    'ErrorKind',
    'Result',
    'Cell',
    'Sheet',
    'User',
    'Evaluation',
    'evaluate',
    'try_evaluate',
]
