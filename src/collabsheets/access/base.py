"""
Abstract access policy interface.

The AccessPolicy protocol answers a single question: may this user write
this sheet? The collaboration service holds exactly one active policy and
consults it before every cell mutation. Concrete implementations are
OpenPolicy (no enforcement) and RestrictedPolicy (per-user rights).
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class AccessPolicy(Protocol):
    """Protocol for write-access strategies."""

    def can_edit(self, user: str, sheet_name: str) -> bool:
        """Return True if ``user`` may modify cells of ``sheet_name``.

        Args:
            user: The user name
            sheet_name: The sheet name
        """
        ...
