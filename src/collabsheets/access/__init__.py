"""
Access control module.

Provides the pluggable policies the collaboration service consults before
mutating a sheet.
"""

from collabsheets.access.base import AccessPolicy
from collabsheets.access.policies import OpenPolicy, RestrictedPolicy

__all__ = [
    "AccessPolicy",
    "OpenPolicy",
    "RestrictedPolicy",
]
