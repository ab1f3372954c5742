"""
Unit tests for access policies.

Tests cover:
- OpenPolicy: every edit allowed
- RestrictedPolicy: default editable, explicit read-only entries, upserts
- Both policies satisfy the AccessPolicy protocol
"""

import pytest

from collabsheets.access import AccessPolicy, OpenPolicy, RestrictedPolicy


class TestOpenPolicy:
    """Test suite for OpenPolicy."""

    @pytest.mark.parametrize("user,sheet", [
        ("alice", "Budget"),
        ("", ""),
        ("nobody", "missing"),
    ])
    def test_always_allows(self, user, sheet):
        assert OpenPolicy().can_edit(user, sheet) is True

    def test_satisfies_protocol(self):
        assert isinstance(OpenPolicy(), AccessPolicy)


class TestRestrictedPolicy:
    """Test suite for RestrictedPolicy."""

    def test_pairs_without_entry_are_editable(self):
        assert RestrictedPolicy().can_edit("alice", "Budget") is True

    def test_read_only_entry_denies(self):
        policy = RestrictedPolicy()
        policy.set_access("bob", "Budget", True)
        assert policy.can_edit("bob", "Budget") is False
        assert policy.is_read_only("bob", "Budget") is True

    def test_rights_are_per_user_and_sheet(self):
        """A read-only entry for one pair does not affect other pairs."""
        policy = RestrictedPolicy()
        policy.set_access("bob", "Budget", True)
        assert policy.can_edit("alice", "Budget")
        assert policy.can_edit("bob", "Other")

    def test_set_access_replaces_prior_value(self):
        policy = RestrictedPolicy()
        policy.set_access("bob", "Budget", True)
        policy.set_access("bob", "Budget", False)
        assert policy.can_edit("bob", "Budget")
        assert dict(policy.rights) == {("bob", "Budget"): False}

    def test_set_access_is_idempotent(self):
        policy = RestrictedPolicy()
        policy.set_access("bob", "Budget", True)
        policy.set_access("bob", "Budget", True)
        assert len(policy.rights) == 1

    def test_rights_view_is_read_only(self):
        policy = RestrictedPolicy()
        with pytest.raises(TypeError):
            policy.rights[("bob", "Budget")] = True  # type: ignore[index]

    def test_satisfies_protocol(self):
        assert isinstance(RestrictedPolicy(), AccessPolicy)
