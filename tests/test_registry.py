"""
Unit tests for the user and sheet registry.

Tests cover:
- User creation: blank names, uniqueness, case sensitivity
- Sheet creation: owner existence, uniqueness, empty initial cells
- Lookups and snapshot replacement
"""

import pytest

from collabsheets.result import ErrorKind
from collabsheets.spreadsheet.model import Cell, Sheet, User


class TestCreateUser:
    """Test suite for Registry.create_user."""

    def test_create_user_succeeds_once(self, registry):
        result = registry.create_user("alice")
        assert result.ok
        assert result.value == User("alice")
        assert registry.user_exists("alice")

    def test_duplicate_user_fails_and_keeps_original(self, registry):
        first = registry.create_user("alice").value
        again = registry.create_user("alice")

        assert again.error is ErrorKind.ALREADY_EXISTS
        assert registry.get_user("alice") is first

    @pytest.mark.parametrize("name", ["", "   ", None])
    def test_blank_name_fails(self, registry, name):
        result = registry.create_user(name)
        assert result.error is ErrorKind.INVALID_NAME
        assert registry.user_names() == []

    def test_names_are_case_sensitive(self, registry):
        assert registry.create_user("alice").ok
        assert registry.create_user("Alice").ok
        assert sorted(registry.user_names()) == ["Alice", "alice"]


class TestCreateSheet:
    """Test suite for Registry.create_sheet."""

    def test_create_sheet_starts_empty(self, registry):
        registry.create_user("alice")
        result = registry.create_sheet("alice", "Budget")

        assert result.ok
        assert result.value == Sheet("Budget", "alice")
        assert dict(result.value.cells) == {}

    def test_unknown_owner_fails(self, registry):
        result = registry.create_sheet("ghost", "Budget")
        assert result.error is ErrorKind.USER_NOT_FOUND
        assert not registry.sheet_exists("Budget")

    def test_duplicate_sheet_fails_and_keeps_original(self, registry):
        registry.create_user("alice")
        registry.create_user("bob")
        original = registry.create_sheet("alice", "Budget").value

        again = registry.create_sheet("bob", "Budget")

        assert again.error is ErrorKind.ALREADY_EXISTS
        assert registry.get_sheet("Budget") is original
        assert registry.get_sheet("Budget").owner == "alice"

    def test_blank_sheet_name_fails(self, registry):
        registry.create_user("alice")
        assert registry.create_sheet("alice", " ").error is ErrorKind.INVALID_NAME


class TestLookups:
    """Test suite for lookups and snapshot replacement."""

    def test_missing_lookups_return_none(self, registry):
        assert registry.get_user("nobody") is None
        assert registry.get_sheet("nothing") is None
        assert not registry.user_exists("nobody")
        assert not registry.sheet_exists("nothing")

    def test_lookups_are_exact_match(self, registry):
        registry.create_user("alice")
        assert registry.get_user("ALICE") is None

    def test_replace_sheet_swaps_snapshot(self, registry):
        registry.create_user("alice")
        sheet = registry.create_sheet("alice", "Budget").value
        updated = sheet.with_cell(0, 0, Cell("1", 1.0))

        registry.replace_sheet(updated)

        assert registry.get_sheet("Budget") is updated
        assert (0, 0) not in sheet.cells

    def test_replace_unknown_sheet_raises(self, registry):
        with pytest.raises(KeyError):
            registry.replace_sheet(Sheet("Nope", "alice"))

    def test_sheet_names(self, registry):
        registry.create_user("alice")
        registry.create_sheet("alice", "A")
        registry.create_sheet("alice", "B")
        assert registry.sheet_names() == ["A", "B"]
