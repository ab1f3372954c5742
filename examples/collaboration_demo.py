"""
Demonstration of the collaboration engine.

Two users share a sheet, edit it, and watch each other's changes arrive.
Access to the sheet is then revoked for one of them.

Run with:
    python examples/collaboration_demo.py
"""

import logging

from collabsheets import CollaborationService, DiagnosticLog


def main():
    """Walk through sharing, editing and revoking access on one sheet."""
    logging.basicConfig(format="  %(message)s", level=logging.INFO)

    print("=" * 70)
    print("collabsheets Collaboration Demo")
    print("=" * 70)
    print()

    service = CollaborationService(diagnostics=DiagnosticLog("collaboration_demo.log"))

    print("1. Creating alice and her Budget sheet...")
    service.create_user("alice")
    service.create_sheet("alice", "Budget")

    print("2. Sharing Budget with bob (bob is created on the fly)...")
    service.share_sheet("alice", "Budget", "bob")

    print("3. bob edits (0, 0); both users are notified:")
    service.update_cell("bob", "Budget", 0, 0, "100 + 50")

    print("4. alice edits (1, 1) with a left-to-right chain 2 + 3 * 4:")
    sheet = service.update_cell("alice", "Budget", 1, 1, "2 + 3 * 4").unwrap()
    print()
    print(sheet.to_frame().to_string())
    print()

    print("5. A malformed formula is stored as 0, but the failure is kept:")
    sheet = service.update_cell("alice", "Budget", 2, 2, "10 / 0").unwrap()
    cell = sheet.cell_at(2, 2)
    print(f"  expression={cell.expression!r} value={cell} error={cell.error!r}")
    print()

    print("6. Revoking bob's access...")
    service.revoke_access("Budget", "bob")
    result = service.update_cell("bob", "Budget", 0, 0, "1")
    print(f"  bob's next edit: {result.error.value}")
    print()
    print("Diagnostic lines were written to collaboration_demo.log")


if __name__ == "__main__":
    main()
