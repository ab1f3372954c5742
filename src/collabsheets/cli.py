"""CLI entry point for the collaborative spreadsheet simulator."""

from __future__ import annotations

import logging

import click

from . import __version__
from .config import Settings, setup_logging
from .result import ErrorKind
from .service import CollaborationService
from .spreadsheet import format_value

logger = logging.getLogger(__name__)

MENU = """
---------------Menu---------------
1. Create a user
2. Create a sheet
3. Check a sheet
4. Change a value in a sheet
5. Change a sheet's access right
6. Collaborate with another user
7. Exit
----------------------------------"""

EXIT_CHOICE = "7"


def _ask(text: str) -> str:
    return click.prompt(text, default="", show_default=False, prompt_suffix=" > ").strip()


def _ask_user_and_sheet() -> tuple[str, str] | None:
    fields = _ask("Enter username and sheet name (e.g., Kevin SheetA)").split()
    if len(fields) != 2:
        click.echo("Invalid input format. Please enter both username and sheet name.")
        return None
    return fields[0], fields[1]


def print_sheet(service: CollaborationService, settings: Settings, sheet_name: str) -> None:
    result = service.get_sheet(sheet_name)
    if result.failed:
        click.echo("Sheet not found")
        return
    frame = result.value.to_frame(settings.view_rows, settings.view_cols)
    click.echo(f'\nSheet content for "{sheet_name}":')
    click.echo(frame.to_string())


def handle_create_user(service: CollaborationService, settings: Settings) -> None:
    name = _ask("Enter user name")
    if not name:
        click.echo("User name cannot be empty.")
        return
    if service.create_user(name).ok:
        click.echo(f"Created user {name}")
    else:
        click.echo("Failed to create user - User may already exist")


def handle_create_sheet(service: CollaborationService, settings: Settings) -> None:
    fields = _ask_user_and_sheet()
    if fields is None:
        return
    owner, sheet_name = fields
    result = service.create_sheet(owner, sheet_name)
    if result.ok:
        click.echo(f'Sheet named "{sheet_name}" created successfully for user "{owner}".')
    elif result.error is ErrorKind.ALREADY_EXISTS:
        click.echo(f'Failed to create sheet. Sheet "{sheet_name}" already exists.')
    else:
        click.echo(f'Failed to create sheet. Please check if user "{owner}" exists.')


def handle_check_sheet(service: CollaborationService, settings: Settings) -> None:
    fields = _ask_user_and_sheet()
    if fields is None:
        return
    user, sheet_name = fields
    result = service.view_sheet(user, sheet_name)
    if result.error is ErrorKind.USER_NOT_FOUND:
        click.echo(f'User "{user}" does not exist.')
    elif result.error is ErrorKind.SHEET_NOT_FOUND:
        click.echo(f'Sheet "{sheet_name}" not found.')
    elif result.error is ErrorKind.NOT_OWNER:
        click.echo(f'Sheet "{sheet_name}" does not belong to user "{user}".')
    else:
        print_sheet(service, settings, sheet_name)


def handle_update_cell(service: CollaborationService, settings: Settings) -> None:
    fields = _ask_user_and_sheet()
    if fields is None:
        return
    user, sheet_name = fields
    if not service.check_user_and_sheet_exist(user, sheet_name):
        click.echo(
            f"User {user} or Sheet {sheet_name} does not exist. "
            "Please create the user and sheet first."
        )
        return

    print_sheet(service, settings, sheet_name)
    entry = _ask("Enter position and value to update (row column value, e.g., 1 2 3)").split(maxsplit=2)
    if len(entry) != 3:
        click.echo("Invalid input. Please enter row column value.")
        return
    try:
        row, col = int(entry[0]), int(entry[1])
    except ValueError:
        click.echo("Invalid row or column. Please enter numeric values.")
        return
    if not (0 <= row < settings.view_rows and 0 <= col < settings.view_cols):
        click.echo(
            f"Row must be between 0 and {settings.view_rows - 1} "
            f"and column between 0 and {settings.view_cols - 1}."
        )
        return

    result = service.update_cell(user, sheet_name, row, col, entry[2])
    if result.ok:
        click.echo("Updated successfully")
    elif result.error is ErrorKind.ACCESS_DENIED:
        click.echo("You have ReadOnly access. Editing is not permitted. Please contact the administrator.")
    else:
        click.echo("Update failed - Check if user exists and has permission to edit this sheet")
    print_sheet(service, settings, sheet_name)


def handle_access_rights(service: CollaborationService, settings: Settings) -> None:
    sheet_name = _ask("Enter sheet name")
    user = _ask("Enter user name")
    access_type = _ask("Enter access type (ReadOnly/Editable)")
    if not sheet_name or not user:
        click.echo("Sheet name and user name cannot be empty")
        return
    if access_type not in ("ReadOnly", "Editable"):
        click.echo("Invalid access type. Please enter either 'ReadOnly' or 'Editable'")
        return

    service.enable_access_control()
    if access_type == "ReadOnly":
        if service.revoke_access(sheet_name, user).ok:
            click.echo(
                f"Successfully revoked edit access for user {user} on sheet {sheet_name}. "
                "Sheet is now ReadOnly."
            )
        else:
            click.echo("Failed to revoke access. Please check if the sheet and user exist.")
    elif service.set_access(sheet_name, user, False).ok:
        click.echo(f"Edit access granted for user {user} on sheet {sheet_name}")
    else:
        click.echo("Failed to grant edit access. Please check if the sheet and user exist.")


def handle_collaboration(service: CollaborationService, settings: Settings) -> None:
    owner = _ask("Enter sheet owner")
    sheet_name = _ask("Enter sheet name")
    collaborator = _ask("Enter user to share with")
    if not owner or not sheet_name or not collaborator:
        click.echo("All fields must be filled.")
        return

    result = service.share_sheet(owner, sheet_name, collaborator)
    if result.ok:
        click.echo(f"{owner} shared sheet {sheet_name} with {collaborator}")
    elif result.error is ErrorKind.USER_NOT_FOUND:
        click.echo(f"Sheet owner {owner} does not exist.")
    elif result.error is ErrorKind.SHEET_NOT_FOUND:
        click.echo(f"Sheet {sheet_name} does not exist.")
    elif result.error is ErrorKind.NOT_OWNER:
        click.echo(f"Sheet {sheet_name} does not belong to {owner}")
    else:
        click.echo(f"Failed to share sheet with {collaborator}")


HANDLERS = {
    "1": handle_create_user,
    "2": handle_create_sheet,
    "3": handle_check_sheet,
    "4": handle_update_cell,
    "5": handle_access_rights,
    "6": handle_collaboration,
}


def run_menu(service: CollaborationService, settings: Settings) -> None:
    """Run the interactive menu until the user picks Exit."""
    click.echo("Welcome to Collaborative Spreadsheet System!")
    while True:
        click.echo(MENU)
        choice = _ask("Please enter your choice (1-7)")
        click.echo()
        if choice == EXIT_CHOICE:
            service.diagnostics.log("System shutdown")
            click.echo("Thank you for using Collaborative Spreadsheet System!")
            return
        handler = HANDLERS.get(choice)
        if handler is None:
            click.echo("Invalid choice. Please enter a number between 1 and 7.")
            continue
        try:
            handler(service, settings)
        except click.Abort:
            raise
        except Exception as exc:
            logger.exception("Menu choice %s failed", choice)
            click.echo(f"An error occurred: {exc}")
            service.diagnostics.log(f"Error: {exc}")


@click.group(invoke_without_command=True)
@click.version_option(__version__, prog_name="collabsheets")
@click.pass_context
def main(ctx: click.Context) -> None:
    """Collaborative Spreadsheet System."""
    if ctx.invoked_subcommand is None:
        ctx.invoke(shell)


@main.command()
@click.option("--log-file", default=None, help="Diagnostic log file (overrides COLLABSHEETS_LOG_FILE)")
@click.option("--restricted", is_flag=True, default=False, help="Start with access control enabled")
def shell(log_file: str | None, restricted: bool) -> None:
    """Run the interactive menu."""
    overrides: dict = {}
    if log_file is not None:
        overrides["log_file"] = log_file
    if restricted:
        overrides["access_control"] = True
    settings = Settings(**overrides)

    setup_logging(settings.log_level)
    service = CollaborationService.from_settings(settings)
    run_menu(service, settings)


@main.command()
@click.argument("expression")
def evaluate(expression: str) -> None:
    """Evaluate an EXPRESSION the way a cell would."""
    result = CollaborationService.evaluate_expression(expression)
    if result.failed:
        click.echo(f"0 (could not evaluate: {result.message})")
        raise SystemExit(1)
    click.echo(format_value(result.value))
