"""Shared Typer app object, shared option types, and store utility."""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from ..io.sheet_store import CsvSheetStore, GoogleSheetsStore, SheetStore, get_default_sheet_dir

# Shared storage options used across all commands
SheetDirOption = Annotated[
    Optional[Path],
    typer.Option("--sheet-dir", "-p", help="Directory of sheet CSV files (default: ~/.training-log/sheets)"),
]
GoogleOption = Annotated[
    bool,
    typer.Option("--google", "-g", help="Use Google Sheets (GOOGLE_SHEET_ID, GOOGLE_CLIENT_EMAIL, GOOGLE_PRIVATE_KEY)"),
]
JsonOption = Annotated[
    bool,
    typer.Option("--json", "-j", help="Output as JSON for machine processing"),
]

app = typer.Typer(
    name="training-log",
    help="Log lifts, runs, rides and swims, and get next-session targets for each lift.",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug logging"),
    ] = False,
) -> None:
    """
    Personal workout log backed by a spreadsheet.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


def get_store(sheet_dir: Path | None, use_google: bool = False) -> SheetStore:
    """
    Get the spreadsheet store for a command.

    Google Sheets when use_google is set (raises StoreError if the
    environment is incomplete), otherwise the CSV directory at sheet_dir
    or the default location.
    """
    if use_google:
        return GoogleSheetsStore.from_env()
    if sheet_dir is None:
        sheet_dir = get_default_sheet_dir()
    return CsvSheetStore(sheet_dir)
