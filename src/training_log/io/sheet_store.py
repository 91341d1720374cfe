"""
Tabular storage for the training log.

The log lives in a spreadsheet with one sheet per activity (Lift_Log,
Run_Log, Bike_Log, Swim_Log).  SheetStore exposes the two operations the
app needs, reading a named range and appending rows, with two backends:

- CsvSheetStore: a local directory holding one <Sheet>.csv per sheet
- GoogleSheetsStore: a Google Sheets spreadsheet via the Sheets v4 API
"""

import csv
import logging
import os
import re
from pathlib import Path
from typing import Any, Sequence

from ..core.config import (
    BIKE_LOG_HEADER,
    BIKE_LOG_SHEET,
    LIFT_LOG_HEADER,
    LIFT_LOG_SHEET,
    RUN_LOG_HEADER,
    RUN_LOG_SHEET,
    SWIM_LOG_HEADER,
    SWIM_LOG_SHEET,
    get_home_dir,
)

logger = logging.getLogger(__name__)

SHEET_HEADERS: dict[str, tuple[str, ...]] = {
    LIFT_LOG_SHEET: LIFT_LOG_HEADER,
    RUN_LOG_SHEET: RUN_LOG_HEADER,
    BIKE_LOG_SHEET: BIKE_LOG_HEADER,
    SWIM_LOG_SHEET: SWIM_LOG_HEADER,
}

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]

_RANGE_RE = re.compile(r"^(?P<sheet>[^!]+?)(?:!(?P<first>[A-Za-z]+)\d*(?::(?P<last>[A-Za-z]+)\d*)?)?$")


class StoreError(Exception):
    """Raised when the backing spreadsheet cannot be read or written."""

    pass


def column_index(letters: str) -> int:
    """Convert a column name to a 0-based index ("A" -> 0, "K" -> 10, "AA" -> 26)."""
    index = 0
    for ch in letters.upper():
        index = index * 26 + (ord(ch) - ord("A") + 1)
    return index - 1


def parse_range(range_name: str) -> tuple[str, int | None, int | None]:
    """
    Split an A1 range such as "Lift_Log!A:K".

    Returns:
        (sheet, first_col, last_col); column bounds are None when the range
        names the whole sheet

    Raises:
        StoreError: If the range is malformed
    """
    match = _RANGE_RE.match(range_name.strip())
    if match is None:
        raise StoreError(f"Invalid range: {range_name!r}")
    sheet = match.group("sheet").strip("'")
    first = match.group("first")
    last = match.group("last") or first
    if first is None:
        return sheet, None, None
    return sheet, column_index(first), column_index(last)


class SheetStore:
    """Read/append access to a spreadsheet of named sheets."""

    def read_range(self, range_name: str) -> list[list[Any]]:
        """
        Return the cell grid for an A1 range, header row included.

        Raises:
            StoreError: If the sheet is missing or cannot be read
        """
        raise NotImplementedError

    def append_rows(self, sheet: str, rows: Sequence[Sequence[Any]]) -> None:
        """
        Append rows below the last row of a sheet.

        Raises:
            StoreError: If the rows cannot be written
        """
        raise NotImplementedError


class CsvSheetStore(SheetStore):
    """
    Spreadsheet stored as a directory of CSV files.

    Each sheet is ``<directory>/<Sheet>.csv`` with its header on the first
    line.  Files are created, header first, on the first append.
    """

    def __init__(self, directory: str | Path):
        """
        Initialize the store.

        Args:
            directory: Directory holding the sheet CSV files
        """
        self.directory = Path(directory)

    def sheet_path(self, sheet: str) -> Path:
        return self.directory / f"{sheet}.csv"

    def exists(self, sheet: str) -> bool:
        return self.sheet_path(sheet).exists()

    def read_range(self, range_name: str) -> list[list[Any]]:
        sheet, first, last = parse_range(range_name)
        path = self.sheet_path(sheet)
        if not path.exists():
            raise StoreError(f"Sheet not found: {path}")

        try:
            with open(path, "r", newline="", encoding="utf-8") as f:
                grid = [row for row in csv.reader(f)]
        except (OSError, csv.Error) as e:
            raise StoreError(f"Could not read {path}: {e}") from e

        if first is None:
            return grid
        return [row[first : last + 1] for row in grid]

    def append_rows(self, sheet: str, rows: Sequence[Sequence[Any]]) -> None:
        path = self.sheet_path(sheet)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            is_new = not path.exists()
            with open(path, "a", newline="", encoding="utf-8") as f:
                writer = csv.writer(f)
                if is_new and sheet in SHEET_HEADERS:
                    writer.writerow(SHEET_HEADERS[sheet])
                writer.writerows(["" if v is None else v for v in row] for row in rows)
        except OSError as e:
            raise StoreError(f"Could not write {path}: {e}") from e
        logger.debug("Appended %d row(s) to %s", len(rows), path)


class GoogleSheetsStore(SheetStore):
    """Spreadsheet stored in Google Sheets, accessed with a service account."""

    def __init__(self, spreadsheet_id: str, credentials: Any):
        """
        Initialize the store.

        Args:
            spreadsheet_id: ID from the spreadsheet URL
            credentials: google.auth credentials with the spreadsheets scope
        """
        from googleapiclient.discovery import build

        self.spreadsheet_id = spreadsheet_id
        self.service = build("sheets", "v4", credentials=credentials, cache_discovery=False)

    @classmethod
    def from_env(cls) -> "GoogleSheetsStore":
        """
        Build a store from GOOGLE_SHEET_ID, GOOGLE_CLIENT_EMAIL and
        GOOGLE_PRIVATE_KEY.  Literal "\\n" sequences in the key (as stored
        in most secret managers) are turned back into newlines.

        Raises:
            StoreError: If a variable is missing or the key is unusable
        """
        from google.oauth2.service_account import Credentials

        spreadsheet_id = os.environ.get("GOOGLE_SHEET_ID")
        if not spreadsheet_id:
            raise StoreError("Missing GOOGLE_SHEET_ID environment variable")

        client_email = os.environ.get("GOOGLE_CLIENT_EMAIL")
        private_key = os.environ.get("GOOGLE_PRIVATE_KEY", "").replace("\\n", "\n")
        if not client_email or not private_key:
            raise StoreError("Missing Google Sheets credentials (GOOGLE_CLIENT_EMAIL / GOOGLE_PRIVATE_KEY)")

        info = {
            "type": "service_account",
            "client_email": client_email,
            "private_key": private_key,
            "token_uri": "https://oauth2.googleapis.com/token",
        }
        try:
            creds = Credentials.from_service_account_info(info, scopes=SCOPES)
        except ValueError as e:
            raise StoreError(f"Invalid Google service account key: {e}") from e
        return cls(spreadsheet_id, creds)

    def read_range(self, range_name: str) -> list[list[Any]]:
        from google.auth.exceptions import GoogleAuthError
        from googleapiclient.errors import HttpError

        try:
            result = (
                self.service.spreadsheets()
                .values()
                .get(spreadsheetId=self.spreadsheet_id, range=range_name)
                .execute()
            )
        except (HttpError, GoogleAuthError, OSError) as e:
            raise StoreError(f"Could not read {range_name}: {e}") from e
        return result.get("values", [])

    def append_rows(self, sheet: str, rows: Sequence[Sequence[Any]]) -> None:
        from google.auth.exceptions import GoogleAuthError
        from googleapiclient.errors import HttpError

        body = {"values": [["" if v is None else v for v in row] for row in rows]}
        try:
            (
                self.service.spreadsheets()
                .values()
                .append(
                    spreadsheetId=self.spreadsheet_id,
                    range=f"{sheet}!A1",
                    valueInputOption="USER_ENTERED",
                    insertDataOption="INSERT_ROWS",
                    body=body,
                )
                .execute()
            )
        except (HttpError, GoogleAuthError, OSError) as e:
            raise StoreError(f"Could not append to {sheet}: {e}") from e
        logger.debug("Appended %d row(s) to %s", len(rows), sheet)


def get_default_sheet_dir() -> Path:
    """Default CSV workbook directory (~/.training-log/sheets)."""
    return get_home_dir() / "sheets"
