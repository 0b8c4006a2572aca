# /app/services/roster_helpers/csv_intake.py

"""
CSV intake for bulk student import.

The file is parsed with pandas using the header row as field names. Blank
lines are skipped and every value stays a string: no NA conversion, no type
coercion and no check that the columns match the `users` table. Files that
cannot be read as rows (not UTF-8, ragged rows, repeated header names) are
rejected with `CSVParseError` instead of being guessed at. Attaching the
student role is the importer's job, not the parser's.
"""

import csv
import io
import logging
from typing import Callable, Dict, List, Optional

import pandas as pd

from ...core.exceptions import CSVParseError, UnsupportedFileError
from ..notification_service import Notifier

logger = logging.getLogger(__name__)

ACCEPTED_CONTENT_TYPES = {"text/csv", "application/vnd.ms-excel"}
PREVIEW_ROWS = 5


def is_csv_upload(filename: Optional[str], content_type: Optional[str]) -> bool:
    if content_type not in ACCEPTED_CONTENT_TYPES:
        return False
    # application/vnd.ms-excel is only accepted for files named *.csv
    if content_type == "application/vnd.ms-excel":
        return bool(filename) and filename.lower().endswith(".csv")
    return True


def _header_names(file_bytes: bytes) -> List[str]:
    text = file_bytes.decode("utf-8-sig")
    for record in csv.reader(io.StringIO(text)):
        if record:
            return record
    return []


def parse_csv(file_bytes: bytes) -> List[Dict[str, str]]:
    """
    Parses CSV bytes into an ordered list of header-keyed rows.

    Raises CSVParseError for bytes that are not UTF-8, for rows with more
    fields than the header and for repeated header names.
    """
    if not file_bytes or not file_bytes.strip():
        return []
    try:
        headers = _header_names(file_bytes)
        df = pd.read_csv(
            io.BytesIO(file_bytes),
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            encoding="utf-8-sig",
        )
    except pd.errors.EmptyDataError:
        return []
    except UnicodeDecodeError:
        raise CSVParseError("the file is not UTF-8 encoded")
    except (pd.errors.ParserError, csv.Error) as e:
        raise CSVParseError(str(e).strip())

    # A first data row with one field too many becomes an implicit index.
    if len(df.index) and not isinstance(df.index, pd.RangeIndex):
        raise CSVParseError("a row has more fields than the header")

    # pandas renames repeats to `email.1`, which would silently drop a column.
    duplicates = sorted({name for name in headers if headers.count(name) > 1})
    if duplicates:
        raise CSVParseError(f"duplicate column names {duplicates}")
    # Short rows are padded with NaN; keep every value a string.
    return df.fillna("").to_dict(orient="records")


class CSVImport:
    def __init__(self, on_import: Callable[[List[Dict[str, str]]], object], notifier: Optional[Notifier] = None):
        self.on_import = on_import
        self.notifier = notifier or Notifier()
        self.rows: List[Dict[str, str]] = []

    def load(self, file_bytes: bytes, content_type: Optional[str], filename: Optional[str] = None) -> List[Dict[str, str]]:
        """Accepts a single CSV file and replaces the parsed rows."""
        if not is_csv_upload(filename, content_type):
            self.notifier.error("Only CSV files can be imported.")
            raise UnsupportedFileError(filename or "", content_type or "")
        try:
            self.rows = parse_csv(file_bytes)
        except CSVParseError as e:
            logger.warning(f"Rejected {filename or 'upload'}: {e.reason}")
            self.notifier.error("Failed to parse CSV file.")
            self.rows = []
            raise
        logger.info(f"Parsed {len(self.rows)} rows from {filename or 'upload'}")
        return self.rows

    @property
    def headers(self) -> List[str]:
        return list(self.rows[0].keys()) if self.rows else []

    @property
    def total_rows(self) -> int:
        return len(self.rows)

    @property
    def preview(self) -> List[Dict[str, str]]:
        return self.rows[:PREVIEW_ROWS]

    @property
    def preview_note(self) -> Optional[str]:
        if self.total_rows > PREVIEW_ROWS:
            return f"Showing first {PREVIEW_ROWS} rows of {self.total_rows} total rows"
        return None

    def commit(self) -> bool:
        """
        Hands the full parsed set to the import callback. With nothing parsed
        the callback is never called. The preview is kept after committing.
        """
        if not self.rows:
            self.notifier.error("No data to import.")
            return False
        self.on_import(list(self.rows))
        self.notifier.success("Success", f"Imported {self.total_rows} records.")
        return True
