# /tests/test_csv_intake.py

import pytest
from unittest.mock import MagicMock

from app.core.exceptions import CSVParseError, UnsupportedFileError
from app.models.notification_model import NotificationVariant
from app.services.roster_helpers.csv_intake import CSVImport, is_csv_upload, parse_csv


@pytest.fixture
def on_import():
    return MagicMock()


def test_commit_hands_over_rows_in_order_without_role(on_import):
    csv_import = CSVImport(on_import)
    csv_import.load(b"email,name\na@x.com,A\nb@x.com,B\n", "text/csv", "students.csv")

    assert csv_import.commit() is True

    on_import.assert_called_once_with([
        {"email": "a@x.com", "name": "A"},
        {"email": "b@x.com", "name": "B"},
    ])
    rows = on_import.call_args.args[0]
    assert all("role" not in row for row in rows)
    assert csv_import.notifier.notifications[-1].description == "Imported 2 records."


def test_empty_file_commit_reports_error_and_skips_callback(on_import):
    csv_import = CSVImport(on_import)
    csv_import.load(b"", "text/csv", "empty.csv")

    assert csv_import.commit() is False

    on_import.assert_not_called()
    last = csv_import.notifier.notifications[-1]
    assert last.variant is NotificationVariant.DESTRUCTIVE
    assert last.description == "No data to import."


def test_header_only_file_has_no_rows():
    assert parse_csv(b"email,name\n") == []


def test_blank_lines_are_skipped_and_values_stay_strings():
    rows = parse_csv(b"email,name,student_no\n\na@x.com,A,007\n\n,NA,\n")
    assert rows == [
        {"email": "a@x.com", "name": "A", "student_no": "007"},
        {"email": "", "name": "NA", "student_no": ""},
    ]


def test_preview_is_truncated_to_five_rows(on_import):
    body = "email,name\n" + "".join(f"s{i}@x.com,S{i}\n" for i in range(8))
    csv_import = CSVImport(on_import)
    csv_import.load(body.encode(), "text/csv", "big.csv")

    assert csv_import.total_rows == 8
    assert len(csv_import.preview) == 5
    assert csv_import.headers == ["email", "name"]
    assert csv_import.preview_note == "Showing first 5 rows of 8 total rows"


def test_short_file_has_no_preview_note(on_import):
    csv_import = CSVImport(on_import)
    csv_import.load(b"email,name\na@x.com,A\n", "text/csv", "one.csv")
    assert csv_import.preview_note is None


def test_preview_is_kept_after_commit(on_import):
    csv_import = CSVImport(on_import)
    csv_import.load(b"email,name\na@x.com,A\n", "text/csv", "one.csv")
    csv_import.commit()
    assert csv_import.total_rows == 1


def test_non_csv_upload_is_rejected(on_import):
    csv_import = CSVImport(on_import)
    with pytest.raises(UnsupportedFileError):
        csv_import.load(b"%PDF-1.4", "application/pdf", "roster.pdf")
    assert csv_import.notifier.notifications[-1].description == "Only CSV files can be imported."


@pytest.mark.parametrize(
    "body",
    [
        b"email,name\na@x.com,A\nb@x.com,B,extra\n",
        b"email,name\na@x.com,A,extra\n",
        b"email,name\n\xff\xfe\x00bad,bytes\n",
        b"email,name,email\na@x.com,A,b@x.com\n",
    ],
    ids=["ragged-row", "extra-field-in-first-row", "not-utf8", "duplicate-header"],
)
def test_unreadable_files_raise_parse_error(body):
    with pytest.raises(CSVParseError):
        parse_csv(body)


def test_duplicate_header_names_are_listed():
    with pytest.raises(CSVParseError, match="email"):
        parse_csv(b"email,name,email\na@x.com,A,b@x.com\n")


def test_short_rows_are_padded_with_empty_strings():
    assert parse_csv(b"email,name,student_no\na@x.com,A\n") == [
        {"email": "a@x.com", "name": "A", "student_no": ""}
    ]


def test_byte_order_mark_is_not_part_of_first_header():
    assert parse_csv("email,name\na@x.com,A\n".encode("utf-8-sig")) == [{"email": "a@x.com", "name": "A"}]


def test_parse_failure_notifies_and_leaves_nothing_to_commit(on_import):
    csv_import = CSVImport(on_import)
    csv_import.load(b"email,name\na@x.com,A\n", "text/csv", "good.csv")

    with pytest.raises(CSVParseError):
        csv_import.load(b"email,name\na@x.com,A\nb@x.com,B,extra\n", "text/csv", "bad.csv")

    last = csv_import.notifier.notifications[-1]
    assert last.variant is NotificationVariant.DESTRUCTIVE
    assert last.description == "Failed to parse CSV file."
    assert csv_import.total_rows == 0
    assert csv_import.commit() is False
    on_import.assert_not_called()


@pytest.mark.parametrize(
    "filename, content_type, accepted",
    [
        ("students.csv", "text/csv", True),
        ("students.csv", "application/vnd.ms-excel", True),
        ("students.xls", "application/vnd.ms-excel", False),
        ("students.txt", "text/plain", False),
    ],
)
def test_accepted_media_types(filename, content_type, accepted):
    assert is_csv_upload(filename, content_type) is accepted
