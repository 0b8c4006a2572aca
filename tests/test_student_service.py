# /tests/test_student_service.py

import pytest
from unittest.mock import MagicMock

from app.models.notification_model import NotificationVariant
from app.models.user_model import Role, User
from app.services.database_helpers.query_result import QueryResult
from app.services.student_service import StudentRosterPage, filter_students


@pytest.fixture
def roster():
    return [
        User(id="usr_1", email="alice@uni.ac.uk", name="Alice Archer", role=Role.STUDENT),
        User(id="usr_2", email="bob@uni.ac.uk", name="Bob Baker", role=Role.STUDENT),
        User(id="usr_3", email="carol@elsewhere.org", name="Carol Cooper", role=Role.STUDENT),
    ]


@pytest.fixture
def page(db_service):
    return StudentRosterPage(db_service)


# --- filter_students ---

def test_filter_with_empty_term_is_identity(roster):
    assert filter_students(roster, "") == roster


def test_filter_matches_name_case_insensitively(roster):
    assert [s.id for s in filter_students(roster, "bAKeR")] == ["usr_2"]


def test_filter_matches_email(roster):
    assert [s.id for s in filter_students(roster, "uni.ac.uk")] == ["usr_1", "usr_2"]


def test_filter_returns_exact_subset_matching_name_or_email(roster):
    term = "er"
    expected = [s for s in roster if term in s.name.lower() or term in s.email.lower()]
    assert filter_students(roster, term) == expected


def test_filtered_students_follows_search_term(page, roster):
    page.students = roster
    page.search_term = "carol"
    assert [s.name for s in page.filtered_students] == ["Carol Cooper"]


# --- StudentRosterPage against a real database ---

def test_list_students_only_returns_students_ordered_by_name(page, demonstrator, db_service):
    db_service.add_users([
        {"email": "z@x.com", "name": "Zed", "role": "student"},
        {"email": "a@x.com", "name": "Amy", "role": "student"},
    ])
    students = page.list_students()
    assert [s.name for s in students] == ["Amy", "Zed"]
    assert page.loading is False


def test_add_student_appends_and_clears_form(page):
    page.list_students()
    new_student = page.add_student(email="new@x.com", name="New Person")

    assert new_student.role == Role.STUDENT
    assert page.students[-1].email == "new@x.com"
    assert page.new_student == {"email": "", "name": ""}
    assert page.notifier.notifications[-1].description == "Student added successfully."


def test_add_duplicate_student_keeps_state_and_reports_error(page):
    page.add_student(email="dup@x.com", name="First")
    before = list(page.students)

    assert page.add_student(email="dup@x.com", name="Second") is None
    assert page.students == before
    assert page.new_student == {"email": "dup@x.com", "name": "Second"}
    last = page.notifier.notifications[-1]
    assert last.variant is NotificationVariant.DESTRUCTIVE
    assert last.description == "Failed to add student. Please try again."


def test_import_students_forces_student_role(page):
    imported = page.import_students([
        {"email": "a@x.com", "name": "A", "role": "demonstrator"},
        {"email": "b@x.com", "name": "B"},
    ])
    assert [s.role for s in imported] == [Role.STUDENT, Role.STUDENT]
    assert page.notifier.notifications[-1].description == "2 students imported successfully."


def test_import_students_drops_credential_columns(page, db_service):
    page.import_students([{"email": "a@x.com", "name": "A", "auth_id": "chosen", "password_hash": "known"}])

    stored = db_service.get_user_by_email("a@x.com").data
    assert stored["auth_id"] is None
    assert stored["password_hash"] is None


def test_import_students_failure_adds_nobody(page, db_service):
    imported = page.import_students([
        {"email": "a@x.com", "name": "A"},
        {"email": "b@x.com", "name": "B", "favourite_colour": "blue"},
    ])
    assert imported == []
    assert page.students == []
    assert db_service.get_students().data == []
    assert page.notifier.notifications[-1].description == "Failed to import students. Please try again."


def test_failed_fetch_leaves_previous_list(roster):
    db = MagicMock()
    db.get_students.return_value = QueryResult.failure("connection refused")
    page = StudentRosterPage(db)
    page.students = roster

    page.list_students()

    assert page.students == roster
    assert page.loading is False
    assert page.notifier.has_errors
