# /tests/test_user_service.py

from datetime import timedelta

import pytest

from app.core import security
from app.models.user_model import Role, SignUp
from app.services import user_service


def test_signup_stores_only_a_password_hash(db_service):
    user = user_service.create_user(db_service, SignUp(email="new@lab.ac.uk", name="New", password="s3cret-pass"))

    stored = db_service.get_user_by_email("new@lab.ac.uk").data
    assert user.role is Role.STUDENT
    assert stored["password_hash"] != "s3cret-pass"
    assert security.verify_password("s3cret-pass", stored["password_hash"])


def test_signup_ignores_a_requested_role(db_service):
    payload = SignUp.model_validate(
        {"email": "eve@lab.ac.uk", "name": "Eve", "password": "s3cret-pass", "role": "demonstrator"}
    )
    user = user_service.create_user(db_service, payload)
    assert user.role is Role.STUDENT


def test_signup_claims_roster_entry_and_sets_password(db_service):
    db_service.add_users([{"email": "rostered@lab.ac.uk", "name": "Rostered", "role": "student"}])

    user = user_service.create_user(db_service, SignUp(email="rostered@lab.ac.uk", name="Rostered", password="s3cret-pass"))

    assert user.auth_id
    assert user_service.authenticate_user(db_service, "rostered@lab.ac.uk", "s3cret-pass") == user


def test_authenticate_requires_the_right_password(db_service, student, password):
    assert user_service.authenticate_user(db_service, student.email, password) == student
    assert user_service.authenticate_user(db_service, student.email, "wrong-password") is None
    assert user_service.authenticate_user(db_service, student.email, "") is None


def test_authenticate_rejects_roster_entries_that_never_signed_up(db_service):
    db_service.add_users([{"email": "rostered@lab.ac.uk", "name": "Rostered", "role": "student"}])
    assert user_service.authenticate_user(db_service, "rostered@lab.ac.uk", "anything-at-all") is None


def test_issued_token_resolves_to_the_user(db_service, student):
    token = user_service.issue_token(student)
    assert token != student.auth_id
    assert user_service.resolve_identity(db_service, token) == student


@pytest.mark.parametrize("token_factory", [
    lambda user: user.auth_id,
    lambda user: user_service.issue_token(user) + "x",
    lambda user: security.create_access_token(user.auth_id, expires_delta=timedelta(minutes=-1)),
])
def test_unsigned_tampered_or_expired_tokens_do_not_resolve(db_service, student, token_factory):
    assert user_service.resolve_identity(db_service, token_factory(student)) is None


def test_create_demonstrator(db_service):
    user = user_service.create_demonstrator(db_service, SignUp(email="d2@lab.ac.uk", name="D Two", password="s3cret-pass"))
    assert user.role is Role.DEMONSTRATOR


def test_create_demonstrator_does_not_promote_a_student(db_service, student, password):
    with pytest.raises(ValueError):
        user_service.create_demonstrator(db_service, SignUp(email=student.email, name="Sam", password=password))
    assert db_service.get_user_by_email(student.email).data["role"] == "student"


def test_seed_demonstrator_runs_once(db_service):
    first = user_service.seed_demonstrator(db_service, "lead@lab.ac.uk", "s3cret-pass", "Lead")
    assert first.role is Role.DEMONSTRATOR
    assert user_service.seed_demonstrator(db_service, "lead@lab.ac.uk", "s3cret-pass", "Lead") is None


def test_seed_demonstrator_is_skipped_without_configuration(db_service):
    assert user_service.seed_demonstrator(db_service, None, None, "Lead") is None
    assert db_service.lab_repo.select_users().data == []
