# /tests/conftest.py

import pytest
from fastapi.testclient import TestClient

from app.db.database import build_engine, build_session_factory, init_db
from app.main import app
from app.core import security
from app.models.user_model import Role, SignUp
from app.services import user_service
from app.services.database_service import DatabaseService, get_db_service


PASSWORD = "correct-horse-battery"


@pytest.fixture(autouse=True)
def fast_password_hashing(monkeypatch):
    """The minimum bcrypt cost keeps hashing out of the test run time."""
    monkeypatch.setattr(security, "BCRYPT_ROUNDS", 4)


@pytest.fixture
def password():
    return PASSWORD


@pytest.fixture
def session_factory(tmp_path):
    """
    A fresh, file-backed SQLite database for EACH test function. A file (not
    :memory:) lets the membership page query from worker threads.
    """
    engine = build_engine(f"sqlite:///{tmp_path / 'lab_groups.db'}")
    init_db(bind=engine)
    yield build_session_factory(engine)
    engine.dispose()


@pytest.fixture
def db_service(session_factory):
    return DatabaseService(session_factory)


@pytest.fixture
def demonstrator(db_service):
    return user_service.create_user(
        db_service, SignUp(email="demo@lab.ac.uk", name="Dana Demo", password=PASSWORD), role=Role.DEMONSTRATOR
    )


@pytest.fixture
def student(db_service):
    return user_service.create_user(db_service, SignUp(email="sam@lab.ac.uk", name="Sam Student", password=PASSWORD))


@pytest.fixture
def client(db_service):
    """A TestClient whose routes all use the per-test database."""
    app.dependency_overrides[get_db_service] = lambda: db_service
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_header():
    """Builds the Bearer header carrying a signed access token for a user."""
    def _build(user) -> dict:
        return {"Authorization": f"Bearer {user_service.issue_token(user)}"}
    return _build
