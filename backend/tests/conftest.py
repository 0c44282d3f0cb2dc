"""
Central pytest configuration for the prescription system tests.

Provides in-memory and SQLite-backed repository bundles, the two services
wired on top of them, and Flask apps/clients for API tests.
"""

import os
from datetime import date
from pathlib import Path

import pytest

# Set early so anything reading the environment sees test values
TEST_DATABASE_URL = "sqlite:///:memory:"
os.environ["DATABASE_URL"] = TEST_DATABASE_URL
os.environ["TESTING"] = "true"
os.environ["RATE_LIMIT_ENABLED"] = "0"
os.environ["LOG_TO_FILE"] = "0"

from pms.core.config import Settings
from pms.db.session import SessionLocal, create_tables, drop_tables, init_engine
from pms.main import create_app
from pms.repositories import (
    create_in_memory_repositories,
    create_sqlalchemy_repositories,
)
from pms.services import PrescriptionService, RegistrationService


def pytest_collection_modifyitems(config, items):
    """Add unit/integration markers based on test file location."""
    for item in items:
        path = str(item.fspath)
        if f"{os.sep}unit{os.sep}" in path:
            item.add_marker(pytest.mark.unit)
        if f"{os.sep}integration{os.sep}" in path:
            item.add_marker(pytest.mark.integration)


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    return Settings(
        database_url=TEST_DATABASE_URL,
        log_level="WARNING",
        log_to_file=False,
        log_dir=tmp_path / "logs",
        rate_limit_enabled=False,
        testing=True,
    )


# --------------------------------------------------------------------------
# Repositories
# --------------------------------------------------------------------------


@pytest.fixture
def memory_repositories():
    """Fresh in-memory repository bundle."""
    return create_in_memory_repositories()


@pytest.fixture
def db_engine():
    """Shared in-memory SQLite engine with all tables created."""
    engine = init_engine(TEST_DATABASE_URL)
    create_tables(engine)
    yield engine
    drop_tables(engine)
    engine.dispose()


@pytest.fixture
def db_session(db_engine):
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def sql_repositories(db_session):
    """SQLAlchemy repository bundle on a fresh SQLite database."""
    return create_sqlalchemy_repositories(db_session)


@pytest.fixture(params=["memory", "sqlalchemy"])
def repositories(request):
    """Run the test against both storage adapters."""
    if request.param == "memory":
        return request.getfixturevalue("memory_repositories")
    return request.getfixturevalue("sql_repositories")


# --------------------------------------------------------------------------
# Services
# --------------------------------------------------------------------------


@pytest.fixture
def registration_service(repositories) -> RegistrationService:
    return RegistrationService(
        repositories.doctors,
        repositories.patients,
        repositories.pharmacists,
        repositories.drugs,
    )


@pytest.fixture
def prescription_service(repositories) -> PrescriptionService:
    return PrescriptionService(
        repositories.prescriptions,
        repositories.doctors,
        repositories.patients,
        repositories.drugs,
        repositories.pharmacists,
    )


@pytest.fixture
def registered(registration_service):
    """One registered doctor, patient, pharmacist and drug."""
    return {
        "doctor": registration_service.register_doctor("John Doctor", "Cardiology"),
        "patient": registration_service.register_patient(
            "Jane Patient", date(1985, 3, 2)
        ),
        "pharmacist": registration_service.register_pharmacist(
            "Paul Pharmacist", "Central Pharmacy"
        ),
        "drug": registration_service.register_drug("Apap", "500 mg, 2 tablets daily"),
    }


# --------------------------------------------------------------------------
# Flask
# --------------------------------------------------------------------------


@pytest.fixture
def app(test_settings, memory_repositories):
    """Flask app serving the in-memory repositories."""
    return create_app(test_settings, repositories=memory_repositories)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def db_app(test_settings):
    """Flask app in database mode on an in-memory SQLite engine."""
    flask_app = create_app(test_settings)
    yield flask_app
    drop_tables()


@pytest.fixture
def db_client(db_app):
    return db_app.test_client()
