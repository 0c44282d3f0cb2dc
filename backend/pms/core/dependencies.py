"""
Per-request wiring of repositories and services for the Flask controllers.

create_app() stores a repository factory in app.config; the first call in a
request builds the bundle and caches it on flask.g. When the factory opened a
database session, it is closed on app-context teardown.
"""

from typing import Callable, Optional

from flask import Flask, current_app, g

from pms.db.session import SessionLocal
from pms.repositories import RepositoryBundle, create_sqlalchemy_repositories
from pms.services import PrescriptionService, RegistrationService

REPOSITORY_FACTORY_KEY = "PMS_REPOSITORY_FACTORY"

RepositoryFactory = Callable[[], RepositoryBundle]


def sqlalchemy_repository_factory() -> RepositoryBundle:
    """Open a session for this request and build database repositories on it."""
    db = SessionLocal()
    g.db_session = db
    return create_sqlalchemy_repositories(db)


def static_repository_factory(bundle: RepositoryBundle) -> RepositoryFactory:
    """Serve the same bundle to every request (in-memory mode)."""

    def factory() -> RepositoryBundle:
        return bundle

    return factory


def get_repositories() -> RepositoryBundle:
    bundle: Optional[RepositoryBundle] = g.get("repositories")
    if bundle is None:
        factory: RepositoryFactory = current_app.config[REPOSITORY_FACTORY_KEY]
        bundle = factory()
        g.repositories = bundle
    return bundle


def get_registration_service() -> RegistrationService:
    repos = get_repositories()
    return RegistrationService(repos.doctors, repos.patients, repos.pharmacists, repos.drugs)


def get_prescription_service() -> PrescriptionService:
    repos = get_repositories()
    return PrescriptionService(
        repos.prescriptions,
        repos.doctors,
        repos.patients,
        repos.drugs,
        repos.pharmacists,
    )


def register_teardown(app: Flask) -> None:
    @app.teardown_appcontext
    def close_db_session(_exc):
        db = g.pop("db_session", None)
        if db is not None:
            db.close()
        g.pop("repositories", None)
