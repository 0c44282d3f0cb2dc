import logging
from typing import Optional

from flask import Flask

from pms.core.api_utils import register_error_handlers
from pms.core.config import Settings, load_settings, log_settings
from pms.core.dependencies import (
    REPOSITORY_FACTORY_KEY,
    register_teardown,
    sqlalchemy_repository_factory,
    static_repository_factory,
)
from pms.core.limiter_config import init_limiter
from pms.core.logging_config import setup_logging
from pms.db.session import create_tables, init_engine
from pms.repositories import RepositoryBundle

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    repositories: Optional[RepositoryBundle] = None,
) -> Flask:
    """
    Application factory.

    Args:
        settings: Startup configuration; read from the environment when omitted
        repositories: Serve this repository bundle to every request instead of
            opening database sessions (in-memory mode, used by tests)
    """
    settings = settings or load_settings()

    app = Flask(__name__)
    app.config["TESTING"] = settings.testing
    app.json.sort_keys = False
    app.config["PMS_SETTINGS"] = settings

    setup_logging(
        app,
        log_level=settings.log_level,
        enable_sql_echo=settings.sql_echo,
        log_to_file=settings.log_to_file,
        use_json_format=settings.log_json,
        log_dir=settings.log_dir,
    )
    log_settings(settings)

    if repositories is not None:
        app.config["PMS_STORAGE"] = "memory"
        app.config[REPOSITORY_FACTORY_KEY] = static_repository_factory(repositories)
    else:
        app.config["PMS_STORAGE"] = "database"
        engine = init_engine(settings.database_url)
        create_tables(engine)
        app.config[REPOSITORY_FACTORY_KEY] = sqlalchemy_repository_factory

    init_limiter(app, settings.rate_limit_enabled)

    register_error_handlers(app)
    register_teardown(app)

    from pms.controllers import (
        doctors_bp,
        drugs_bp,
        health_bp,
        patients_bp,
        pharmacists_bp,
        prescriptions_bp,
    )

    app.register_blueprint(doctors_bp)
    app.register_blueprint(patients_bp)
    app.register_blueprint(pharmacists_bp)
    app.register_blueprint(drugs_bp)
    app.register_blueprint(prescriptions_bp)
    app.register_blueprint(health_bp)

    logger.info(
        "Application created",
        extra={"context": {"storage": app.config["PMS_STORAGE"]}},
    )
    return app
