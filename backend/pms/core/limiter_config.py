"""Rate limiting shared by all blueprints (Flask-Limiter)."""

from flask import Flask
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

DEFAULT_LIMITS = ["200 per hour", "50 per minute"]
WRITE_LIMIT = "30 per minute"
READ_LIMIT = "100 per minute"

# Controllers decorate their views with this instance; init_limiter binds it
limiter = Limiter(key_func=get_remote_address, default_limits=DEFAULT_LIMITS)


def init_limiter(app: Flask, enabled: bool) -> None:
    app.config["RATELIMIT_ENABLED"] = enabled
    app.config.setdefault("RATELIMIT_STORAGE_URI", "memory://")
    limiter.init_app(app)
    # init_app only reads the flag for the first app; keep the instance in sync
    limiter.enabled = enabled
