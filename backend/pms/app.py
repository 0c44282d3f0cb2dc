"""WSGI entry point, e.g. ``gunicorn pms.app:app``."""

import os

from pms.main import create_app

app = create_app()

if __name__ == "__main__":
    app.run(host=os.getenv("HOST", "127.0.0.1"), port=int(os.getenv("PORT", "5000")))
