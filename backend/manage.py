"""Management commands for the prescription system backend."""

from __future__ import annotations

import json
import logging
import os

import click

from pms.core.config import load_settings
from pms.db.session import SessionLocal, create_tables, init_engine
from pms.db.seed import seed_demo_data
from pms.repositories import create_sqlalchemy_repositories

logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")


@click.group()
def cli() -> None:
    """Entry point for management commands."""


@cli.command("create-tables")
def create_tables_command() -> None:
    """Create the doctors, patients, pharmacists, drugs and prescriptions tables."""
    settings = load_settings()
    engine = init_engine(settings.database_url)
    create_tables(engine)
    logging.info("Tables created (dialect=%s).", engine.dialect.name)


@cli.command("seed-demo")
def seed_demo() -> None:
    """Register one demo doctor, patient, pharmacist and drug."""
    settings = load_settings()
    engine = init_engine(settings.database_url)
    create_tables(engine)

    session = SessionLocal()
    try:
        seeded = seed_demo_data(create_sqlalchemy_repositories(session))
    finally:
        session.close()
    click.echo(json.dumps(seeded, indent=2))


@cli.command("run")
@click.option("--host", default="127.0.0.1", show_default=True)
@click.option("--port", default=lambda: int(os.getenv("PORT", 5000)), type=int)
@click.option("--debug/--no-debug", default=False)
def run(host: str, port: int, debug: bool) -> None:
    """Run the development server."""
    from pms.main import create_app

    app = create_app()
    app.run(host=host, port=port, debug=debug)


if __name__ == "__main__":
    cli()
