"""Management commands for the hospital back office."""

from __future__ import annotations

import logging
import os
from typing import Optional

import click

from hms.db import seed
from hms.db.session import SessionLocal, create_tables as build_schema
from hms.main import create_app

logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")

# Create the Flask application once so commands can share configuration.
app = create_app()


@click.group()
def cli() -> None:
    """Entry point for management commands."""


@cli.command("create_tables")
def create_tables() -> None:
    """Create every table from the model metadata."""
    build_schema()
    logging.info("Database tables created.")


@cli.command("seed_permissions")
def seed_permissions() -> None:
    """Mirror protected route names into permissions and grant them to admins."""
    with app.app_context():
        session = SessionLocal()
        try:
            created = seed.seed_permissions(session)
            logging.info("Seeded %s new permission(s).", created)
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()


@cli.command("ensure_admin")
@click.option(
    "--email",
    "email_override",
    default=None,
    help="Email of the user to promote. Overrides ADMIN_EMAIL environment variable.",
)
def ensure_admin(email_override: Optional[str]) -> None:
    """Grant the admin role to an existing user."""

    target_email = email_override or os.getenv("ADMIN_EMAIL")
    if not target_email:
        raise click.ClickException(
            "ADMIN_EMAIL environment variable is not set and no --email provided."
        )

    with app.app_context():
        session = SessionLocal()
        try:
            if not seed.ensure_admin(session, target_email.strip().lower()):
                raise click.ClickException(
                    f"No user found with email '{target_email}'. Cannot promote to admin."
                )
            logging.info("User %s holds the admin role.", target_email)
        except click.ClickException:
            raise
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()


if __name__ == "__main__":
    cli()
