"""``flask seed`` commands filling a development database with catalog data."""

from __future__ import annotations

import logging
from collections.abc import Callable

import click
from flask import current_app
from flask.cli import with_appcontext
from sqlalchemy.exc import SQLAlchemyError

from catalog_api.core.extensions import db
from catalog_api.seeds import seed_data

LOGGER = logging.getLogger(__name__)

Summary = dict[str, dict[str, int]]


def _echo_summary(summary: Summary) -> None:
    """Print one ``created/existing`` line per table."""
    click.echo("Seed summary:")
    if not summary:
        click.echo("  (no changes)")
        return
    width = max(len(table) for table in summary)
    for table in sorted(summary):
        counters = summary[table]
        click.echo(
            f"  {table.ljust(width)}  created={counters.get('created', 0):>2}"
            f"  existing={counters.get('existing', 0):>2}"
        )


def _run(seeder: Callable[[], Summary], failure: str) -> None:
    try:
        summary = seeder()
    except SQLAlchemyError as exc:
        raise click.ClickException(f"{failure}: {exc}") from exc
    _echo_summary(summary)


@click.group("seed")
@click.option("--verbose", is_flag=True, help="Log each seeding step.")
@click.pass_context
def seed_cli(ctx: click.Context, verbose: bool) -> None:
    """Idempotent development data (categories, demo user, products)."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    level = logging.DEBUG if verbose else logging.INFO
    for name in (seed_data.__name__, __name__):
        logging.getLogger(name).setLevel(level)


@seed_cli.command("categories")
@click.option(
    "--name",
    "names",
    multiple=True,
    help="Category to create (repeatable). Defaults to the built-in list.",
)
@click.pass_context
@with_appcontext
def categories_command(ctx: click.Context, names: tuple[str, ...]) -> None:
    """Create categories that do not exist yet."""
    verbose = bool(ctx.obj.get("verbose", False))
    _run(
        lambda: seed_data.seed_categories(names or seed_data.DEFAULT_CATEGORIES, verbose=verbose),
        "Seeding failed",
    )


@seed_cli.command("run")
@click.pass_context
@with_appcontext
def run_command(ctx: click.Context) -> None:
    """Create the default categories, the demo user and sample products."""
    verbose = bool(ctx.obj.get("verbose", False))
    _run(lambda: seed_data.run_all(verbose=verbose), "Seeding failed")


@seed_cli.command("fresh")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation.")
@click.pass_context
@with_appcontext
def fresh_command(ctx: click.Context, yes: bool) -> None:
    """Drop and recreate every table, then run the full seed.

    Only allowed when ``DEBUG`` or ``TESTING`` is on.
    """
    if not (current_app.config.get("DEBUG") or current_app.config.get("TESTING")):
        raise click.UsageError(
            "The 'flask seed fresh' command is restricted to non-production environments."
        )
    if not yes:
        click.confirm("This drops every catalog table. Continue?", abort=True)

    verbose = bool(ctx.obj.get("verbose", False))
    LOGGER.info("Recreating database schema")
    db.session.remove()
    db.drop_all()
    db.create_all()
    _run(lambda: seed_data.run_all(verbose=verbose), "Fresh seed failed")
