"""Liveness check reporting database reachability."""

from __future__ import annotations

from flask import Blueprint, current_app
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from catalog_api.api.deps import success_response, timing
from catalog_api.core.extensions import db

bp = Blueprint("health", __name__)


def _database_status() -> str:
    try:
        db.session.execute(text("SELECT 1"))
    except SQLAlchemyError:
        current_app.logger.exception("Health check could not reach the database")
        return "fail"
    return "ok"


@bp.get("/")
@bp.get("/health")
@timing
def healthcheck():
    return success_response(
        status="ok",
        db=_database_status(),
        version=current_app.config.get("APP_VERSION", "dev"),
    )
