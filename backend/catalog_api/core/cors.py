"""Cross-origin policy for the API routes."""

from __future__ import annotations

from flask import Flask
from flask_cors import CORS


def parse_origins(raw: str | None) -> list[str] | None:
    """Split a comma separated ``CORS_ORIGINS`` value.

    ``None`` means "any origin" (blank setting or a lone ``*``).
    """
    origins = [item.strip() for item in (raw or "").split(",") if item.strip()]
    if not origins or origins == ["*"]:
        return None
    return origins


def init_app(app: Flask) -> None:
    """Attach flask-cors to everything below ``API_BASE_PREFIX``.

    Credentials are only allowed for an explicit origin list. The request id
    header is exposed so browser clients can report it.
    """
    origins = parse_origins(app.config.get("CORS_ORIGINS"))
    api_prefix = app.config.get("API_BASE_PREFIX", "/api").rstrip("/")

    CORS(
        app,
        resources={rf"{api_prefix}/*": {"origins": origins or "*"}},
        supports_credentials=origins is not None,
        expose_headers=["X-Request-ID"],
        max_age=app.config.get("CORS_MAX_AGE", 600),
    )
