"""Application factory wiring Flask extensions and blueprints."""

from __future__ import annotations

from flask import Flask

from catalog_api.core.config import BaseConfig, get_config
from catalog_api.core.logger import configure_logging, init_app as init_logging


def create_app(
    config: str | type[BaseConfig] | object | None = None,
    *,
    instance_relative_config: bool = True,
    instance_config_filename: str = "config.py",
) -> Flask:
    """Build the catalog API application.

    :param config: Settings object, class or import path. Defaults to the class
        selected by ``APP_ENV``.
    :param instance_relative_config: Also read ``instance/<filename>`` when it exists.
    :param instance_config_filename: Instance settings file name.
    :returns: Configured application with every blueprint registered.
    """

    app = Flask(__name__, instance_relative_config=instance_relative_config)
    app.config.from_object(get_config() if config is None else config)
    if instance_relative_config and instance_config_filename:
        app.config.from_pyfile(instance_config_filename, silent=True)

    app.json.sort_keys = False  # type: ignore[attr-defined]
    configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    from catalog_api.core import cors, errors, extensions, proxy

    proxy.init_app(app)
    extensions.init_app(app)
    init_logging(app)
    cors.init_app(app)

    from catalog_api.api import init_app as init_api

    init_api(app)
    errors.init_app(app)

    from catalog_api import cli as app_cli

    app_cli.init_app(app)

    @app.shell_context_processor
    def _shell_context() -> dict[str, object]:
        from catalog_api.models import Category, Product, User

        return {"db": extensions.db, "User": User, "Category": Category, "Product": Product}

    return app
