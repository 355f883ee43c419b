"""Application factory wiring configuration, extensions and blueprints."""

from __future__ import annotations

from flask import Flask

from makeshort.core.config import BaseConfig, get_config, validate_config
from makeshort.core.logger import configure_logging


def create_app(
    config: str | type[BaseConfig] | object | None = None,
    *,
    instance_relative_config: bool = True,
) -> Flask:
    """Build a configured makeshort application.

    :param config: Config class, object or import path. Defaults to the
        class selected by ``APP_ENV``.
    :param instance_relative_config: Also load ``instance/config.py`` when it
        exists (local overrides, never committed).
    :returns: Application ready to serve.
    :raises RuntimeError: If the configuration is unsafe or Redis is
        selected but unreachable.
    """
    app = Flask(__name__, instance_relative_config=instance_relative_config)
    app.config.from_object(get_config() if config is None else config)
    if instance_relative_config:
        app.config.from_pyfile("config.py", silent=True)
    validate_config(app.config)

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    from makeshort.api import init_app as init_api
    from makeshort.core import edge, errors, extensions, logger

    edge.init_proxy(app)
    extensions.init_app(app)
    logger.init_app(app)
    edge.init_cors(app)
    init_api(app)
    errors.init_app(app)

    return app
