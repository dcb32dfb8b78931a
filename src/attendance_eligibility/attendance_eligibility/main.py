from __future__ import annotations

import importlib
import logging
import sys

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import build_container
from .eligibility.controller import register as register_eligibility
from .sessions.controller import register as register_sessions

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level_name: str, *, debug: bool = False) -> None:
    level = logging.DEBUG if debug else getattr(logging, str(level_name).upper(), logging.INFO)
    root = logging.getLogger(__package__)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel(level)


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"), debug=app.config["DEBUG"])
    logger.debug("settings=%s", settings_module)

    container = build_container(settings={
        "max_accuracy_meters": getattr(settings, "MAX_ACCURACY_METERS", 30),
        "session_timezone": getattr(settings, "SESSION_TIMEZONE", None),
    })

    register_eligibility(app, container)
    register_sessions(app, container)

    return app
