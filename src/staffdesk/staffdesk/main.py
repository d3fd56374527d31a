from __future__ import annotations

import importlib
import logging
from datetime import timedelta
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .catalog.controller import register as register_catalog
from .companies.controller import register as register_companies
from .container import Container, build_container
from .core.constants import DEFAULT_GRACE_MINUTES, DEFAULT_SESSION_HOURS
from .dashboard.controller import register as register_dashboard
from .database.bootstrap import apply_schema, list_tables
from .employees.controller import register as register_employees
from .events.controller import register as register_events
from .leaves.controller import register as register_leaves
from .org_chart.controller import register as register_org_chart
from .payroll.controller import register as register_payroll
from .users.controller import register as register_users
from .web.errors import register_error_handlers
from .web.guards import EXTENSION_KEY

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    """Application factory.

    ``container`` lets tests inject in-memory repositories; when omitted the
    MySQL container is built from the active settings module.
    """
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["PERMANENT_SESSION_LIFETIME"] = timedelta(
        hours=int(getattr(settings, "SESSION_LIFETIME_HOURS", DEFAULT_SESSION_HOURS))
    )
    app.config["SESSION_COOKIE_HTTPONLY"] = True
    app.config["SESSION_COOKIE_SAMESITE"] = "Lax"
    app.config["SESSION_COOKIE_SECURE"] = bool(getattr(settings, "SESSION_COOKIE_SECURE", False))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config)
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        container = build_container(
            db_config=db_config,
            grace_minutes=int(getattr(settings, "LATE_GRACE_MINUTES", DEFAULT_GRACE_MINUTES)),
        )

    app.extensions[EXTENSION_KEY] = container
    register_error_handlers(app)

    register_users(app, container)
    register_companies(app, container)
    register_catalog(app, container)
    register_employees(app, container)
    register_attendance(app, container)
    register_leaves(app, container)
    register_payroll(app, container)
    register_events(app, container)
    register_org_chart(app, container)
    register_dashboard(app, container)

    return app
