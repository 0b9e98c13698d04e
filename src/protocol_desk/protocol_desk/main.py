from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import load_settings

from .auth.controller import register as register_auth
from .auth.guards import load_current_user
from .common.datetime_utils import format_12h
from .container import Container, build_container
from .core.constants import DEFAULT_DEPARTMENT_NAME, DEFAULT_TOKEN_MAX_AGE_DAYS, DEFAULT_UPLOAD_TIMEOUT_SECONDS, PHOTO_FOLDER
from .dashboard.controller import register as register_dashboard
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_accounts, list_tables
from .drivers.controller import register as register_drivers
from .logging_config import setup_logging
from .photos.controller import register as register_photos
from .visitors.controller import register as register_visitors

logger = logging.getLogger(__name__)

REPO_ROOT = Path(__file__).resolve().parents[3]


def _bootstrap_database(settings, db_config: dict, department_name: str) -> None:
    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
        logger.info("Schema ready (tables=%s)", len(list_tables(db_config)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
        ensure_demo_accounts(db_config, department_name=department_name)
        logger.info("Demo seed ready")


def create_app(container: Optional[Container] = None) -> Flask:
    """Build the Flask app.

    Passing a ready ``container`` skips database bootstrap entirely (tests wire
    in-memory repositories this way).
    """
    load_dotenv(override=False)
    app = Flask(__name__, template_folder="../../../templates", static_folder="../../../static")

    settings = load_settings()
    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    department_name = getattr(settings, "DEPARTMENT_NAME", DEFAULT_DEPARTMENT_NAME)

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings.__name__,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )
        _bootstrap_database(settings, db_config, department_name)
        container = build_container(
            db_config=db_config,
            secret_key=app.secret_key,
            app_url=getattr(settings, "APP_URL", "http://localhost:5000"),
            department_name=department_name,
            token_max_age_days=int(getattr(settings, "TOKEN_MAX_AGE_DAYS", DEFAULT_TOKEN_MAX_AGE_DAYS)),
            cloudinary_cloud_name=getattr(settings, "CLOUDINARY_CLOUD_NAME", None),
            cloudinary_upload_preset=getattr(settings, "CLOUDINARY_UPLOAD_PRESET", None),
            cloudinary_folder=getattr(settings, "CLOUDINARY_FOLDER", PHOTO_FOLDER),
            upload_timeout=float(getattr(settings, "UPLOAD_TIMEOUT_SECONDS", DEFAULT_UPLOAD_TIMEOUT_SECONDS)),
        )

    app.extensions["protocol_desk"] = container
    app.jinja_env.filters["time12h"] = format_12h

    @app.before_request
    def _load_session_user():
        load_current_user(container.token_signer)

    register_auth(app, container)
    register_visitors(app, container)
    register_dashboard(app, container)
    register_photos(app, container)
    register_drivers(app, container)

    return app
