import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI

from linkgate.adapters.sqlite.migrator import SQLiteMigrator
from linkgate.api.deps import (
    Settings,
    get_access_log_writer,
    get_engine,
    get_link_store,
    get_rules,
    get_settings,
)
from linkgate.api.middleware import LinkResolutionMiddleware
from linkgate.components.access_log import AccessLogPort, BestEffortAccessLogger
from linkgate.components.destination import RandomPort
from linkgate.components.resolver import LinkStorePort
from linkgate.rules.models import Rules

logger = logging.getLogger(__name__)


def check_schema(settings: Settings) -> bool:
    """Warn when the link database is not migrated. Lookups answer 503 until it is."""
    status = SQLiteMigrator(settings.db_path, settings.migrations_dir).status()
    if not status.ready:
        logger.warning(
            "Link database %s is not ready (pending=%s, missing tables=%s); run `linkgate migrate`",
            settings.db_path,
            status.pending,
            status.missing_tables,
        )
    return status.ready


def create_app(
    rules: Rules | None = None,
    store: LinkStorePort | None = None,
    access_log: AccessLogPort | None = None,
    random_port: RandomPort | None = None,
) -> FastAPI:
    """
    Build the application.

    Anything not passed in is built from Settings: rules from the rules
    file, the link store and access log from the SQLite database. Rules
    are loaded here so that a bad rules file fails startup.
    """
    logging.basicConfig(level=logging.INFO)

    settings = get_settings()
    if rules is None:
        try:
            rules = get_rules(settings)
        except (FileNotFoundError, ValueError):
            logger.critical("Rules load failed from %s", settings.rules_path)
            raise
        logger.info("Rules loaded from %s", settings.rules_path)

    if store is None:
        store = get_link_store(settings)
        check_schema(settings)
    if access_log is None:
        access_log = get_access_log_writer(rules, settings)

    engine = get_engine(rules, store, random_port)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan handler for startup/shutdown."""
        logger.info(
            "Serving links (prefix=%r, mode=%s, traffic_split=%s)",
            rules.links.key_prefix,
            rules.redirect.mode,
            "on" if rules.traffic_split.enabled else "off",
        )
        yield

    app = FastAPI(
        title="Linkgate",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.rules = rules
    app.state.engine = engine

    app.add_middleware(
        LinkResolutionMiddleware,
        engine=engine,
        access_logger=BestEffortAccessLogger(access_log),
        locale_header=rules.traffic_split.locale_header,
    )

    @app.get("/health")
    def health_check() -> dict[str, Any]:
        """Health check endpoint."""
        return {"status": "ok", "service": "linkgate"}

    return app
