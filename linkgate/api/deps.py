import logging
import os
from functools import lru_cache
from pathlib import Path

from linkgate.adapters.log_access_log import LoggingAccessLog
from linkgate.adapters.random_source import SystemRandomSource
from linkgate.adapters.sqlite.access_log import SQLiteAccessLog
from linkgate.adapters.sqlite.link_store import SQLiteLinkStore
from linkgate.components.access_log import AccessLogPort, NullAccessLog
from linkgate.components.destination import RandomPort
from linkgate.components.resolver import LinkStorePort
from linkgate.core.services.resolution import ResolutionEngine
from linkgate.rules.loader import load_rules
from linkgate.rules.models import Rules

logger = logging.getLogger(__name__)


# --- Settings ---
class Settings:
    def __init__(self) -> None:
        self.base_dir = Path(os.getcwd())
        self.data_dir = Path(os.environ.get("LINKGATE_DATA_DIR", "./data"))
        self.db_path = str(self.data_dir / "linkgate.db")
        self.rules_path = Path(os.environ.get("LINKGATE_RULES_PATH", self.base_dir / "rules.yaml"))
        self.migrations_dir = self.base_dir / "migrations"


@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Rules ---
def get_rules(settings: Settings | None = None) -> Rules:
    settings = settings or get_settings()
    return load_rules(settings.rules_path)


# --- Adapters ---
def get_link_store(settings: Settings | None = None) -> LinkStorePort:
    settings = settings or get_settings()
    return SQLiteLinkStore(settings.db_path)


def get_access_log_writer(rules: Rules, settings: Settings | None = None) -> AccessLogPort:
    if not rules.access_log.enabled:
        return NullAccessLog()
    if rules.access_log.backend == "log":
        return LoggingAccessLog()
    settings = settings or get_settings()
    return SQLiteAccessLog(settings.db_path)


def get_random_source() -> RandomPort:
    return SystemRandomSource()


# --- Services ---
def get_engine(
    rules: Rules,
    store: LinkStorePort,
    random_port: RandomPort | None = None,
) -> ResolutionEngine:
    return ResolutionEngine(store=store, random_port=random_port or get_random_source(), rules=rules)
