from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from linkgate.adapters.memory_store import InMemoryLinkStore
from linkgate.adapters.sqlite.migrator import SQLiteMigrator
from linkgate.api.main import create_app
from linkgate.rules.models import PreviewRules, Rules

from tests.doubles import FixedRandom, RecordingAccessLog

PROJECT_ROOT = Path(__file__).resolve().parents[1]
MIGRATIONS_DIR = str(PROJECT_ROOT / "migrations")


@pytest.fixture
def link_store() -> InMemoryLinkStore:
    """Fresh in-memory link store holding the 'promo' link."""
    return InMemoryLinkStore(
        {
            "link:promo": {
                "url": "https://dest.example/x",
                "title": "Promo",
            }
        }
    )


@pytest.fixture
def rules() -> Rules:
    return Rules(
        preview=PreviewRules(
            site_name="Linkgate",
            default_title="Linkgate",
            default_description="Short links",
            default_image="https://cdn.example/default.png",
        )
    )


@pytest.fixture
def random_source() -> FixedRandom:
    return FixedRandom()


@pytest.fixture
def access_log() -> RecordingAccessLog:
    return RecordingAccessLog()


@pytest.fixture
def client(
    rules: Rules,
    link_store: InMemoryLinkStore,
    access_log: RecordingAccessLog,
    random_source: FixedRandom,
) -> TestClient:
    app = create_app(
        rules=rules,
        store=link_store,
        access_log=access_log,
        random_port=random_source,
    )
    return TestClient(app, follow_redirects=False)


@pytest.fixture
def migrations_dir() -> str:
    return MIGRATIONS_DIR


@pytest.fixture
def db_path(tmp_path: Path) -> str:
    """Temporary SQLite database with all migrations applied."""
    path = str(tmp_path / "linkgate.db")
    SQLiteMigrator(path, MIGRATIONS_DIR).run_migrations()
    return path
