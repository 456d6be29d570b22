"""
Shared fixtures.

Every test gets its own SQLite file so reads on worker threads see the same
database as the writer. MariaDB-only behaviour is covered separately in
tests/integration/test_mariadb_reconciliation.py.
"""

import sys
from pathlib import Path

# Add project root to Python path (for direct invocation)
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from config.settings import Settings
from services.content_service import ContentService
from services.schema_reconciler import SchemaReconciler
from utils.database import build_engine


@pytest.fixture
def test_settings():
    """Settings with a cheap bcrypt cost so account tests stay fast."""
    return Settings(
        DEFAULT_ADMIN_USERNAME="admin",
        DEFAULT_ADMIN_PASSWORD="admin-secret",
        BCRYPT_ROUNDS=4,
    )


@pytest.fixture
def engine(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'content.db'}")
    yield engine
    engine.dispose()


@pytest.fixture
def reconciled_engine(engine, test_settings):
    """Engine whose database has been brought to the current schema."""
    report = SchemaReconciler(engine, app_settings=test_settings).run()
    assert report.ok, report.failed
    return engine


@pytest.fixture
def content_service(reconciled_engine):
    return ContentService(reconciled_engine, max_workers=2)
