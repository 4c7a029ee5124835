"""Fixtures partagées — base SQLite temporaire par test."""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from mailcomposer.database import init_db, make_engine, make_session_factory
from mailcomposer.store import SqlTemplateStore


@pytest.fixture
def sql_store(tmp_path):
    engine = make_engine(str(tmp_path / "test.db"))
    init_db(engine)
    yield SqlTemplateStore(make_session_factory(engine))
    engine.dispose()
