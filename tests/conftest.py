import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from core.db import init_db


@pytest.fixture
def engine():
    """Fresh in-memory database per test, schemas installed and demo data seeded."""
    eng = create_engine(
        "sqlite+pysqlite:///:memory:",
        future=True,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def empty_engine():
    eng = create_engine(
        "sqlite+pysqlite:///:memory:",
        future=True,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(eng, seed=False)
    yield eng
    eng.dispose()
