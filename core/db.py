# core/db.py
from __future__ import annotations

import functools
import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

log = logging.getLogger(__name__)


@functools.lru_cache(maxsize=None)
def get_engine(url: str) -> Engine:
    """
    One engine per URL for the life of the process.
    In-memory SQLite goes through a StaticPool so every Streamlit session
    (and every script thread) sees the same database.
    """
    if url.startswith("sqlite") and ":memory:" in url:
        return create_engine(
            url,
            future=True,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(url, future=True)


def init_db(engine: Engine, seed: bool = True) -> None:
    """Install every schema (idempotent) and seed demo data on an empty database."""
    from schemas.academics_schema import install_schema as install_academics
    from schemas.academics_schema import seed_demo_data as seed_academics
    from schemas.students_schema import install_schema as install_students
    from schemas.students_schema import seed_demo_data as seed_students

    install_academics(engine)
    install_students(engine)
    if seed:
        seed_academics(engine)
        seed_students(engine)
    log.debug("Database ready: %s", engine.url)
