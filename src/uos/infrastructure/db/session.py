from __future__ import annotations

import logging
import os
from threading import Lock

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine

POOL_SIZE = 5

logger = logging.getLogger(__name__)

_engines: dict[tuple[str, int], Engine] = {}
_engines_lock = Lock()


def _database_url() -> str:
    url = os.getenv("DATABASE_URL")
    if not url:
        raise RuntimeError("DATABASE_URL is not set")
    return url


def _build_engine(database_url: str, connect_timeout: int) -> Engine:
    key = (database_url, connect_timeout)
    with _engines_lock:
        engine = _engines.get(key)
        if engine is None:
            engine = create_engine(
                database_url,
                pool_size=POOL_SIZE,
                pool_pre_ping=True,
                connect_args={"connect_timeout": connect_timeout},
            )
            _engines[key] = engine
        return engine


def get_engine(timeout_seconds: float = 1.0) -> Engine:
    connect_timeout = max(1, int(timeout_seconds))
    return _build_engine(_database_url(), connect_timeout)


def dispose_engine() -> None:
    with _engines_lock:
        engines = list(_engines.values())
        _engines.clear()
    for engine in engines:
        engine.dispose()
    if engines:
        logger.info("database_engine_disposed")


def ping_database(timeout_seconds: float = 1.0) -> bool:
    try:
        with get_engine(timeout_seconds).connect() as connection:
            connection.execute(text("SELECT 1"))
        return True
    except Exception:
        return False
