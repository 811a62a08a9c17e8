from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine  # noqa: TC002
from sqlalchemy.orm import Session, sessionmaker

from tiersync.adapters.sqlalchemy import start_mappers
from tiersync.adapters.sqlalchemy.migrations import upgrade_head
from tiersync.adapters.sqlalchemy.unit_of_work import SqlAlchemyUnitOfWork, shutdown, startup
from tiersync.app import default_billing_client

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

_BILLING_ENV_VARS = (
    "STRIPE_SECRET_KEY",
    "BILLING_MODE",
    "BILLING_CURRENCY",
    "STRIPE_API_BASE_URL",
    "TIER_SYNC_PAUSE_SECONDS",
)


@pytest.fixture(autouse=True)
def isolated_billing_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for name in _BILLING_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    default_billing_client.cache_clear()
    yield
    default_billing_client.cache_clear()


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    start_mappers()
    upgrade_head(engine=engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sqlite_session(sqlite_engine: Engine) -> Iterator[Session]:
    session_factory = sessionmaker(bind=sqlite_engine, future=True, expire_on_commit=False)
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def sqlite_unit_of_work(
    sqlite_engine: Engine,
) -> Iterator[Callable[[], SqlAlchemyUnitOfWork]]:
    startup(engine=sqlite_engine, force=True)

    def factory() -> SqlAlchemyUnitOfWork:
        return SqlAlchemyUnitOfWork()

    try:
        yield factory
    finally:
        shutdown()
