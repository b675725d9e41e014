from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine  # noqa: TC002

from peerhub.adapters.sqlalchemy import create_all_tables, start_mappers
from peerhub.adapters.sqlalchemy.unit_of_work import SqlAlchemyPeerUnitOfWork, shutdown, startup
from tests.helpers.inventory import InMemoryInventory, SequenceKeyProvisioner

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    start_mappers()
    create_all_tables(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sqlite_unit_of_work(
    sqlite_engine: Engine,
) -> Iterator[Callable[[], SqlAlchemyPeerUnitOfWork]]:
    startup(engine=sqlite_engine, force=True)

    def factory() -> SqlAlchemyPeerUnitOfWork:
        return SqlAlchemyPeerUnitOfWork()

    try:
        yield factory
    finally:
        shutdown()


@pytest.fixture
def inventory() -> InMemoryInventory:
    return InMemoryInventory()


@pytest.fixture
def key_provisioner() -> SequenceKeyProvisioner:
    return SequenceKeyProvisioner()
