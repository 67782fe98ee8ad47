"""
Test Configuration and Fixtures

This module provides:
- Environment setup (log directory, SQLite URL) before app modules import settings
- A fresh SQLite database per integration test (aiosqlite, tables from metadata)
- Unit of work / repository fixtures bound to that database
- A FastAPI TestClient whose DI container points at the test database

Architecture:
- Unit tests (test/**/unit/): construct use cases with AsyncMock collaborators
- Integration tests (test/**/integration/): real SQLAlchemy stack on SQLite
"""

# =============================================================================
# Environment setup MUST happen before any application import reads settings
# =============================================================================
import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    os.environ.setdefault('DATABASE_URL', 'sqlite+aiosqlite:///:memory:')
    os.environ.setdefault('DEBUG', 'false')
    os.environ.setdefault('PROPAGATION_MAX_CONCURRENCY', '2')


_early_setup_test_environment()

from collections.abc import AsyncGenerator, Callable, Generator  # noqa: E402

from dependency_injector import providers  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker  # noqa: E402
from sqlalchemy.pool import NullPool  # noqa: E402

from src.platform.config.di import container  # noqa: E402
from src.platform.database.orm_db_setting import (  # noqa: E402
    Database,
    create_db_and_tables,
    create_engine,
)
from src.platform.database.unit_of_work import (  # noqa: E402
    AbstractUnitOfWork,
    SqlAlchemyUnitOfWork,
)
from src.service.seating.app.command.layout_reconciler import LayoutReconciler  # noqa: E402
from src.service.seating.driven_adapter.repo.layout_repo_impl import LayoutRepoImpl  # noqa: E402
from src.service.seating.driven_adapter.repo.unit_repo_impl import UnitRepoImpl  # noqa: E402
from src.service.seating.driven_adapter.repo.zone_repo_impl import ZoneRepoImpl  # noqa: E402


def _sqlite_url(directory: Path) -> str:
    return f'sqlite+aiosqlite:///{directory / "seating.db"}'


def _new_engine(directory: Path) -> AsyncEngine:
    # NullPool: no connection outlives the event loop that opened it
    return create_engine(_sqlite_url(directory), poolclass=NullPool)


# =============================================================================
# Integration Test Fixtures (async, pytest-asyncio loop)
# =============================================================================
@pytest.fixture
async def engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine, None]:
    db_engine = _new_engine(tmp_path)
    await create_db_and_tables(db_engine)
    yield db_engine
    await db_engine.dispose()


@pytest.fixture
def database(engine: AsyncEngine) -> Database:
    return Database(
        session_maker=async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    )


@pytest.fixture
def uow_factory(database: Database) -> Callable[[], AbstractUnitOfWork]:
    return lambda: SqlAlchemyUnitOfWork(session_factory=database.session)


@pytest.fixture
def layout_repo(database: Database) -> LayoutRepoImpl:
    return LayoutRepoImpl(session_factory=database.session)


@pytest.fixture
def unit_repo(database: Database) -> UnitRepoImpl:
    return UnitRepoImpl(session_factory=database.session)


@pytest.fixture
def zone_repo(database: Database) -> ZoneRepoImpl:
    return ZoneRepoImpl(session_factory=database.session)


@pytest.fixture
def layout_reconciler() -> LayoutReconciler:
    return LayoutReconciler()


# =============================================================================
# HTTP Fixtures (sync, TestClient runs the app in its own loop)
# =============================================================================
@pytest.fixture
def client(tmp_path: Path) -> Generator[TestClient, None, None]:
    from test.test_main import app

    http_engine = _new_engine(tmp_path)
    http_database = Database(
        session_maker=async_sessionmaker(http_engine, class_=AsyncSession, expire_on_commit=False)
    )
    container.database.override(providers.Object(http_database))
    container.reset_singletons()

    try:
        with TestClient(app, raise_server_exceptions=False) as test_client:
            test_client.portal.call(create_db_and_tables, http_engine)
            yield test_client
            test_client.portal.call(http_engine.dispose)
    finally:
        container.database.reset_override()
        container.reset_singletons()
