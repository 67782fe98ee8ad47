"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.platform.database.orm_db_setting import Database
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.service.seating.app.command.layout_reconciler import LayoutReconciler
from src.service.seating.driven_adapter.repo.layout_repo_impl import LayoutRepoImpl
from src.service.seating.driven_adapter.repo.unit_repo_impl import UnitRepoImpl
from src.service.seating.driven_adapter.repo.zone_repo_impl import ZoneRepoImpl


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Database (event-loop-aware engine behind Database.session)
    database = providers.Singleton(Database)

    # One fresh unit of work (session + transaction) per call;
    # inject `unit_of_work.provider` where several independent transactions are needed
    unit_of_work = providers.Factory(
        SqlAlchemyUnitOfWork, session_factory=database.provided.session
    )

    # Read-side repositories (stateless - open a session per call)
    layout_repo = providers.Singleton(LayoutRepoImpl, session_factory=database.provided.session)
    unit_repo = providers.Singleton(UnitRepoImpl, session_factory=database.provided.session)
    zone_repo = providers.Singleton(ZoneRepoImpl, session_factory=database.provided.session)

    # Domain collaborators
    layout_reconciler = providers.Singleton(LayoutReconciler)


container = Container()


def setup() -> None:
    container.config_service()


def cleanup() -> None:
    container.reset_singletons()
