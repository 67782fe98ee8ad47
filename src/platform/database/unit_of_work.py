"""
Unit of Work Pattern - one session and one transaction per write operation

Architecture:
- UoW owns the session lifecycle (opened on enter, closed on exit)
- UoW owns commit/rollback; anything not committed is rolled back on exit
- Repositories obtained from the UoW share its session
- Storage failures surface as TransactionFailureError (or ConflictError for
  unique-index races) after the rollback
"""

from __future__ import annotations

import abc
from contextlib import AsyncExitStack
from types import TracebackType
from typing import TYPE_CHECKING, AsyncContextManager, Callable, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import ConflictError, TransactionFailureError
from src.platform.logging.loguru_io import Logger


if TYPE_CHECKING:
    from src.service.seating.app.interface.i_layout_repo import ILayoutRepo
    from src.service.seating.app.interface.i_unit_repo import IUnitRepo
    from src.service.seating.app.interface.i_zone_repo import IZoneRepo


class AbstractUnitOfWork(abc.ABC):
    """
    Abstract Unit of Work for the Seating Service

    Usage:
        async with uow:
            layout = await uow.layout_repo.get_by_id(layout_id=...)
            await uow.unit_repo.create_many(units=...)
            await uow.commit()
    """

    layout_repo: ILayoutRepo
    unit_repo: IUnitRepo
    zone_repo: IZoneRepo

    async def __aenter__(self) -> AbstractUnitOfWork:
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        await self.rollback()

    async def commit(self) -> None:
        """Commit the transaction"""
        await self._commit()

    @abc.abstractmethod
    async def _commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    async def rollback(self) -> None:
        raise NotImplementedError


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    """
    SQLAlchemy implementation of Unit of Work

    Each instance is single-use: it opens a fresh session from
    `session_factory` on enter, so independent transactions (e.g. one per
    propagated instance) each get their own UoW.
    """

    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory
        self._stack: Optional[AsyncExitStack] = None
        self.session: Optional[AsyncSession] = None

    async def __aenter__(self) -> SqlAlchemyUnitOfWork:
        from src.service.seating.driven_adapter.repo.layout_repo_impl import LayoutRepoImpl
        from src.service.seating.driven_adapter.repo.unit_repo_impl import UnitRepoImpl
        from src.service.seating.driven_adapter.repo.zone_repo_impl import ZoneRepoImpl

        self._stack = AsyncExitStack()
        self.session = await self._stack.enter_async_context(self.session_factory())

        # Repositories share the UoW session
        self.layout_repo = LayoutRepoImpl()
        self.layout_repo.session = self.session
        self.unit_repo = UnitRepoImpl()
        self.unit_repo.session = self.session
        self.zone_repo = ZoneRepoImpl()
        self.zone_repo.session = self.session

        await super().__aenter__()
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        try:
            await super().__aexit__(exc_type, exc, tb)
        finally:
            if self._stack is not None:
                await self._stack.aclose()
            self._stack = None
            self.session = None

        if isinstance(exc, IntegrityError):
            Logger.base.warning(f'⚠️ [UoW] Rolled back on integrity violation: {exc.orig}')
            raise ConflictError(
                'Write conflicts with a concurrent change to the same layout'
            ) from exc
        if isinstance(exc, SQLAlchemyError):
            Logger.base.error(f'❌ [UoW] Rolled back on storage failure: {exc}')
            raise TransactionFailureError(f'Transaction rolled back: {exc}') from exc

    async def _commit(self) -> None:
        if self.session is None:
            raise RuntimeError('Unit of work used outside of its context')
        await self.session.commit()

    async def rollback(self) -> None:
        if self.session is not None:
            await self.session.rollback()
