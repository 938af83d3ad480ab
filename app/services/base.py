from contextlib import asynccontextmanager
from typing import TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError, PersistenceError
from app.core.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class BaseService:
    """Session holder shared by the domain services."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def _get_or_404(self, model: type[T], id: str, error_msg: str | None = None) -> T:
        result = await self._session.get(model, id)
        if not result:
            entity_name = model.__name__
            raise NotFoundError(
                entity_name,
                error_msg or f"{entity_name} {id} not found",
                {"id": id}
            )
        return result

    @asynccontextmanager
    async def _persistence_step(self, operation: str, commit: bool = True, **context):
        """Run one backend step; commit it or turn the failure into PersistenceError.

        A failed step is rolled back on its own. Steps committed before it stay.
        """
        try:
            yield
            if commit:
                await self._session.commit()
        except SQLAlchemyError as e:
            await self._session.rollback()
            logger.error("persistence_step_failed", operation=operation, error=str(e), **context)
            raise PersistenceError(operation, details={"operation": operation, **context}) from e
