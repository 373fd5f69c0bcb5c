"""
Base repository with common operations.
Implements the Repository pattern for data access abstraction.
"""
from typing import Generic, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from sellgpt.core.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Generic repository bound to a single async session.

    Subclasses should set the `model` class attribute to the SQLAlchemy model.
    """

    model: type[ModelType]

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def delete(self, db_obj: ModelType) -> None:
        """Delete a record."""
        await self.session.delete(db_obj)
        await self.session.flush()
