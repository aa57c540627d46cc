"""Base repository with common database operations."""

from typing import Any, Generic, TypeVar
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from employee_api.exceptions import ConflictError
from employee_api.models.orm.base import Base

T = TypeVar("T", bound=Base)


class BaseRepository(Generic[T]):
    """Base repository with common operations and unit-of-work commit."""

    model: type[T]

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session."""
        self.session = session

    async def get(self, id: UUID, *options: Any) -> T | None:
        """Get a record by ID.

        Args:
            id: Record UUID
            *options: Loader options, e.g. selectinload()

        Returns:
            Record or None if not found
        """
        result = await self.session.execute(
            select(self.model).where(self.model.id == id).options(*options)
        )
        return result.scalar_one_or_none()

    def pending_changes(self) -> int:
        """Number of objects staged for insert, update or delete."""
        return len(self.session.new) + len(self.session.dirty) + len(self.session.deleted)

    async def commit(self) -> int:
        """Commit the session as one unit of work.

        Either every staged change is written or none is; on failure the
        session is rolled back before the error propagates.

        Returns:
            Number of objects written

        Raises:
            ConflictError: If a constraint rejected the write
        """
        written = self.pending_changes()
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise self.conflict_from_integrity_error(e) from e
        except SQLAlchemyError:
            await self.session.rollback()
            raise
        return written

    def conflict_from_integrity_error(self, error: IntegrityError) -> ConflictError:
        """Translate a constraint violation into a domain conflict."""
        return ConflictError("Resource already exists")
