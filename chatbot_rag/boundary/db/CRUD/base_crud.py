"""
Base CRUD operations for SQLAlchemy models.

BaseCRUD covers primary-key access for any model. ChatbotScopedCRUD adds
the tenant-scoped reads and deletes used by every model that carries a
chatbot_id column, so a row is never reachable through another chatbot's id.

Methods flush or execute but never commit; services own transaction
boundaries.

Dependencies: sqlalchemy
System role: Foundation for all database CRUD operations
"""

from typing import Any, Collection, Generic, Sequence, TypeVar

from sqlalchemy import Select, delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from chatbot_rag.boundary.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseCRUD(Generic[ModelT]):
    """
    Primary-key operations shared by every model CRUD.

    Attributes:
        model: The SQLAlchemy model class to operate on
    """

    def __init__(self, model: type[ModelT]) -> None:
        self.model = model

    async def create(self, session: AsyncSession, **values: Any) -> ModelT:
        """Insert a row and return it with generated id and timestamps."""
        instance = self.model(**values)
        session.add(instance)
        await session.flush()
        await session.refresh(instance)
        return instance

    async def get_by_id(self, session: AsyncSession, id: int) -> ModelT | None:
        result = await session.execute(select(self.model).where(self.model.id == id))
        return result.scalar_one_or_none()

    async def update_by_id(self, session: AsyncSession, id: int, **values: Any) -> ModelT | None:
        """Apply values to one row; None when the id does not exist."""
        stmt = (
            update(self.model)
            .where(self.model.id == id)
            .values(**values)
            .returning(self.model)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def delete_by_id(self, session: AsyncSession, id: int) -> bool:
        result = await session.execute(delete(self.model).where(self.model.id == id))
        return result.rowcount > 0

    async def exists(self, session: AsyncSession, id: int) -> bool:
        result = await session.execute(select(self.model.id).where(self.model.id == id))
        return result.scalar_one_or_none() is not None


class ChatbotScopedCRUD(BaseCRUD[ModelT]):
    """
    CRUD for models owned by a chatbot.

    Every query built here filters on the model's chatbot_id, so callers
    cannot read or delete another tenant's rows by guessing ids.
    """

    def _scoped(self, chatbot_id: int) -> Select:
        return select(self.model).where(self.model.chatbot_id == chatbot_id)

    async def get_for_chatbot(
        self,
        session: AsyncSession,
        chatbot_id: int,
        id: int,
    ) -> ModelT | None:
        """
        Retrieve a row only if it belongs to the chatbot.

        Args:
            session: Async database session
            chatbot_id: Owning chatbot id
            id: Row id

        Returns:
            Model instance if found and owned, None otherwise
        """
        result = await session.execute(self._scoped(chatbot_id).where(self.model.id == id))
        return result.scalar_one_or_none()

    async def list_for_chatbot(
        self,
        session: AsyncSession,
        chatbot_id: int,
        *conditions: Any,
        order_by: Sequence[Any] = (),
    ) -> Sequence[ModelT]:
        """
        Retrieve a chatbot's rows matching extra conditions.

        Args:
            session: Async database session
            chatbot_id: Owning chatbot id
            *conditions: Additional WHERE clauses
            order_by: Sort expressions, defaulting to id order

        Returns:
            Sequence of model instances
        """
        stmt = self._scoped(chatbot_id).where(*conditions)
        stmt = stmt.order_by(*order_by) if order_by else stmt.order_by(self.model.id)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def get_many_for_chatbot(
        self,
        session: AsyncSession,
        chatbot_id: int,
        ids: Collection[int],
    ) -> Sequence[ModelT]:
        """Retrieve the subset of ids that exist under the chatbot."""
        if not ids:
            return []
        return await self.list_for_chatbot(session, chatbot_id, self.model.id.in_(ids))

    async def delete_for_chatbot(self, session: AsyncSession, chatbot_id: int, id: int) -> bool:
        """Delete a row if the chatbot owns it; False when nothing matched."""
        stmt = delete(self.model).where(
            self.model.id == id,
            self.model.chatbot_id == chatbot_id,
        )
        result = await session.execute(stmt)
        return result.rowcount > 0
