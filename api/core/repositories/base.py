"""
Base Repository Pattern
Following Clean Architecture principles
"""
from abc import ABC, abstractmethod
from typing import Generic, TypeVar, List, Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

T = TypeVar('T')


class BaseRepository(ABC, Generic[T]):
    """Abstract base repository for all entities"""

    def __init__(self, db: AsyncSession, model_class: type):
        self.db = db
        self.model_class = model_class

    @abstractmethod
    async def get_by_id(self, id: UUID) -> Optional[T]:
        """Get entity by ID"""
        pass

    @abstractmethod
    async def list(self, skip: int = 0, limit: int = 100) -> List[T]:
        """List all entities with pagination"""
        pass

    @abstractmethod
    async def add_all(self, entities: List[T]) -> List[T]:
        """Persist new entities"""
        pass


class SQLAlchemyRepository(BaseRepository[T]):
    """Concrete implementation using SQLAlchemy"""

    async def get_by_id(self, id: UUID) -> Optional[T]:
        result = await self.db.execute(
            select(self.model_class).where(self.model_class.id == id)
        )
        return result.scalar_one_or_none()

    async def list(self, skip: int = 0, limit: int = 100) -> List[T]:
        result = await self.db.execute(
            select(self.model_class).offset(skip).limit(limit)
        )
        return list(result.scalars().all())

    async def add_all(self, entities: List[T]) -> List[T]:
        self.db.add_all(entities)
        await self.db.commit()
        return entities
