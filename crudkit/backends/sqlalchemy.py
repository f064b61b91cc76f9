"""
crudkit — SQLAlchemy Record Model
===================================

What:  RecordModel over one SQLAlchemy mapped class using async sessions.
How:   Each operation opens its own session from the supplied factory,
       executes, commits where it writes, and returns ORM instances.
       Filters are column-equality mappings ({"name": "A"}).

Absence follows the contract: session.get() returning None is passed
straight up as None. Unknown filter or data keys raise ValueError, which
the repository reports as an OperationFailedError.

The session factory must be built with expire_on_commit=False (see
crudkit.database.build_session_factory).
"""

import logging
from typing import Any, List, Mapping, Optional, Sequence, Type

from sqlalchemy import func, inspect as sa_inspect, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from crudkit.backends.base import RecordModel

logger = logging.getLogger(__name__)


class SQLAlchemyRecordModel(RecordModel):
    """
    Adapter from the RecordModel contract to a SQLAlchemy ORM class.

    Args:
        session_factory: async_sessionmaker producing AsyncSession instances
        mapped_class:    Declarative ORM class (single-column primary key)
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        mapped_class: Type[Any],
    ):
        self.session_factory = session_factory
        self.mapped_class = mapped_class
        mapper = sa_inspect(mapped_class)
        self._columns = {attr.key for attr in mapper.column_attrs}
        self._pk = mapper.primary_key[0]

    # ── Helpers ───────────────────────────────────────────────────────────

    def _check_keys(self, data: Mapping[str, Any]) -> None:
        unknown = set(data) - self._columns
        if unknown:
            raise ValueError(
                f"Unknown column(s) for {self.mapped_class.__name__}: {sorted(unknown)}"
            )

    def _criteria(self, filter: Optional[Mapping[str, Any]]) -> list:
        filter = filter or {}
        self._check_keys(filter)
        return [getattr(self.mapped_class, key) == value for key, value in filter.items()]

    def _build(self, data: Mapping[str, Any]) -> Any:
        self._check_keys(data)
        return self.mapped_class(**data)

    # ── RecordModel ───────────────────────────────────────────────────────

    async def create(self, data: Mapping[str, Any]) -> Any:
        instance = self._build(data)
        async with self.session_factory() as session:
            session.add(instance)
            await session.commit()
        return instance

    async def find_by_id(self, record_id: Any) -> Optional[Any]:
        async with self.session_factory() as session:
            return await session.get(self.mapped_class, record_id)

    async def find_by_id_and_update(self, record_id: Any, data: Mapping[str, Any]) -> Optional[Any]:
        self._check_keys(data)
        async with self.session_factory() as session:
            instance = await session.get(self.mapped_class, record_id)
            if instance is None:
                return None
            for key, value in data.items():
                if key == self._pk.key:
                    continue
                setattr(instance, key, value)
            await session.commit()
            return instance

    async def find_by_id_and_delete(self, record_id: Any) -> Optional[Any]:
        async with self.session_factory() as session:
            instance = await session.get(self.mapped_class, record_id)
            if instance is None:
                return None
            await session.delete(instance)
            await session.commit()
            return instance

    async def find(self, filter: Mapping[str, Any]) -> List[Any]:
        query = select(self.mapped_class).where(*self._criteria(filter))
        async with self.session_factory() as session:
            result = await session.execute(query)
            return list(result.scalars().all())

    async def insert_many(self, records: Sequence[Mapping[str, Any]]) -> List[Any]:
        instances = [self._build(r) for r in records]
        async with self.session_factory() as session:
            session.add_all(instances)
            await session.commit()
        logger.debug("Inserted %d %s rows", len(instances), self.mapped_class.__name__)
        return instances

    async def count_documents(self, filter: Mapping[str, Any]) -> int:
        query = (
            select(func.count())
            .select_from(self.mapped_class)
            .where(*self._criteria(filter))
        )
        async with self.session_factory() as session:
            result = await session.execute(query)
            return result.scalar_one()

    async def exists(self, filter: Mapping[str, Any]) -> Optional[Any]:
        """Primary key of the first matching row, or None."""
        query = select(self._pk).where(*self._criteria(filter)).limit(1)
        async with self.session_factory() as session:
            result = await session.execute(query)
            return result.scalars().first()
