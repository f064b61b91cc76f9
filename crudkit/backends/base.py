"""
crudkit — Record-Model Capability Interface
=============================================

What:  Abstract base class for the persistence backend a CrudRepository wraps.
How:   Concrete backends inherit from RecordModel and implement the eight
       async operations below.
Who:   Implemented by InMemoryRecordModel, SQLAlchemyRecordModel, or any
       adapter an application writes for its own store.

Contract:
    - "Not found" is reported by returning None, never by raising.
    - Any exception a backend raises is treated as "could not execute" and
      becomes an OperationFailedError in the repository, unless the backend
      raises an ApplicationError itself, which passes through unchanged.
    - Filters are opaque mappings; an empty mapping matches every record.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Mapping, Optional, Sequence


class RecordModel(ABC):
    """Abstract per-entity accessor over a persistence backend."""

    @abstractmethod
    async def create(self, data: Any) -> Any:
        """Persist one new record and return it."""
        ...

    @abstractmethod
    async def find_by_id(self, record_id: Any) -> Optional[Any]:
        """Return the record with this id, or None."""
        ...

    @abstractmethod
    async def find_by_id_and_update(self, record_id: Any, data: Any) -> Optional[Any]:
        """
        Apply ``data`` to the record and return its NEW value.

        Returns None when no record has this id.
        """
        ...

    @abstractmethod
    async def find_by_id_and_delete(self, record_id: Any) -> Optional[Any]:
        """Remove the record and return the removed value, or None."""
        ...

    @abstractmethod
    async def find(self, filter: Mapping[str, Any]) -> List[Any]:
        """Return every record matching ``filter``."""
        ...

    @abstractmethod
    async def insert_many(self, records: Sequence[Any]) -> List[Any]:
        """Persist a batch of records and return them as stored."""
        ...

    @abstractmethod
    async def count_documents(self, filter: Mapping[str, Any]) -> int:
        """Return the number of records matching ``filter``."""
        ...

    @abstractmethod
    async def exists(self, filter: Mapping[str, Any]) -> Optional[Any]:
        """
        Return a backend-defined existence indicator.

        Truthy when at least one record matches (a bool, an id, or a small
        record-like value, depending on the backend); None or falsy otherwise.
        """
        ...
