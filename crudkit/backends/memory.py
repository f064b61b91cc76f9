"""
crudkit — In-Memory Record Model
==================================

What:  Dict-backed RecordModel for tests, prototypes and examples.
How:   Records are dicts keyed by ``id_field``. Filters match on equality of
       top-level keys. Every returned record is a copy, so callers cannot
       mutate stored state behind the backend's back.

``calls`` counts invocations per operation name, which makes it easy to
assert that a layer above did (or did not) reach the backend.
"""

import copy
import logging
import uuid
from collections import Counter
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from crudkit.backends.base import RecordModel

logger = logging.getLogger(__name__)


def _default_id() -> str:
    return uuid.uuid4().hex


class InMemoryRecordModel(RecordModel):
    """
    Reference backend holding records in a plain dict.

    Args:
        id_field:    Key under which each record stores its id (default "id").
        id_factory:  Callable producing ids for records created without one.
        records:     Optional initial records (must carry ids).
    """

    def __init__(
        self,
        id_field: str = "id",
        id_factory: Optional[Callable[[], Any]] = None,
        records: Optional[Sequence[Mapping[str, Any]]] = None,
    ):
        self.id_field = id_field
        self.id_factory = id_factory or _default_id
        self.calls: Counter = Counter()
        self._records: Dict[Any, Dict[str, Any]] = {}
        for record in records or ():
            self._store(dict(record))

    # ── Helpers ───────────────────────────────────────────────────────────

    def _store(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        record = copy.deepcopy(dict(data))
        if record.get(self.id_field) is None:
            record[self.id_field] = self.id_factory()
        record_id = record[self.id_field]
        if record_id in self._records:
            raise KeyError(f"Duplicate id: {record_id}")
        self._records[record_id] = record
        return copy.deepcopy(record)

    @staticmethod
    def _matches(record: Mapping[str, Any], filter: Mapping[str, Any]) -> bool:
        return all(key in record and record[key] == value for key, value in filter.items())

    def _select(self, filter: Optional[Mapping[str, Any]]) -> List[Dict[str, Any]]:
        filter = filter or {}
        return [r for r in self._records.values() if self._matches(r, filter)]

    # ── RecordModel ───────────────────────────────────────────────────────

    async def create(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        self.calls["create"] += 1
        return self._store(data)

    async def find_by_id(self, record_id: Any) -> Optional[Dict[str, Any]]:
        self.calls["find_by_id"] += 1
        record = self._records.get(record_id)
        return copy.deepcopy(record) if record is not None else None

    async def find_by_id_and_update(
        self, record_id: Any, data: Mapping[str, Any]
    ) -> Optional[Dict[str, Any]]:
        self.calls["find_by_id_and_update"] += 1
        record = self._records.get(record_id)
        if record is None:
            return None
        # The id is immutable; an update carrying a different id is ignored for that key
        changes = {k: v for k, v in data.items() if k != self.id_field}
        record.update(changes)
        return copy.deepcopy(record)

    async def find_by_id_and_delete(self, record_id: Any) -> Optional[Dict[str, Any]]:
        self.calls["find_by_id_and_delete"] += 1
        return self._records.pop(record_id, None)

    async def find(self, filter: Mapping[str, Any]) -> List[Dict[str, Any]]:
        self.calls["find"] += 1
        return copy.deepcopy(self._select(filter))

    async def insert_many(self, records: Sequence[Mapping[str, Any]]) -> List[Dict[str, Any]]:
        self.calls["insert_many"] += 1
        # Validate the whole batch before touching the store
        ids = [r.get(self.id_field) for r in records if r.get(self.id_field) is not None]
        if len(ids) != len(set(ids)) or any(i in self._records for i in ids):
            raise KeyError("Duplicate id in batch")
        inserted = [self._store(r) for r in records]
        logger.debug("Inserted %d records", len(inserted))
        return inserted

    async def count_documents(self, filter: Mapping[str, Any]) -> int:
        self.calls["count_documents"] += 1
        return len(self._select(filter))

    async def exists(self, filter: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        self.calls["exists"] += 1
        matches = self._select(filter)
        if not matches:
            return None
        return {self.id_field: matches[0][self.id_field]}
