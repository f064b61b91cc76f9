"""
crudkit — CRUD Repository
===========================

What:  One-to-one adapter over a single RecordModel.
How:   Each operation awaits the backend call and classifies the outcome:
       a result is returned as-is, an absent (None) result on
       get/update/delete becomes NotFoundError (404), and any other
       exception becomes OperationFailedError (500).
Who:   Wrapped by CrudService; may also be used directly.

Error Handling Strategy:
    An ApplicationError raised while the operation runs (our own
    NotFoundError, or one raised by a backend that classifies its own
    errors) is re-raised unchanged. Only unknown exceptions are converted,
    logged first with the layer and operation name, and chained with
    ``raise ... from exc`` so the cause stays visible in tracebacks.
"""

import logging
from typing import Any, List, Mapping, Optional, Sequence

from crudkit.backends.base import RecordModel
from crudkit.config import settings
from crudkit.exceptions import ApplicationError, NotFoundError, OperationFailedError


class CrudRepository:
    """
    Uniform result-or-ApplicationError contract over a RecordModel.

    Args:
        model:          The backend record-model to adapt
        resource_name:  Word used in error messages (default "resource")
        resource_plural: Plural used by get_all (default resource_name + "s")
        logger:         Diagnostic sink; defaults to this module's logger

    Every operation returns the backend's value unchanged on success.
    """

    def __init__(
        self,
        model: RecordModel,
        *,
        resource_name: str = "resource",
        resource_plural: Optional[str] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.model = model
        self.resource_name = resource_name
        self.resource_plural = resource_plural or f"{resource_name}s"
        self.logger = logger if logger is not None else logging.getLogger(__name__)

    # ── Classification helpers ────────────────────────────────────────────

    def _not_found(self, record_id: Any, action: str = "") -> NotFoundError:
        label = self.resource_name.capitalize()
        suffix = f" to {action}" if action else ""
        return NotFoundError(
            f"{label} not found{suffix} with id: {record_id}",
            resource_id=record_id,
        )

    def _failed(self, operation: str, exc: Exception, message: str) -> OperationFailedError:
        self.logger.error(
            "[Repository][%s] Error: %s",
            operation,
            exc,
            exc_info=settings.log_tracebacks,
        )
        return OperationFailedError(
            message,
            operation=operation,
            context={"original_error": type(exc).__name__},
        )

    def _passthrough(self, operation: str, exc: ApplicationError) -> None:
        self.logger.debug(
            "[Repository][%s] %s (%d): %s",
            operation,
            type(exc).__name__,
            exc.status_code,
            exc.message,
        )

    # ── Single-record operations ──────────────────────────────────────────

    async def create(self, data: Any) -> Any:
        """Persist one new record."""
        try:
            return await self.model.create(data)
        except ApplicationError as e:
            self._passthrough("create", e)
            raise
        except Exception as e:
            raise self._failed("create", e, f"Failed to create {self.resource_name}") from e

    async def get(self, record_id: Any) -> Any:
        """
        Fetch one record by id.

        Raises:
            NotFoundError: No record has this id (404)
            OperationFailedError: The backend call failed (500)
        """
        try:
            result = await self.model.find_by_id(record_id)
            if result is None:
                raise self._not_found(record_id)
            return result
        except ApplicationError as e:
            self._passthrough("get", e)
            raise
        except Exception as e:
            raise self._failed("get", e, f"Failed to fetch {self.resource_name}") from e

    async def update(self, record_id: Any, data: Any) -> Any:
        """Apply ``data`` and return the updated record."""
        try:
            result = await self.model.find_by_id_and_update(record_id, data)
            if result is None:
                raise self._not_found(record_id, "update")
            return result
        except ApplicationError as e:
            self._passthrough("update", e)
            raise
        except Exception as e:
            raise self._failed("update", e, f"Failed to update {self.resource_name}") from e

    async def delete(self, record_id: Any) -> Any:
        """Remove a record and return what was removed."""
        try:
            result = await self.model.find_by_id_and_delete(record_id)
            if result is None:
                raise self._not_found(record_id, "delete")
            return result
        except ApplicationError as e:
            self._passthrough("delete", e)
            raise
        except Exception as e:
            raise self._failed("delete", e, f"Failed to delete {self.resource_name}") from e

    # ── Collection operations ─────────────────────────────────────────────

    async def get_all(self) -> List[Any]:
        """Every record (match-all filter)."""
        try:
            return await self.model.find({})
        except ApplicationError as e:
            self._passthrough("get_all", e)
            raise
        except Exception as e:
            raise self._failed("get_all", e, f"Failed to fetch {self.resource_plural}") from e

    async def insert_many(self, records: Sequence[Any]) -> List[Any]:
        try:
            return await self.model.insert_many(records)
        except ApplicationError as e:
            self._passthrough("insert_many", e)
            raise
        except Exception as e:
            raise self._failed("insert_many", e, "Failed to insert multiple records") from e

    async def count(self, filter: Optional[Mapping[str, Any]] = None) -> int:
        """Number of records matching ``filter`` (match-all when omitted)."""
        try:
            return await self.model.count_documents(filter or {})
        except ApplicationError as e:
            self._passthrough("count", e)
            raise
        except Exception as e:
            raise self._failed("count", e, "Failed to count documents") from e

    async def exists(self, filter: Optional[Mapping[str, Any]] = None) -> Optional[Any]:
        """
        Backend-defined existence indicator for ``filter``.

        Not coerced to bool: backends may return an id or a small
        record-like value when a match exists, and None otherwise.
        """
        try:
            return await self.model.exists(filter or {})
        except ApplicationError as e:
            self._passthrough("exists", e)
            raise
        except Exception as e:
            raise self._failed("exists", e, "Failed to check existence") from e
