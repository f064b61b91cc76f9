"""
crudkit — CRUD Service
========================

What:  Validation plus delegation on top of a CrudRepository.
How:   create/update run the configured validator first; every operation
       then awaits the matching repository call.
Who:   Called by HTTP handlers, CLIs or other services.

Per-call flow:
    Start → Validating (create/update only) → Delegating → Success | Failed

    A validator rejection fails the call with ValidationFailedError (422)
    before the repository is touched.

Error Handling Strategy:
    ApplicationErrors (from a validator rejection or from the repository)
    propagate as the same object. Anything else is unexpected: it is logged
    with the operation name and converted to OperationFailedError (500),
    so callers only ever see ApplicationError.
"""

import logging
from dataclasses import dataclass, fields
from typing import Any, List, Mapping, Optional, Sequence, Union

from crudkit.config import settings
from crudkit.exceptions import ApplicationError, OperationFailedError, ValidationFailedError
from crudkit.repositories.crud_repository import CrudRepository
from crudkit.services.validators import Validator, describe_issue


@dataclass(frozen=True)
class ServiceValidators:
    """
    Optional validators for the mutating operations.

    Operations without a validator skip validation. A misspelled
    operation name is a TypeError here and a ValueError in from_mapping().
    """

    create: Optional[Validator] = None
    update: Optional[Validator] = None

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Validator]) -> "ServiceValidators":
        """Build from ``{"create": fn, "update": fn}``; unknown keys are rejected."""
        known = {f.name for f in fields(cls)}
        unknown = set(mapping) - known
        if unknown:
            raise ValueError(
                f"Unknown validator operation(s): {sorted(unknown)}. Expected: {sorted(known)}"
            )
        return cls(**dict(mapping))


class CrudService:
    """
    Business layer over a CrudRepository.

    Args:
        repository:  Repository to delegate to
        validators:  ServiceValidators, a {"create"/"update": fn} mapping, or None
        logger:      Diagnostic sink; defaults to this module's logger
    """

    def __init__(
        self,
        repository: CrudRepository,
        validators: Union[ServiceValidators, Mapping[str, Validator], None] = None,
        *,
        logger: Optional[logging.Logger] = None,
    ):
        self.repository = repository
        if validators is None:
            validators = ServiceValidators()
        elif not isinstance(validators, ServiceValidators):
            validators = ServiceValidators.from_mapping(validators)
        self.validators = validators
        self.resource_name = getattr(repository, "resource_name", "resource")
        plural = getattr(repository, "resource_plural", None)
        self.resource_plural = plural if isinstance(plural, str) else f"{self.resource_name}s"
        self.logger = logger if logger is not None else logging.getLogger(__name__)

    # ── Helpers ───────────────────────────────────────────────────────────

    def _validate(self, operation: str, data: Any) -> None:
        validator = getattr(self.validators, operation)
        if validator is None:
            return
        issue = describe_issue(validator(data))
        if issue is not None:
            self.logger.info("[Service][%s] Validation failed: %s", operation, issue.message)
            raise ValidationFailedError(issue.message, field=issue.field)

    def _passthrough(self, operation: str, exc: ApplicationError) -> None:
        self.logger.debug(
            "[Service][%s] %s (%d): %s",
            operation,
            type(exc).__name__,
            exc.status_code,
            exc.message,
        )

    def _unexpected(self, operation: str, exc: Exception, activity: str) -> OperationFailedError:
        self.logger.error(
            "[Service][%s] Error: %s",
            operation,
            exc,
            exc_info=settings.log_tracebacks,
        )
        return OperationFailedError(
            f"Something went wrong while {activity}",
            operation=operation,
            context={"original_error": type(exc).__name__},
        )

    # ── Operations ────────────────────────────────────────────────────────

    async def create(self, data: Any) -> Any:
        """
        Validate (if configured) and create a record.

        Raises:
            ValidationFailedError: The create validator rejected ``data`` (422)
            ApplicationError: Whatever the repository raised, unchanged
            OperationFailedError: Any unexpected failure (500)
        """
        try:
            self._validate("create", data)
            return await self.repository.create(data)
        except ApplicationError as e:
            self._passthrough("create", e)
            raise
        except Exception as e:
            raise self._unexpected("create", e, f"creating {self.resource_name}") from e

    async def get(self, record_id: Any) -> Any:
        try:
            return await self.repository.get(record_id)
        except ApplicationError as e:
            self._passthrough("get", e)
            raise
        except Exception as e:
            raise self._unexpected("get", e, f"fetching {self.resource_name}") from e

    async def get_all(self) -> List[Any]:
        try:
            return await self.repository.get_all()
        except ApplicationError as e:
            self._passthrough("get_all", e)
            raise
        except Exception as e:
            raise self._unexpected("get_all", e, f"fetching {self.resource_plural}") from e

    async def update(self, record_id: Any, data: Any) -> Any:
        """Validate (if configured) and update a record; see create() for errors."""
        try:
            self._validate("update", data)
            return await self.repository.update(record_id, data)
        except ApplicationError as e:
            self._passthrough("update", e)
            raise
        except Exception as e:
            raise self._unexpected("update", e, f"updating {self.resource_name}") from e

    async def delete(self, record_id: Any) -> Any:
        try:
            return await self.repository.delete(record_id)
        except ApplicationError as e:
            self._passthrough("delete", e)
            raise
        except Exception as e:
            raise self._unexpected("delete", e, f"deleting {self.resource_name}") from e

    async def insert_many(self, records: Sequence[Any]) -> List[Any]:
        # Bulk inserts are not run through the create validator
        try:
            return await self.repository.insert_many(records)
        except ApplicationError as e:
            self._passthrough("insert_many", e)
            raise
        except Exception as e:
            raise self._unexpected("insert_many", e, "inserting data") from e

    async def count(self, filter: Optional[Mapping[str, Any]] = None) -> int:
        try:
            return await self.repository.count(filter or {})
        except ApplicationError as e:
            self._passthrough("count", e)
            raise
        except Exception as e:
            raise self._unexpected("count", e, "counting documents") from e

    async def exists(self, filter: Optional[Mapping[str, Any]] = None) -> Optional[Any]:
        try:
            return await self.repository.exists(filter or {})
        except ApplicationError as e:
            self._passthrough("exists", e)
            raise
        except Exception as e:
            raise self._unexpected("exists", e, "checking existence") from e
