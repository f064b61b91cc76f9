"""
crudkit — Two-Layer Data Access
=================================

What: A Repository that adapts any record-model backend to a uniform
      result-or-ApplicationError contract, and a Service that adds optional
      validation and normalizes every failure into the same error taxonomy.

Architecture:

    ┌─────────────────────────────────────┐
    │   Caller (HTTP handler, CLI, ...)   │
    ├─────────────────────────────────────┤
    │   CrudService                       │  ← validation, error normalization
    ├─────────────────────────────────────┤
    │   CrudRepository                    │  ← absent → 404, failure → 500
    ├─────────────────────────────────────┤
    │   RecordModel backend               │  ← in-memory, SQLAlchemy, custom
    └─────────────────────────────────────┘

Usage:
    repo = CrudRepository(InMemoryRecordModel(), resource_name="user")
    service = CrudService(repo, ServiceValidators(create=required_fields("name")))
    user = await service.create({"name": "Ada"})
"""

from crudkit.backends import InMemoryRecordModel, RecordModel, SQLAlchemyRecordModel
from crudkit.exceptions import (
    ApplicationError,
    NotFoundError,
    OperationFailedError,
    ValidationFailedError,
    is_application_error,
)
from crudkit.repositories import CrudRepository
from crudkit.services import (
    CrudService,
    ServiceValidators,
    ValidationIssue,
    required_fields,
    schema_validator,
)

__version__ = "1.0.0"

__all__ = [
    "ApplicationError",
    "CrudRepository",
    "CrudService",
    "InMemoryRecordModel",
    "NotFoundError",
    "OperationFailedError",
    "RecordModel",
    "SQLAlchemyRecordModel",
    "ServiceValidators",
    "ValidationFailedError",
    "ValidationIssue",
    "is_application_error",
    "required_fields",
    "schema_validator",
]
