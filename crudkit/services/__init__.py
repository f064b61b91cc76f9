"""
crudkit — Services Layer
==========================

    - CrudService: validation + delegation + error normalization
    - ServiceValidators: optional create/update validators
    - ValidationIssue, schema_validator, required_fields: validator helpers
"""

from crudkit.services.crud_service import CrudService, ServiceValidators
from crudkit.services.validators import (
    ValidationIssue,
    Validator,
    describe_issue,
    required_fields,
    schema_validator,
)

__all__ = [
    "CrudService",
    "ServiceValidators",
    "ValidationIssue",
    "Validator",
    "describe_issue",
    "required_fields",
    "schema_validator",
]
