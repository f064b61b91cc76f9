"""
crudkit — Backends
====================

    - RecordModel (abstract): the eight-operation contract a repository wraps
    - InMemoryRecordModel: dict-backed reference implementation
    - SQLAlchemyRecordModel: async SQLAlchemy ORM adapter
"""

from crudkit.backends.base import RecordModel
from crudkit.backends.memory import InMemoryRecordModel
from crudkit.backends.sqlalchemy import SQLAlchemyRecordModel

__all__ = ["RecordModel", "InMemoryRecordModel", "SQLAlchemyRecordModel"]
