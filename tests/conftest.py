"""
crudkit — Test Configuration (conftest.py)
============================================

Shared fixtures:
    ├── mock_model: AsyncMock backend with all eight record-model operations
    ├── memory_model: InMemoryRecordModel seeded with {"id": "1", "name": "A"}
    ├── sink: MagicMock logger injected as the diagnostic sink
    ├── repository / memory_repository: CrudRepository over the two backends
    └── sample_record: the seeded record
"""

import os
from unittest.mock import AsyncMock, MagicMock

import pytest

# Keep test logs quiet regardless of the developer's environment
os.environ["CRUDKIT_LOG_LEVEL"] = "WARNING"

from crudkit.backends.memory import InMemoryRecordModel
from crudkit.repositories.crud_repository import CrudRepository


@pytest.fixture
def sample_record():
    return {"id": "1", "name": "A"}


@pytest.fixture
def mock_model():
    """
    A backend double whose operations are AsyncMocks.

    Usage:
        mock_model.find_by_id.return_value = None
        mock_model.find.side_effect = ConnectionError("db down")
    """
    model = MagicMock()
    model.create = AsyncMock()
    model.find_by_id = AsyncMock()
    model.find_by_id_and_update = AsyncMock()
    model.find_by_id_and_delete = AsyncMock()
    model.find = AsyncMock(return_value=[])
    model.insert_many = AsyncMock(return_value=[])
    model.count_documents = AsyncMock(return_value=0)
    model.exists = AsyncMock(return_value=None)
    return model


@pytest.fixture
def memory_model(sample_record):
    return InMemoryRecordModel(records=[sample_record])


@pytest.fixture
def sink():
    """Stand-in logger so tests can assert on emitted diagnostics."""
    return MagicMock()


@pytest.fixture
def repository(mock_model, sink):
    return CrudRepository(mock_model, logger=sink)


@pytest.fixture
def memory_repository(memory_model, sink):
    return CrudRepository(memory_model, logger=sink)
