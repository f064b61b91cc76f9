"""
crudkit — InMemoryRecordModel Tests
=====================================

    ✅ Ids are generated when missing and duplicates are refused
    ✅ Returned records are copies of stored state
    ✅ Absence is None, never an exception
    ✅ Equality filters for find / count / exists
    ✅ insert_many is all-or-nothing on duplicate ids
"""

import itertools

import pytest

from crudkit.backends.memory import InMemoryRecordModel


@pytest.fixture
def model():
    counter = itertools.count(1)
    return InMemoryRecordModel(id_factory=lambda: str(next(counter)))


class TestCreate:

    @pytest.mark.asyncio
    async def test_assigns_id(self, model):
        assert await model.create({"name": "A"}) == {"id": "1", "name": "A"}

    @pytest.mark.asyncio
    async def test_keeps_supplied_id(self, model):
        assert (await model.create({"id": "x", "name": "A"}))["id"] == "x"

    @pytest.mark.asyncio
    async def test_duplicate_id(self, model):
        await model.create({"id": "x"})
        with pytest.raises(KeyError):
            await model.create({"id": "x"})

    @pytest.mark.asyncio
    async def test_default_ids_are_unique(self):
        model = InMemoryRecordModel()
        a = await model.create({})
        b = await model.create({})
        assert a["id"] != b["id"]

    @pytest.mark.asyncio
    async def test_custom_id_field(self):
        model = InMemoryRecordModel(id_field="_id", records=[{"_id": "k", "v": 1}])
        assert await model.find_by_id("k") == {"_id": "k", "v": 1}
        assert await model.exists({"v": 1}) == {"_id": "k"}


class TestReadWrite:

    @pytest.mark.asyncio
    async def test_returned_record_is_a_copy(self, model):
        created = await model.create({"name": "A", "tags": ["x"]})
        created["tags"].append("y")
        assert (await model.find_by_id(created["id"]))["tags"] == ["x"]

    @pytest.mark.asyncio
    async def test_absent_is_none(self, model):
        assert await model.find_by_id("nope") is None
        assert await model.find_by_id_and_update("nope", {"a": 1}) is None
        assert await model.find_by_id_and_delete("nope") is None

    @pytest.mark.asyncio
    async def test_update_returns_new_value_and_keeps_id(self, model):
        await model.create({"name": "A"})
        updated = await model.find_by_id_and_update("1", {"name": "B", "id": "other"})
        assert updated == {"id": "1", "name": "B"}

    @pytest.mark.asyncio
    async def test_delete_returns_removed(self, model):
        await model.create({"name": "A"})
        assert await model.find_by_id_and_delete("1") == {"id": "1", "name": "A"}
        assert await model.count_documents({}) == 0


class TestFilters:

    @pytest.mark.asyncio
    async def test_find_count_exists(self, model):
        await model.insert_many([{"name": "A", "role": "x"}, {"name": "B", "role": "x"}, {"name": "C"}])

        assert len(await model.find({})) == 3
        assert [r["name"] for r in await model.find({"role": "x"})] == ["A", "B"]
        assert await model.count_documents({"role": "x"}) == 2
        assert await model.count_documents({"role": "y"}) == 0
        assert await model.exists({"name": "C"}) == {"id": "3"}
        assert await model.exists({"name": "D"}) is None

    @pytest.mark.asyncio
    async def test_missing_key_does_not_match_none(self, model):
        await model.create({"name": "A"})
        assert await model.count_documents({"role": None}) == 0


class TestInsertMany:

    @pytest.mark.asyncio
    async def test_duplicate_in_batch_inserts_nothing(self, model):
        with pytest.raises(KeyError):
            await model.insert_many([{"id": "a"}, {"id": "a"}])
        assert await model.count_documents({}) == 0

    @pytest.mark.asyncio
    async def test_conflict_with_existing_inserts_nothing(self, model):
        await model.create({"id": "a"})
        with pytest.raises(KeyError):
            await model.insert_many([{"id": "b"}, {"id": "a"}])
        assert await model.count_documents({}) == 1

    @pytest.mark.asyncio
    async def test_calls_are_counted(self, model):
        await model.insert_many([{}])
        await model.count_documents({})
        await model.count_documents({})
        assert model.calls["insert_many"] == 1
        assert model.calls["count_documents"] == 2
        assert model.calls["create"] == 0
