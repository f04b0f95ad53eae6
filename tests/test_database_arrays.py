from __future__ import annotations

import asyncio

import pytest

from quickmirror import (
    IndexOutOfRange,
    InvalidTarget,
    InvalidType,
    OneOrMoreTypesInvalid,
    RequiredParameterMissing,
)


def test_push_pull_pop_flow(make_database):
    async def _run():
        db = await make_database()

        assert await db.push("list", "a") == ["a"]
        assert await db.push("list", "b", "c") == ["a", "b", "c"]
        assert db.get("list") == ["a", "b", "c"]
        assert db.is_target_array("list")

        assert await db.pull("list", 1, "Z") == ["a", "Z", "c"]
        assert await db.pop("list", 0) == ["Z", "c"]
        assert db.get("list") == ["Z", "c"]
        assert (await db.raw())[0]["__VALUE"] == ["Z", "c"]

    asyncio.run(_run())


def test_push_into_nested_path(make_database):
    async def _run():
        db = await make_database()
        await db.set("account.name", "x")

        assert await db.push("account.roles", "admin") == ["admin"]
        assert db.get("account") == {"name": "x", "roles": ["admin"]}

    asyncio.run(_run())


def test_pull_index_handling(make_database):
    async def _run():
        db = await make_database()
        await db.push("list", 1, 2, 3)

        assert await db.pull("list", -1, "last") == [1, 2, "last"]
        assert await db.pull("list", 4, "far") == [1, 2, "last", None, "far"]
        with pytest.raises(IndexOutOfRange):
            await db.pull("list", -10, "x")

        with pytest.raises(RequiredParameterMissing, match="'index'"):
            await db.pull("list")
        with pytest.raises(InvalidType, match="'index' must be a type of integer"):
            await db.pull("list", "0", "x")
        with pytest.raises(RequiredParameterMissing, match="'value'"):
            await db.pull("list", 0)

        assert await db.pull("list", 0, None) == [None, 2, "last", None, "far"]

    asyncio.run(_run())


def test_pop_multiple_indexes(make_database):
    async def _run():
        db = await make_database()
        await db.push("list", "a", "b", "c", "d", "e")

        # each removal sees the already shortened list
        assert await db.pop("list", 0, 0) == ["c", "d", "e"]
        assert await db.pop("list", [-1]) == ["c", "d"]
        assert await db.pop("list", 10) == ["c", "d"]

    asyncio.run(_run())


def test_pop_validates_indexes(make_database):
    async def _run():
        db = await make_database()
        await db.push("list", "a", "b")

        with pytest.raises(RequiredParameterMissing, match="'indexes'"):
            await db.pop("list")
        with pytest.raises(InvalidType, match="'index' must be a type of integer. Received type: string."):
            await db.pop("list", "0")

        with pytest.raises(OneOrMoreTypesInvalid) as excinfo:
            await db.pop("list", 0, "1", None)
        assert excinfo.value.received_types == ["number", "string", "null"]

        assert db.get("list") == ["a", "b"]

    asyncio.run(_run())


def test_array_operations_reject_non_array_target(make_database):
    async def _run():
        db = await make_database()
        await db.set("number", 1)

        with pytest.raises(InvalidTarget, match="must be a type of array. Received target type: number."):
            await db.push("number", 2)
        with pytest.raises(InvalidTarget):
            await db.pull("number", 0, 2)
        with pytest.raises(InvalidTarget):
            await db.pop("number", 0)
        with pytest.raises(RequiredParameterMissing, match="'values'"):
            await db.push("fresh")

    asyncio.run(_run())


def test_random(make_database, monkeypatch):
    async def _run():
        db = await make_database()
        items = ["a", "b", "c"]
        await db.push("items", *items)
        await db.set("empty", [])

        for _ in range(20):
            assert db.random("items") in items

        import quickmirror.database as database_module

        monkeypatch.setattr(database_module.random, "random", lambda: 0.99)
        assert db.random("items") == "c"

        assert db.random("empty") is None
        with pytest.raises(InvalidTarget, match="Received target type: null."):
            db.random("missing")

    asyncio.run(_run())


def test_tuple_values_behave_as_arrays(make_database):
    async def _run():
        db = await make_database()

        assert await db.set("t", (1, 2)) == [1, 2]
        assert db.get("t") == [1, 2]
        assert db.is_target_array("t")
        assert await db.raw() == [{"__KEY": "t", "__VALUE": [1, 2]}]

        assert await db.push("t", 3) == [1, 2, 3]
        assert await db.pop("t", (0, 0)) == [3]

    asyncio.run(_run())


def test_pop_negative_index_before_start_removes_first(make_database):
    async def _run():
        db = await make_database()
        await db.push("list", "a", "b", "c")

        assert await db.pop("list", -10) == ["b", "c"]
        assert await db.pop("list", -2) == ["c"]
        assert db.get("list") == ["c"]

    asyncio.run(_run())
