"""Tests for Moment CRUD actions and the deletion cascade."""

from unittest.mock import patch

import pytest
from sqlalchemy.exc import OperationalError

from tailless.actions import (
    ANONYMOUS,
    add_moment_to_space,
    create_moment,
    create_space,
    delete_moment,
    get_moment,
    get_moments,
    get_space,
    update_moment,
)
from tailless.core.response import HttpStatus
from tailless.storage import MomentsRepo


def moment_payload(title: str = "Day one", **kwargs) -> dict:
    return {"title": title, "content": "Hello", **kwargs}


@pytest.mark.anyio
async def test_create_sets_author_and_timestamps(session, login):
    auth = await login("alice")

    result = await create_moment(session, auth, moment_payload())

    assert result.ok
    moment = result.data
    assert moment.author == "alice"
    assert moment.created_at == moment.modified_at
    assert moment.created_at.endswith("Z")


@pytest.mark.anyio
async def test_create_requires_auth(session):
    result = await create_moment(session, ANONYMOUS, moment_payload())
    assert result.status == HttpStatus.UNAUTHORIZED


@pytest.mark.anyio
async def test_create_for_someone_else_forbidden(session, login):
    auth = await login("alice")
    result = await create_moment(session, auth, moment_payload(author="bob"))
    assert result.status == HttpStatus.FORBIDDEN


@pytest.mark.anyio
async def test_get_moments_filters(session, login):
    alice = await login("alice")
    bob = await login("bob")
    await create_moment(session, alice, moment_payload("Day one"))
    await create_moment(session, alice, moment_payload("Day two"))
    await create_moment(session, bob, moment_payload("Night"))

    assert len((await get_moments(session, {})).data) == 3
    assert len((await get_moments(session, {"title": "Day"})).data) == 2
    assert [m.title for m in (await get_moments(session, {"author": "bob"})).data] == ["Night"]
    assert (await get_moments(session, {"title": "Day", "author": "bob"})).data == []


@pytest.mark.anyio
async def test_get_moment_not_found(session):
    assert (await get_moment(session, {"id": "missing"})).status == HttpStatus.NOT_FOUND


@pytest.mark.anyio
async def test_update_by_author_refreshes_modified_at(session, login):
    auth = await login("alice")
    created = await create_moment(session, auth, moment_payload())

    with patch(
        "tailless.actions.moments.utc_now_iso", return_value="2099-01-01T00:00:00.000Z"
    ):
        result = await update_moment(
            session, auth, {"id": created.data.id, "content": "Edited"}
        )

    assert result.ok
    assert result.data.content == "Edited"
    assert result.data.title == created.data.title
    assert result.data.created_at == created.data.created_at
    assert result.data.modified_at == "2099-01-01T00:00:00.000Z"


@pytest.mark.anyio
async def test_update_by_other_user_forbidden(session, login):
    alice = await login("alice")
    bob = await login("bob")
    created = await create_moment(session, alice, moment_payload())

    result = await update_moment(session, bob, {"id": created.data.id, "content": "x"})
    assert result.status == HttpStatus.FORBIDDEN

    result = await update_moment(session, alice, {"id": created.data.id, "author": "bob"})
    assert result.status == HttpStatus.FORBIDDEN


@pytest.mark.anyio
async def test_delete_removes_moment_from_every_space(session, login):
    auth = await login("alice")
    moment = (await create_moment(session, auth, moment_payload())).data
    keep = (await create_moment(session, auth, moment_payload("Keep"))).data

    space_ids = []
    for title in ("A", "B"):
        space = (await create_space(session, auth, {"title": title, "description": ""})).data
        assert (await add_moment_to_space(session, auth, space.id, moment.id)).ok
        assert (await add_moment_to_space(session, auth, space.id, keep.id)).ok
        space_ids.append(space.id)

    result = await delete_moment(session, auth, {"id": moment.id})

    assert result.ok
    assert (await get_moment(session, {"id": moment.id})).status == HttpStatus.NOT_FOUND
    for space_id in space_ids:
        space = (await get_space(session, {"id": space_id})).data
        assert space.moments == [keep.id]


@pytest.mark.anyio
async def test_delete_by_non_author_forbidden(session, login):
    alice = await login("alice")
    bob = await login("bob")
    moment = (await create_moment(session, alice, moment_payload())).data

    assert (await delete_moment(session, bob, {"id": moment.id})).status == HttpStatus.FORBIDDEN
    assert (await delete_moment(session, alice, {"id": ""})).status == HttpStatus.BAD_REQUEST
    assert (await delete_moment(session, alice, {"id": "nope"})).status == HttpStatus.NOT_FOUND


@pytest.mark.anyio
async def test_delete_failure_rolls_back_cascade(session, login):
    auth = await login("alice")
    moment = (await create_moment(session, auth, moment_payload())).data
    space = (await create_space(session, auth, {"title": "A", "description": ""})).data
    await add_moment_to_space(session, auth, space.id, moment.id)

    with patch.object(
        MomentsRepo,
        "delete_moment",
        side_effect=OperationalError("DELETE", {}, Exception("disk I/O error")),
    ):
        with pytest.raises(OperationalError):
            await delete_moment(session, auth, {"id": moment.id})

    assert (await get_moment(session, {"id": moment.id})).ok
    assert (await get_space(session, {"id": space.id})).data.moments == [moment.id]
