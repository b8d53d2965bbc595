"""Tests for Space CRUD actions."""

import pytest

from tailless.actions import (
    ANONYMOUS,
    create_space,
    delete_space,
    get_space,
    get_spaces,
    update_space,
)
from tailless.core import messages
from tailless.core.response import HttpStatus


def space_payload(title: str = "Travel", **kwargs) -> dict:
    return {"title": title, "description": "Trips and notes", **kwargs}


@pytest.mark.anyio
async def test_create_requires_auth(session):
    result = await create_space(session, ANONYMOUS, space_payload())
    assert result.status == HttpStatus.UNAUTHORIZED


@pytest.mark.anyio
async def test_create_defaults_contributor_to_creator(session, login):
    auth = await login("alice")

    result = await create_space(session, auth, space_payload())

    assert result.ok
    space = result.data
    assert space.contributors == ["alice"]
    assert space.layout.value == "blog"
    assert space.created_at.endswith("Z")


@pytest.mark.anyio
async def test_create_persists_input_fields(session, login):
    auth = await login("alice")
    await login("bob")
    payload = space_payload(
        contributors=["alice", "bob"],
        tags=["travel", "food"],
        layout="timeline",
        createdAt="2024-05-01T00:00:00.000Z",
        image="https://img.example.com/x.png",
    )

    created = await create_space(session, auth, payload)
    fetched = await get_space(session, {"id": created.data.id})

    assert fetched.ok
    assert fetched.data == created.data
    assert fetched.data.tags == ["travel", "food"]
    assert fetched.data.created_at == "2024-05-01T00:00:00.000Z"
    assert fetched.data.layout.value == "timeline"


@pytest.mark.anyio
async def test_create_without_creator_in_contributors_forbidden(session, login):
    auth = await login("alice")
    result = await create_space(session, auth, space_payload(contributors=["bob"]))
    assert result.status == HttpStatus.FORBIDDEN


@pytest.mark.anyio
async def test_create_duplicate_title_conflicts(session, login):
    auth = await login("alice")
    assert (await create_space(session, auth, space_payload("Travel"))).ok

    result = await create_space(session, auth, space_payload("Travel"))
    assert result.status == HttpStatus.CONFLICT
    assert result.error_messages == [messages.SPACE_EXISTS]

    # Title match is case-sensitive
    assert (await create_space(session, auth, space_payload("travel"))).ok


@pytest.mark.anyio
async def test_create_invalid_payload(session, login):
    auth = await login("alice")
    result = await create_space(session, auth, {"title": "", "description": "x"})
    assert result.status == HttpStatus.BAD_REQUEST

    result = await create_space(session, auth, space_payload(layout="grid"))
    assert result.status == HttpStatus.BAD_REQUEST


@pytest.mark.anyio
async def test_get_space_errors(session):
    assert (await get_space(session, {"id": ""})).status == HttpStatus.BAD_REQUEST
    assert (await get_space(session, {"id": "missing"})).status == HttpStatus.NOT_FOUND


@pytest.mark.anyio
async def test_get_spaces_filters(session, login):
    alice = await login("alice")
    bob = await login("bob")
    await create_space(session, alice, space_payload("Travel", tags=["trip"]))
    await create_space(session, alice, space_payload("Trip log", tags=["log"]))
    await create_space(session, bob, space_payload("Cooking", tags=["food", "trip"]))

    everything = await get_spaces(session, {})
    assert len(everything.data) == 3

    by_title = await get_spaces(session, {"title": "Tr"})
    assert sorted(s.title for s in by_title.data) == ["Travel", "Trip log"]

    by_tag = await get_spaces(session, {"tags": ["trip"]})
    assert sorted(s.title for s in by_tag.data) == ["Cooking", "Travel"]

    by_contributor = await get_spaces(session, {"contributors": ["bob"]})
    assert [s.title for s in by_contributor.data] == ["Cooking"]

    combined = await get_spaces(session, {"title": "Tr", "tags": ["log"]})
    assert [s.title for s in combined.data] == ["Trip log"]


@pytest.mark.anyio
async def test_update_merges_only_given_fields(session, login):
    auth = await login("alice")
    created = await create_space(session, auth, space_payload(tags=["a"]))

    result = await update_space(
        session, auth, {"id": created.data.id, "description": "New", "layout": "idea"}
    )

    assert result.ok
    assert result.data.description == "New"
    assert result.data.layout.value == "idea"
    assert result.data.title == "Travel"
    assert result.data.tags == ["a"]


@pytest.mark.anyio
async def test_update_by_non_contributor_forbidden(session, login):
    alice = await login("alice")
    bob = await login("bob")
    created = await create_space(session, alice, space_payload())

    result = await update_space(session, bob, {"id": created.data.id, "description": "x"})
    assert result.status == HttpStatus.FORBIDDEN


@pytest.mark.anyio
async def test_update_cannot_empty_contributors(session, login):
    auth = await login("alice")
    created = await create_space(session, auth, space_payload())

    result = await update_space(session, auth, {"id": created.data.id, "contributors": []})

    assert result.status == HttpStatus.FORBIDDEN
    assert (await get_space(session, {"id": created.data.id})).data.contributors == ["alice"]


@pytest.mark.anyio
async def test_update_cannot_remove_other_contributors(session, login):
    alice = await login("alice")
    await login("bob")
    created = await create_space(session, alice, space_payload(contributors=["alice", "bob"]))

    result = await update_space(session, alice, {"id": created.data.id, "contributors": ["alice"]})

    assert result.status == HttpStatus.FORBIDDEN
    assert result.error_messages == [messages.CONTRIBUTOR_REMOVE_SELF_ONLY]
    assert (await get_space(session, {"id": created.data.id})).data.contributors == [
        "alice",
        "bob",
    ]


@pytest.mark.anyio
async def test_update_contributors_rejects_unknown_user(session, login):
    auth = await login("alice")
    created = await create_space(session, auth, space_payload())

    result = await update_space(
        session, auth, {"id": created.data.id, "contributors": ["alice", "ghost"]}
    )

    assert result.status == HttpStatus.NOT_FOUND
    assert result.error_messages == [messages.CONTRIBUTOR_USER_MISSING]


@pytest.mark.anyio
async def test_update_contributors_add_known_and_leave(session, login):
    alice = await login("alice")
    await login("bob")
    created = await create_space(session, alice, space_payload())

    result = await update_space(session, alice, {"id": created.data.id, "contributors": ["bob"]})

    assert result.ok
    assert result.data.contributors == ["bob"]


@pytest.mark.anyio
async def test_update_title_collision_conflicts(session, login):
    auth = await login("alice")
    await create_space(session, auth, space_payload("Travel"))
    other = await create_space(session, auth, space_payload("Cooking"))

    result = await update_space(session, auth, {"id": other.data.id, "title": "Travel"})
    assert result.status == HttpStatus.CONFLICT

    same = await update_space(session, auth, {"id": other.data.id, "title": "Cooking"})
    assert same.ok


@pytest.mark.anyio
async def test_update_missing_space(session, login):
    auth = await login("alice")
    result = await update_space(session, auth, {"id": "missing", "description": "x"})
    assert result.status == HttpStatus.NOT_FOUND


@pytest.mark.anyio
async def test_delete_space(session, login):
    alice = await login("alice")
    bob = await login("bob")
    created = await create_space(session, alice, space_payload())

    assert (await delete_space(session, bob, {"id": created.data.id})).status == HttpStatus.FORBIDDEN
    assert (await delete_space(session, alice, {"id": created.data.id})).ok
    assert (await get_space(session, {"id": created.data.id})).status == HttpStatus.NOT_FOUND
    assert (await delete_space(session, alice, {"id": created.data.id})).status == HttpStatus.NOT_FOUND
