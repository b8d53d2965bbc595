"""Tests for Space membership: moments, contributors and tags."""

import pytest

from tailless.actions import (
    ANONYMOUS,
    add_contributor,
    add_moment_to_space,
    add_tags,
    create_moment,
    create_space,
    delete_all_tags,
    delete_tags,
    get_space,
    remove_contributor,
    remove_moment_from_space,
)
from tailless.core import messages
from tailless.core.response import HttpStatus


async def _space(session, auth, title="Travel", **kwargs):
    result = await create_space(session, auth, {"title": title, "description": "", **kwargs})
    assert result.ok
    return result.data


async def _moment(session, auth, title="Day one"):
    result = await create_moment(session, auth, {"title": title, "content": "..."})
    assert result.ok
    return result.data


async def _reload(session, space_id):
    return (await get_space(session, {"id": space_id})).data


class TestSpaceMoments:
    @pytest.mark.anyio
    async def test_add_and_remove(self, session, login):
        auth = await login("alice")
        space = await _space(session, auth)
        moment = await _moment(session, auth)

        assert (await add_moment_to_space(session, auth, space.id, moment.id)).ok
        assert (await _reload(session, space.id)).moments == [moment.id]

        assert (await remove_moment_from_space(session, auth, space.id, moment.id)).ok
        assert (await _reload(session, space.id)).moments == []

    @pytest.mark.anyio
    async def test_add_twice_conflicts_and_keeps_list(self, session, login):
        auth = await login("alice")
        space = await _space(session, auth)
        moment = await _moment(session, auth)

        await add_moment_to_space(session, auth, space.id, moment.id)
        result = await add_moment_to_space(session, auth, space.id, moment.id)

        assert result.status == HttpStatus.CONFLICT
        assert result.error_messages == [messages.MOMENT_ALREADY_IN_SPACE]
        assert (await _reload(session, space.id)).moments == [moment.id]

    @pytest.mark.anyio
    async def test_remove_absent_is_bad_request(self, session, login):
        auth = await login("alice")
        space = await _space(session, auth)
        moment = await _moment(session, auth)

        result = await remove_moment_from_space(session, auth, space.id, moment.id)
        assert result.status == HttpStatus.BAD_REQUEST
        assert result.error_messages == [messages.MOMENT_NOT_IN_SPACE]

    @pytest.mark.anyio
    async def test_authorization(self, session, login):
        alice = await login("alice")
        bob = await login("bob")
        space = await _space(session, alice)
        alices = await _moment(session, alice)
        bobs = await _moment(session, bob)

        # Not a contributor
        assert (await add_moment_to_space(session, bob, space.id, bobs.id)).status == HttpStatus.FORBIDDEN
        # Contributor but not the author
        assert (await add_moment_to_space(session, alice, space.id, bobs.id)).status == HttpStatus.FORBIDDEN
        # Missing targets
        assert (await add_moment_to_space(session, alice, "nope", alices.id)).status == HttpStatus.NOT_FOUND
        assert (await add_moment_to_space(session, alice, space.id, "nope")).status == HttpStatus.NOT_FOUND
        assert (await add_moment_to_space(session, ANONYMOUS, space.id, alices.id)).status == HttpStatus.UNAUTHORIZED


class TestContributors:
    @pytest.mark.anyio
    async def test_add_contributor(self, session, login):
        alice = await login("alice")
        await login("bob")
        space = await _space(session, alice)

        assert (await add_contributor(session, alice, space.id, "bob")).ok
        assert (await _reload(session, space.id)).contributors == ["alice", "bob"]

        again = await add_contributor(session, alice, space.id, "bob")
        assert again.status == HttpStatus.CONFLICT

    @pytest.mark.anyio
    async def test_add_unknown_user_not_found(self, session, login):
        alice = await login("alice")
        space = await _space(session, alice)

        result = await add_contributor(session, alice, space.id, "ghost")
        assert result.status == HttpStatus.NOT_FOUND

    @pytest.mark.anyio
    async def test_only_contributors_can_add(self, session, login):
        alice = await login("alice")
        bob = await login("bob")
        space = await _space(session, alice)

        result = await add_contributor(session, bob, space.id, "bob")
        assert result.status == HttpStatus.FORBIDDEN
        assert result.error_messages == [messages.CONTRIBUTOR_ONLY_CAN_ADD]

    @pytest.mark.anyio
    async def test_remove_self(self, session, login):
        alice = await login("alice")
        bob = await login("bob")
        space = await _space(session, alice, contributors=["alice", "bob"])

        assert (await remove_contributor(session, bob, space.id)).ok
        assert (await _reload(session, space.id)).contributors == ["alice"]

        result = await remove_contributor(session, bob, space.id)
        assert result.status == HttpStatus.NOT_FOUND

    @pytest.mark.anyio
    async def test_last_contributor_cannot_leave(self, session, login):
        alice = await login("alice")
        space = await _space(session, alice)

        result = await remove_contributor(session, alice, space.id)

        assert result.status == HttpStatus.FORBIDDEN
        assert (await _reload(session, space.id)).contributors == ["alice"]


class TestTags:
    @pytest.mark.anyio
    async def test_add_tags_deduplicates_in_order(self, session, login):
        auth = await login("alice")
        space = await _space(session, auth, tags=["a", "b"])

        assert (await add_tags(session, auth, space.id, ["b", "c", "c", "d"])).ok
        assert (await _reload(session, space.id)).tags == ["a", "b", "c", "d"]

    @pytest.mark.anyio
    async def test_delete_tags_preserves_order(self, session, login):
        auth = await login("alice")
        space = await _space(session, auth, tags=["a", "b", "c", "d"])

        assert (await delete_tags(session, auth, space.id, ["b", "x", "d"])).ok
        assert (await _reload(session, space.id)).tags == ["a", "c"]

    @pytest.mark.anyio
    async def test_delete_all_tags(self, session, login):
        auth = await login("alice")
        space = await _space(session, auth, tags=["a", "b"])

        assert (await delete_all_tags(session, auth, space.id)).ok
        assert (await _reload(session, space.id)).tags == []

    @pytest.mark.anyio
    async def test_non_contributor_forbidden(self, session, login):
        alice = await login("alice")
        bob = await login("bob")
        space = await _space(session, alice, tags=["a"])

        for result in (
            await add_tags(session, bob, space.id, ["x"]),
            await delete_tags(session, bob, space.id, ["a"]),
            await delete_all_tags(session, bob, space.id),
        ):
            assert result.status == HttpStatus.FORBIDDEN
            assert result.error_messages == [messages.TAGS_FORBIDDEN]
        assert (await _reload(session, space.id)).tags == ["a"]

    @pytest.mark.anyio
    async def test_invalid_tags_rejected(self, session, login):
        auth = await login("alice")
        space = await _space(session, auth)

        result = await add_tags(session, auth, space.id, "not-a-list")
        assert result.status == HttpStatus.BAD_REQUEST
