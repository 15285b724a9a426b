"""Unit tests for CommunityService."""

import pytest

from hubcorner.domain.error import ConflictError, InvalidArgumentError, NotFoundError
from hubcorner.domain.service import CommunityService, PostService
from hubcorner.domain.value import CommunityId
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no database needed
unit_env = create_env_fixture()


class TestCreateCommunity:
    """Tests for create_community."""

    @pytest.mark.asyncio
    async def test_creates_community(self, unit_env):
        service = await unit_env.get(CommunityService)

        community = await service.create_community("rustlang", "  Systems talk  ")

        assert community.id is not None
        assert community.name.root == "rustlang"
        assert community.description == "Systems talk"

    @pytest.mark.asyncio
    async def test_duplicate_name_raises_conflict(self, unit_env):
        service = await unit_env.get(CommunityService)
        await service.create_community("rustlang")

        with pytest.raises(ConflictError):
            await service.create_community("rustlang")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("name", ["ab", "has space", "x" * 51, "slash/name"])
    async def test_malformed_name_raises_invalid_argument(self, unit_env, name):
        service = await unit_env.get(CommunityService)

        with pytest.raises(InvalidArgumentError):
            await service.create_community(name)


class TestGetCommunity:
    """Tests for community lookups."""

    @pytest.mark.asyncio
    async def test_get_by_name_includes_post_count(self, unit_env):
        service = await unit_env.get(CommunityService)
        post_service = await unit_env.get(PostService)
        created = await service.create_community("python")
        await post_service.create_post(created.id, "First")
        await post_service.create_post(created.id, "Second")

        community = await service.get_by_name("python")

        assert community.id == created.id
        assert community.post_count == 2

    @pytest.mark.asyncio
    async def test_get_by_name_missing_raises_not_found(self, unit_env):
        service = await unit_env.get(CommunityService)

        with pytest.raises(NotFoundError, match="Community not found: nothing"):
            await service.get_by_name("nothing")

    @pytest.mark.asyncio
    async def test_get_by_name_malformed_raises_not_found(self, unit_env):
        service = await unit_env.get(CommunityService)

        with pytest.raises(NotFoundError):
            await service.get_by_name("a b")

    @pytest.mark.asyncio
    async def test_get_by_id_missing_raises_not_found(self, unit_env):
        service = await unit_env.get(CommunityService)

        with pytest.raises(NotFoundError):
            await service.get_by_id(CommunityId(42))

    @pytest.mark.asyncio
    async def test_list_communities_orders_by_name(self, unit_env):
        service = await unit_env.get(CommunityService)
        for name in ["zig", "ada", "ocaml"]:
            await service.create_community(name)

        communities = await service.list_communities()

        assert [c.name.root for c in communities] == ["ada", "ocaml", "zig"]
