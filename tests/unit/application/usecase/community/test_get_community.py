"""Unit tests for the community use cases."""

import pytest

from hubcorner.application.usecase.community import (
    CreateCommunityRequest,
    CreateCommunityUseCase,
    GetCommunityRequest,
    GetCommunityUseCase,
    ListCommunitiesRequest,
    ListCommunitiesUseCase,
)
from hubcorner.domain.error import ConflictError, NotFoundError
from hubcorner.domain.service import PostService
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestCommunityUseCases:
    """Tests for community use cases."""

    @pytest.mark.asyncio
    async def test_get_community_with_posts(self, unit_env):
        # Arrange
        create = await unit_env.get(CreateCommunityUseCase)
        post_service = await unit_env.get(PostService)
        use_case = await unit_env.get(GetCommunityUseCase)
        created = await create.execute(
            CreateCommunityRequest(name="golang", description="Gophers")
        )
        await post_service.create_post(created.community_id, "Hello")

        # Act
        response = await use_case.execute(GetCommunityRequest(name="golang"))

        # Assert
        assert response.community.name == "golang"
        assert response.community.post_count == 1
        assert [p.title for p in response.posts] == ["Hello"]

    @pytest.mark.asyncio
    async def test_get_missing_community_raises_not_found(self, unit_env):
        use_case = await unit_env.get(GetCommunityUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(GetCommunityRequest(name="ghost"))

    @pytest.mark.asyncio
    async def test_create_duplicate_raises_conflict(self, unit_env):
        create = await unit_env.get(CreateCommunityUseCase)
        await create.execute(CreateCommunityRequest(name="golang"))

        with pytest.raises(ConflictError):
            await create.execute(CreateCommunityRequest(name="golang"))

    @pytest.mark.asyncio
    async def test_list_communities(self, unit_env):
        create = await unit_env.get(CreateCommunityUseCase)
        use_case = await unit_env.get(ListCommunitiesUseCase)
        await create.execute(CreateCommunityRequest(name="python"))
        await create.execute(CreateCommunityRequest(name="golang"))

        response = await use_case.execute(ListCommunitiesRequest())

        assert response.total == 2
        assert [c.name for c in response.communities] == ["golang", "python"]
