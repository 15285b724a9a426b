"""Unit tests for community and post routes."""

import pytest
from fastapi import HTTPException, Request

from hubcorner.application.usecase.community import (
    CreateCommunityRequest,
    CreateCommunityUseCase,
    GetCommunityUseCase,
)
from hubcorner.application.usecase.post import (
    CreatePostRequest,
    CreatePostUseCase,
    GetPostUseCase,
    ListPostsUseCase,
)
from hubcorner.config import Settings
from hubcorner.domain.service import VoteLedger
from hubcorner.domain.value import VotableType
from hubcorner.interface.api.routes.communities import create_community, get_community
from hubcorner.interface.api.routes.health import health_check
from hubcorner.interface.api.routes.posts import create_post, get_post, list_posts
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no database needed
unit_env = create_env_fixture()


def _request(cookie: str | None = None) -> Request:
    headers = [(b"cookie", cookie.encode())] if cookie is not None else []
    return Request({"type": "http", "method": "GET", "path": "/", "headers": headers})


class TestCommunityRoutes:
    """Tests for /communities routes."""

    @pytest.mark.asyncio
    async def test_duplicate_name_returns_409(self, unit_env):
        use_case = await unit_env.get(CreateCommunityUseCase)
        await create_community(CreateCommunityRequest(name="golang"), use_case)

        with pytest.raises(HTTPException) as exc_info:
            await create_community(CreateCommunityRequest(name="golang"), use_case)

        assert exc_info.value.status_code == 409

    @pytest.mark.asyncio
    async def test_malformed_name_returns_400(self, unit_env):
        use_case = await unit_env.get(CreateCommunityUseCase)

        with pytest.raises(HTTPException) as exc_info:
            await create_community(CreateCommunityRequest(name="no spaces"), use_case)

        assert exc_info.value.status_code == 400

    @pytest.mark.asyncio
    async def test_missing_community_returns_404(self, unit_env):
        use_case = await unit_env.get(GetCommunityUseCase)

        with pytest.raises(HTTPException) as exc_info:
            await get_community("ghost", _request(), use_case, Settings())

        assert exc_info.value.status_code == 404


class TestPostRoutes:
    """Tests for /posts routes."""

    @pytest.mark.asyncio
    async def test_create_list_and_get_with_my_vote(self, unit_env):
        # Arrange
        create_community_use_case = await unit_env.get(CreateCommunityUseCase)
        create_post_use_case = await unit_env.get(CreatePostUseCase)
        ledger = await unit_env.get(VoteLedger)
        community = await create_community(
            CreateCommunityRequest(name="golang"), create_community_use_case
        )
        post = await create_post(
            CreatePostRequest(community_id=community.community_id, title="Hello"),
            create_post_use_case,
        )
        await ledger.apply_vote(VotableType.POST, post.post_id, "client-a", 1)

        # Act
        listing = await list_posts(
            _request("client_id=client-a"),
            await unit_env.get(ListPostsUseCase),
            Settings(),
            community_id=community.community_id,
        )
        single = await get_post(
            post.post_id, _request(), await unit_env.get(GetPostUseCase), Settings()
        )

        # Assert
        assert [p.my_vote for p in listing.posts] == [1]
        assert single.my_vote is None
        assert single.score == 1

    @pytest.mark.asyncio
    async def test_create_in_missing_community_returns_404(self, unit_env):
        use_case = await unit_env.get(CreatePostUseCase)

        with pytest.raises(HTTPException) as exc_info:
            await create_post(CreatePostRequest(community_id=3, title="Lost"), use_case)

        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_get_missing_post_returns_404(self, unit_env):
        use_case = await unit_env.get(GetPostUseCase)

        with pytest.raises(HTTPException) as exc_info:
            await get_post(5, _request(), use_case, Settings())

        assert exc_info.value.status_code == 404


class TestHealthRoute:
    """Tests for /health."""

    @pytest.mark.asyncio
    async def test_reports_healthy(self):
        result = await health_check(Settings())

        assert result.status == "healthy"
