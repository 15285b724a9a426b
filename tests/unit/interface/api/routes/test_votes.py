"""Unit tests for vote routes."""

import pytest
from fastapi import HTTPException, Request, Response
from pydantic import ValidationError

from hubcorner.application.usecase.vote import CastVoteUseCase
from hubcorner.config import Settings
from hubcorner.domain.error import StoreError
from hubcorner.domain.service import (
    CommentService,
    CommunityService,
    PostService,
    VoteLedger,
)
from hubcorner.domain.value import ClientId, VotableType, VoteValue
from hubcorner.interface.api.routes.votes import VoteAPIRequest, vote_comment, vote_post
from hubcorner.persistence.repository.inmemory import InMemoryState, InMemoryVoteStore
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no database needed
unit_env = create_env_fixture()


def _request(cookie: str | None = None) -> Request:
    headers = [(b"cookie", cookie.encode())] if cookie is not None else []
    return Request({"type": "http", "method": "POST", "path": "/", "headers": headers})


async def _seed_post(env):
    community_service = await env.get(CommunityService)
    post_service = await env.get(PostService)
    community = await community_service.create_community("golang")
    return await post_service.create_post(community.id, "Vote here")


class UnavailableVoteStore(InMemoryVoteStore):
    """Vote store whose commits always fail."""

    async def commit(self, tx):
        raise StoreError("connection reset")


class TestVotePost:
    """Tests for POST /posts/{post_id}/vote."""

    @pytest.mark.asyncio
    async def test_returns_counts_and_issues_cookie(self, unit_env):
        # Arrange
        use_case = await unit_env.get(CastVoteUseCase)
        post = await _seed_post(unit_env)
        response = Response()

        # Act
        result = await vote_post(
            post.id, VoteAPIRequest(value=1), _request(), response, use_case, Settings()
        )

        # Assert
        assert result.model_dump() == {"upvotes": 1, "downvotes": 0, "score": 1}
        assert response.headers["set-cookie"].startswith("client_id=")

    @pytest.mark.asyncio
    async def test_existing_cookie_identifies_voter(self, unit_env):
        use_case = await unit_env.get(CastVoteUseCase)
        ledger = await unit_env.get(VoteLedger)
        post = await _seed_post(unit_env)
        response = Response()

        await vote_post(
            post.id,
            VoteAPIRequest(value=-1),
            _request("client_id=known-client"),
            response,
            use_case,
            Settings(),
        )

        assert "set-cookie" not in response.headers
        votes = await ledger.get_client_votes(
            ClientId("known-client"), VotableType.POST, [post.id]
        )
        assert votes == {post.id: VoteValue.DOWN}

    @pytest.mark.asyncio
    async def test_repeat_vote_from_same_cookie_toggles_off(self, unit_env):
        use_case = await unit_env.get(CastVoteUseCase)
        post = await _seed_post(unit_env)

        for _ in range(2):
            result = await vote_post(
                post.id,
                VoteAPIRequest(value=1),
                _request("client_id=known-client"),
                Response(),
                use_case,
                Settings(),
            )

        assert (result.upvotes, result.downvotes, result.score) == (0, 0, 0)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", [0, 2, -5])
    async def test_bad_value_returns_400(self, unit_env, value):
        use_case = await unit_env.get(CastVoteUseCase)
        post = await _seed_post(unit_env)

        with pytest.raises(HTTPException) as exc_info:
            await vote_post(
                post.id,
                VoteAPIRequest(value=value),
                _request(),
                Response(),
                use_case,
                Settings(),
            )

        assert exc_info.value.status_code == 400

    @pytest.mark.asyncio
    async def test_missing_post_returns_404(self, unit_env):
        use_case = await unit_env.get(CastVoteUseCase)

        with pytest.raises(HTTPException) as exc_info:
            await vote_post(
                404, VoteAPIRequest(value=1), _request(), Response(), use_case, Settings()
            )

        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_store_failure_returns_503(self, unit_env):
        state = await unit_env.get(InMemoryState)
        post = await _seed_post(unit_env)
        use_case = CastVoteUseCase(VoteLedger(UnavailableVoteStore(state)))

        with pytest.raises(HTTPException) as exc_info:
            await vote_post(
                post.id, VoteAPIRequest(value=1), _request(), Response(), use_case, Settings()
            )

        assert exc_info.value.status_code == 503
        assert state.votes == {}


class TestVoteComment:
    """Tests for POST /comments/{comment_id}/vote."""

    @pytest.mark.asyncio
    async def test_votes_on_comment(self, unit_env):
        use_case = await unit_env.get(CastVoteUseCase)
        comment_service = await unit_env.get(CommentService)
        post = await _seed_post(unit_env)
        comment = await comment_service.create_comment(post.id, "Agreed")

        result = await vote_comment(
            comment.id,
            VoteAPIRequest(value=-1),
            _request(),
            Response(),
            use_case,
            Settings(),
        )

        assert result.model_dump() == {"upvotes": 0, "downvotes": 1, "score": -1}

    @pytest.mark.asyncio
    async def test_missing_comment_returns_404(self, unit_env):
        use_case = await unit_env.get(CastVoteUseCase)

        with pytest.raises(HTTPException) as exc_info:
            await vote_comment(
                9, VoteAPIRequest(value=1), _request(), Response(), use_case, Settings()
            )

        assert exc_info.value.status_code == 404


class TestVoteAPIRequest:
    """Tests for the vote request body."""

    def test_accepts_integer_values(self):
        assert VoteAPIRequest.model_validate_json('{"value": -1}').value == -1

    @pytest.mark.parametrize("body", ['{"value": true}', '{"value": "1"}', '{"value": 1.0}'])
    def test_rejects_non_integer_values(self, body):
        with pytest.raises(ValidationError):
            VoteAPIRequest.model_validate_json(body)
