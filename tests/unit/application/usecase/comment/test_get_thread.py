"""Unit tests for GetThreadUseCase."""

import pytest

from hubcorner.application.usecase.comment import GetThreadRequest, GetThreadUseCase
from hubcorner.domain.error import NotFoundError
from hubcorner.domain.service import (
    CommentService,
    CommunityService,
    PostService,
    ThreadAssembler,
    VoteLedger,
)
from hubcorner.domain.value import ThreadOrder, VotableType
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def _seed_thread(env):
    """Post with comments a, b (reply to a), c (reply to b) and d."""
    community_service = await env.get(CommunityService)
    post_service = await env.get(PostService)
    comment_service = await env.get(CommentService)
    community = await community_service.create_community("golang")
    post = await post_service.create_post(community.id, "Thread")
    a = await comment_service.create_comment(post.id, "a")
    b = await comment_service.create_comment(post.id, "b", a.id)
    c = await comment_service.create_comment(post.id, "c", b.id)
    d = await comment_service.create_comment(post.id, "d")
    return post, a, b, c, d


class TestGetThreadUseCase:
    """Tests for GetThreadUseCase."""

    @pytest.mark.asyncio
    async def test_returns_nested_thread(self, unit_env):
        # Arrange
        use_case = await unit_env.get(GetThreadUseCase)
        post, a, b, c, d = await _seed_thread(unit_env)

        # Act
        response = await use_case.execute(GetThreadRequest(post_id=post.id))

        # Assert
        assert response.total == 4
        assert [item.comment_id for item in response.comments] == [a.id, d.id]
        (reply,) = response.comments[0].replies
        assert reply.comment_id == b.id
        assert reply.depth == 1
        assert reply.replies[0].comment_id == c.id
        assert reply.replies[0].depth == 2

    @pytest.mark.asyncio
    async def test_top_sort_puts_highest_score_first(self, unit_env):
        use_case = await unit_env.get(GetThreadUseCase)
        ledger = await unit_env.get(VoteLedger)
        post, a, _, _, d = await _seed_thread(unit_env)
        await ledger.apply_vote(VotableType.COMMENT, d.id, "client-a", 1)

        response = await use_case.execute(
            GetThreadRequest(post_id=post.id, sort=ThreadOrder.TOP)
        )

        assert [item.comment_id for item in response.comments] == [d.id, a.id]
        assert response.comments[0].score == 1

    @pytest.mark.asyncio
    async def test_new_sort_puts_latest_root_first(self, unit_env):
        use_case = await unit_env.get(GetThreadUseCase)
        post, a, _, _, d = await _seed_thread(unit_env)

        response = await use_case.execute(
            GetThreadRequest(post_id=post.id, sort=ThreadOrder.NEW)
        )

        assert response.sort == ThreadOrder.NEW
        assert [item.comment_id for item in response.comments] == [d.id, a.id]

    @pytest.mark.asyncio
    async def test_includes_clients_own_votes(self, unit_env):
        use_case = await unit_env.get(GetThreadUseCase)
        ledger = await unit_env.get(VoteLedger)
        post, a, b, _, d = await _seed_thread(unit_env)
        await ledger.apply_vote(VotableType.COMMENT, b.id, "client-a", -1)
        await ledger.apply_vote(VotableType.COMMENT, d.id, "client-b", 1)

        response = await use_case.execute(
            GetThreadRequest(post_id=post.id, client_id="client-a")
        )

        by_id = {}
        stack = list(response.comments)
        while stack:
            item = stack.pop()
            by_id[item.comment_id] = item
            stack.extend(item.replies)
        assert by_id[b.id].my_vote == -1
        assert by_id[a.id].my_vote is None
        assert by_id[d.id].my_vote is None

    @pytest.mark.asyncio
    async def test_empty_thread(self, unit_env):
        community_service = await unit_env.get(CommunityService)
        post_service = await unit_env.get(PostService)
        use_case = await unit_env.get(GetThreadUseCase)
        community = await community_service.create_community("golang")
        post = await post_service.create_post(community.id, "Quiet")

        response = await use_case.execute(
            GetThreadRequest(post_id=post.id, client_id="client-a")
        )

        assert response.comments == []
        assert response.total == 0

    @pytest.mark.asyncio
    async def test_missing_post_raises_not_found(self, unit_env):
        use_case = await unit_env.get(GetThreadUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(GetThreadRequest(post_id=31337))


def _nesting(items) -> int:
    """Deepest level of ``replies`` nesting, computed without recursion."""
    deepest = 0
    stack = [(item, 1) for item in items]
    while stack:
        item, level = stack.pop()
        deepest = max(deepest, level)
        stack.extend((reply, level + 1) for reply in item.replies)
    return deepest


async def _seed_chain(env, length: int):
    """Post with a single reply chain: every comment answers the previous one."""
    community_service = await env.get(CommunityService)
    post_service = await env.get(PostService)
    comment_service = await env.get(CommentService)
    community = await community_service.create_community("golang")
    post = await post_service.create_post(community.id, "Long argument")
    parent_id = None
    for i in range(length):
        comment = await comment_service.create_comment(post.id, f"reply {i}", parent_id)
        parent_id = comment.id
    return post


class TestGetThreadDeepChains:
    """Tests for reply chains deeper than the rendered nesting."""

    @pytest.mark.asyncio
    async def test_very_deep_chain_serializes(self, unit_env):
        """A 1200-comment reply chain renders and serializes to JSON."""
        # Arrange
        use_case = await unit_env.get(GetThreadUseCase)
        post = await _seed_chain(unit_env, 1200)

        # Act
        response = await use_case.execute(GetThreadRequest(post_id=post.id))
        payload = response.model_dump_json()

        # Assert
        assert response.total == 1200
        assert _nesting(response.comments) == use_case.max_render_depth + 1
        assert payload.count('"comment_id"') == 1200

    @pytest.mark.asyncio
    async def test_replies_below_cap_follow_deepest_rendered_ancestor(
        self, unit_env
    ):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        post_service = await unit_env.get(PostService)
        use_case = GetThreadUseCase(
            comment_service=comment_service,
            post_service=post_service,
            vote_ledger=await unit_env.get(VoteLedger),
            thread_assembler=await unit_env.get(ThreadAssembler),
            max_render_depth=1,
        )
        post = await _seed_chain(unit_env, 4)

        # Act
        response = await use_case.execute(GetThreadRequest(post_id=post.id))

        # Assert
        (root,) = response.comments
        assert [item.depth for item in root.replies] == [1, 2, 3]
        assert [item.parent_id for item in root.replies] == [
            root.comment_id,
            root.replies[0].comment_id,
            root.replies[1].comment_id,
        ]
        assert all(item.replies == [] for item in root.replies)

    @pytest.mark.asyncio
    async def test_zero_cap_returns_flat_thread_order(self, unit_env):
        use_case = GetThreadUseCase(
            comment_service=await unit_env.get(CommentService),
            post_service=await unit_env.get(PostService),
            vote_ledger=await unit_env.get(VoteLedger),
            thread_assembler=await unit_env.get(ThreadAssembler),
            max_render_depth=0,
        )
        post, a, b, c, d = await _seed_thread(unit_env)

        response = await use_case.execute(GetThreadRequest(post_id=post.id))

        assert [item.comment_id for item in response.comments] == [
            a.id,
            b.id,
            c.id,
            d.id,
        ]
        assert [item.depth for item in response.comments] == [0, 1, 2, 0]
