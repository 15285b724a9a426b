"""Unit tests for the in-memory vote store."""

import asyncio

import pytest

from hubcorner.domain.error import StoreError
from hubcorner.domain.model import Post, Vote
from hubcorner.domain.value import ClientId, CommunityId, PostId, VotableType, VoteValue
from hubcorner.persistence.repository.inmemory import InMemoryState, InMemoryVoteStore


def _vote(value: VoteValue = VoteValue.UP, client: str = "client-a") -> Vote:
    return Vote(
        votable_type=VotableType.POST,
        votable_id=1,
        client_id=ClientId(client),
        value=value,
    )


def _state_with_post(upvotes: int = 0, downvotes: int = 0) -> InMemoryState:
    state = InMemoryState()
    state.posts[PostId(1)] = Post(
        id=PostId(1),
        community_id=CommunityId(1),
        title="Post",
        upvotes=upvotes,
        downvotes=downvotes,
    )
    return state


class TestInMemoryVoteTransaction:
    """Tests for staged writes and commit."""

    @pytest.mark.asyncio
    async def test_writes_are_invisible_until_commit(self):
        state = _state_with_post()
        store = InMemoryVoteStore(state)

        async with store.transaction() as tx:
            await tx.insert_vote(_vote())
            await tx.adjust_counts(VotableType.POST, 1, 1, 0)
            assert state.votes == {}
            assert state.posts[1].upvotes == 0
            assert (await tx.get_counts(VotableType.POST, 1)).upvotes == 1

        (stored,) = state.votes.values()
        assert stored.id is not None
        assert state.posts[1].upvotes == 1

    @pytest.mark.asyncio
    async def test_error_in_block_discards_writes(self):
        state = _state_with_post()
        store = InMemoryVoteStore(state)

        with pytest.raises(RuntimeError):
            async with store.transaction() as tx:
                await tx.insert_vote(_vote())
                await tx.adjust_counts(VotableType.POST, 1, 1, 0)
                raise RuntimeError("boom")

        assert state.votes == {}
        assert state.posts[1].upvotes == 0
        assert not any(lock.locked() for lock in state.vote_locks.values())
        assert not any(lock.locked() for lock in state.item_locks.values())

    @pytest.mark.asyncio
    async def test_negative_counter_raises_store_error(self):
        store = InMemoryVoteStore(_state_with_post())

        with pytest.raises(StoreError, match="constraint"):
            async with store.transaction() as tx:
                await tx.adjust_counts(VotableType.POST, 1, -1, 0)

    @pytest.mark.asyncio
    async def test_adjust_counts_on_missing_item_returns_none(self):
        store = InMemoryVoteStore(InMemoryState())

        async with store.transaction() as tx:
            assert await tx.adjust_counts(VotableType.COMMENT, 3, 1, 0) is None
            assert await tx.get_counts(VotableType.COMMENT, 3) is None

    @pytest.mark.asyncio
    async def test_update_and_delete_vote(self):
        state = _state_with_post(upvotes=1)
        store = InMemoryVoteStore(state)
        async with store.transaction() as tx:
            await tx.insert_vote(_vote())

        async with store.transaction() as tx:
            await tx.update_vote(
                VotableType.POST, 1, ClientId("client-a"), VoteValue.DOWN
            )
        (flipped,) = state.votes.values()
        assert flipped.value == VoteValue.DOWN

        async with store.transaction() as tx:
            assert await tx.delete_vote(VotableType.POST, 1, ClientId("client-a"))
            assert not await tx.delete_vote(VotableType.POST, 1, ClientId("client-a"))
        assert state.votes == {}


class TestInMemoryVoteLocking:
    """Tests for row locks between concurrent transactions."""

    @pytest.mark.asyncio
    async def test_concurrent_insert_waits_and_reports_existing_row(self):
        state = _state_with_post()
        store = InMemoryVoteStore(state)
        events = []

        async def first():
            async with store.transaction() as tx:
                events.append(("first", await tx.insert_vote(_vote())))
                for _ in range(5):
                    await asyncio.sleep(0)
                events.append(("first", "commit"))

        async def second():
            await asyncio.sleep(0)
            async with store.transaction() as tx:
                events.append(("second", await tx.insert_vote(_vote())))

        await asyncio.gather(first(), second())

        assert events == [("first", True), ("first", "commit"), ("second", False)]
        assert len(state.votes) == 1

    @pytest.mark.asyncio
    async def test_different_clients_do_not_block_each_other(self):
        state = _state_with_post()
        store = InMemoryVoteStore(state)

        async with store.transaction() as tx_a:
            async with store.transaction() as tx_b:
                assert await tx_b.insert_vote(_vote(client="client-b"))
            assert await tx_a.insert_vote(_vote(client="client-a"))

        assert len(state.votes) == 2


class TestFindClientVotes:
    """Tests for find_client_votes."""

    @pytest.mark.asyncio
    async def test_filters_by_client_kind_and_ids(self):
        state = _state_with_post()
        store = InMemoryVoteStore(state)
        async with store.transaction() as tx:
            await tx.insert_vote(_vote(client="client-a"))
            await tx.insert_vote(_vote(client="client-b", value=VoteValue.DOWN))

        votes = await store.find_client_votes(
            ClientId("client-b"), VotableType.POST, [1, 2]
        )
        comment_votes = await store.find_client_votes(
            ClientId("client-b"), VotableType.COMMENT, [1]
        )

        assert [v.value for v in votes] == [VoteValue.DOWN]
        assert comment_votes == []
