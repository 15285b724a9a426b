"""In-memory vote store for testing.

Mirrors the locking behaviour of the PostgreSQL store closely enough to
exercise concurrent votes: every store call yields to the event loop, an
existing ledger row is locked when read, an insert locks its key, and a
counter update locks the item. Locks are held until the transaction ends.
Writes are staged and applied together on commit.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional, Sequence

from pydantic import ValidationError

from hubcorner.domain.error import StoreError
from hubcorner.domain.model import Vote
from hubcorner.domain.repository import VoteStore, VoteTransaction
from hubcorner.domain.value import ClientId, VotableType, VoteCounts, VoteId, VoteValue

from .state import InMemoryState, ItemKey, VoteKey


class InMemoryVoteTransaction(VoteTransaction):
    """Staged writes and held locks of one in-memory transaction."""

    def __init__(self, state: InMemoryState) -> None:
        self.state = state
        self.staged_votes: dict[VoteKey, Optional[Vote]] = {}
        self.staged_counts: dict[ItemKey, VoteCounts] = {}
        self._held: list[asyncio.Lock] = []

    async def _lock(self, lock: asyncio.Lock) -> None:
        if lock in self._held:
            return
        await lock.acquire()
        self._held.append(lock)

    def release(self) -> None:
        """Release every lock held by this transaction."""
        while self._held:
            self._held.pop().release()

    def _current_vote(self, key: VoteKey) -> Optional[Vote]:
        if key in self.staged_votes:
            return self.staged_votes[key]
        return self.state.votes.get(key)

    def _current_counts(self, key: ItemKey) -> Optional[VoteCounts]:
        if key in self.staged_counts:
            return self.staged_counts[key]
        item = self.state.items(key[0]).get(key[1])
        return item.counts if item else None

    async def get_counts(
        self, votable_type: VotableType, votable_id: int
    ) -> Optional[VoteCounts]:
        await asyncio.sleep(0)
        return self._current_counts((votable_type, votable_id))

    async def find_vote(
        self, votable_type: VotableType, votable_id: int, client_id: ClientId
    ) -> Optional[Vote]:
        await asyncio.sleep(0)
        key = (votable_type, votable_id, client_id.root)
        if key not in self.staged_votes and key in self.state.votes:
            await self._lock(self.state.vote_lock(key))
        return self._current_vote(key)

    async def insert_vote(self, vote: Vote) -> bool:
        await asyncio.sleep(0)
        key = (vote.votable_type, vote.votable_id, vote.client_id.root)
        await self._lock(self.state.vote_lock(key))
        if self._current_vote(key) is not None:
            return False
        self.staged_votes[key] = vote
        return True

    async def update_vote(
        self,
        votable_type: VotableType,
        votable_id: int,
        client_id: ClientId,
        value: VoteValue,
    ) -> None:
        await asyncio.sleep(0)
        key = (votable_type, votable_id, client_id.root)
        await self._lock(self.state.vote_lock(key))
        existing = self._current_vote(key)
        if existing is not None:
            self.staged_votes[key] = existing.model_copy(update={"value": value})

    async def delete_vote(
        self, votable_type: VotableType, votable_id: int, client_id: ClientId
    ) -> bool:
        await asyncio.sleep(0)
        key = (votable_type, votable_id, client_id.root)
        await self._lock(self.state.vote_lock(key))
        if self._current_vote(key) is None:
            return False
        self.staged_votes[key] = None
        return True

    async def adjust_counts(
        self,
        votable_type: VotableType,
        votable_id: int,
        upvotes_delta: int,
        downvotes_delta: int,
    ) -> Optional[VoteCounts]:
        await asyncio.sleep(0)
        key = (votable_type, votable_id)
        await self._lock(self.state.item_lock(key))
        current = self._current_counts(key)
        if current is None:
            return None
        try:
            counts = VoteCounts(
                upvotes=current.upvotes + upvotes_delta,
                downvotes=current.downvotes + downvotes_delta,
            )
        except ValidationError as e:
            # Same outcome as the CHECK constraints on the real tables
            raise StoreError(f"Counter constraint violated: {e}")
        self.staged_counts[key] = counts
        return counts

    def apply(self) -> None:
        """Write staged changes into the shared state."""
        for key, vote in self.staged_votes.items():
            if vote is None:
                self.state.votes.pop(key, None)
            elif vote.id is None:
                self.state.votes[key] = vote.model_copy(
                    update={"id": VoteId(self.state.next_id("votes"))}
                )
            else:
                self.state.votes[key] = vote

        for (votable_type, votable_id), counts in self.staged_counts.items():
            table = self.state.items(votable_type)
            item = table.get(votable_id)
            if item is not None:
                table[votable_id] = item.model_copy(
                    update={"upvotes": counts.upvotes, "downvotes": counts.downvotes}
                )


class InMemoryVoteStore(VoteStore):
    """In-memory implementation of VoteStore for testing."""

    def __init__(self, state: InMemoryState) -> None:
        self.state = state

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[VoteTransaction]:
        """Stage writes in a transaction and apply them on normal exit."""
        tx = InMemoryVoteTransaction(self.state)
        try:
            yield tx
            await self.commit(tx)
        finally:
            tx.release()

    async def commit(self, tx: InMemoryVoteTransaction) -> None:
        """Apply a transaction's staged writes."""
        await asyncio.sleep(0)
        tx.apply()

    async def find_client_votes(
        self,
        client_id: ClientId,
        votable_type: VotableType,
        votable_ids: Sequence[int],
    ) -> list[Vote]:
        """Find a client's votes on multiple items (batch query)."""
        if not votable_ids:
            return []

        wanted = set(votable_ids)
        return [
            vote
            for (kind, votable_id, client), vote in self.state.votes.items()
            if kind == votable_type and client == client_id.root and votable_id in wanted
        ]
