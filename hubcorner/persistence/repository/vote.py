"""PostgreSQL implementation of the vote store.

Each transaction runs on its own session so that a retried vote starts
from a clean connection state. Isolation is READ COMMITTED with explicit
row locks:

- an existing ledger row is locked with ``SELECT ... FOR UPDATE``;
- a missing row is created with ``INSERT ... ON CONFLICT DO NOTHING``,
  which waits for a concurrent insert of the same key and reports it;
- counters change in a single ``UPDATE ... RETURNING``.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional, Sequence

import logfire
from sqlalchemy import Table, and_, delete, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from hubcorner.domain.error import StoreError, TransactionConflictError
from hubcorner.domain.model import Vote
from hubcorner.domain.repository import VoteStore, VoteTransaction
from hubcorner.domain.value import ClientId, VotableType, VoteCounts, VoteValue
from hubcorner.persistence.mappers import row_to_counts, row_to_vote, vote_to_dict
from hubcorner.persistence.tables import comments_table, posts_table, votes_table

# serialization_failure, deadlock_detected
RETRYABLE_SQLSTATES = frozenset({"40001", "40P01"})


def _sqlstate(error: DBAPIError) -> Optional[str]:
    orig = error.orig
    return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)


def _translate(error: Exception) -> StoreError:
    if isinstance(error, DBAPIError) and _sqlstate(error) in RETRYABLE_SQLSTATES:
        return TransactionConflictError(str(error))
    return StoreError(str(error))


def _item_table(votable_type: VotableType) -> Table:
    return posts_table if votable_type == VotableType.POST else comments_table


def _vote_key(votable_type: VotableType, votable_id: int, client_id: ClientId):
    return and_(
        votes_table.c.votable_type == votable_type.value,
        votes_table.c.votable_id == votable_id,
        votes_table.c.client_id == client_id.root,
    )


class PostgresVoteTransaction(VoteTransaction):
    """Vote transaction bound to one session."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize transaction with an open session.

        Args:
            session: SQLAlchemy async session inside ``begin()``
        """
        self.session = session

    async def get_counts(
        self, votable_type: VotableType, votable_id: int
    ) -> Optional[VoteCounts]:
        """Read an item's counters."""
        table = _item_table(votable_type)
        stmt = select(table.c.upvotes, table.c.downvotes).where(
            table.c.id == votable_id
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_counts(row._asdict()) if row else None

    async def find_vote(
        self, votable_type: VotableType, votable_id: int, client_id: ClientId
    ) -> Optional[Vote]:
        """Find and lock a client's vote."""
        stmt = (
            select(votes_table)
            .where(_vote_key(votable_type, votable_id, client_id))
            .with_for_update()
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_vote(row._asdict()) if row else None

    async def insert_vote(self, vote: Vote) -> bool:
        """Insert a vote unless its key exists."""
        stmt = (
            pg_insert(votes_table)
            .values(**vote_to_dict(vote))
            .on_conflict_do_nothing(constraint="unique_vote")
            .returning(votes_table.c.id)
        )
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def update_vote(
        self,
        votable_type: VotableType,
        votable_id: int,
        client_id: ClientId,
        value: VoteValue,
    ) -> None:
        """Change a vote's value."""
        stmt = (
            update(votes_table)
            .where(_vote_key(votable_type, votable_id, client_id))
            .values(value=int(value))
        )
        await self.session.execute(stmt)

    async def delete_vote(
        self, votable_type: VotableType, votable_id: int, client_id: ClientId
    ) -> bool:
        """Delete a vote."""
        stmt = delete(votes_table).where(
            _vote_key(votable_type, votable_id, client_id)
        )
        result = await self.session.execute(stmt)
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def adjust_counts(
        self,
        votable_type: VotableType,
        votable_id: int,
        upvotes_delta: int,
        downvotes_delta: int,
    ) -> Optional[VoteCounts]:
        """Add deltas to an item's counters in one statement."""
        table = _item_table(votable_type)
        stmt = (
            update(table)
            .where(table.c.id == votable_id)
            .values(
                upvotes=table.c.upvotes + upvotes_delta,
                downvotes=table.c.downvotes + downvotes_delta,
            )
            .returning(table.c.upvotes, table.c.downvotes)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_counts(row._asdict()) if row else None


class PostgresVoteStore(VoteStore):
    """PostgreSQL implementation of VoteStore."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """Initialize store with a session factory.

        Args:
            session_factory: Factory for the per-transaction sessions
        """
        self.session_factory = session_factory

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[VoteTransaction]:
        """Run a block in one database transaction.

        Commits when the block exits normally, rolls back otherwise.
        Database errors are raised as ``StoreError`` (or
        ``TransactionConflictError`` when the database aborted the
        transaction as a serialization failure or deadlock victim).
        """
        try:
            async with self.session_factory() as session, session.begin():
                yield PostgresVoteTransaction(session)
        except (SQLAlchemyError, OSError) as e:
            error = _translate(e)
            logfire.warn(
                "Vote transaction rolled back",
                retryable=isinstance(error, TransactionConflictError),
                error=str(e),
            )
            raise error from e

    async def find_client_votes(
        self,
        client_id: ClientId,
        votable_type: VotableType,
        votable_ids: Sequence[int],
    ) -> List[Vote]:
        """Find a client's votes on multiple items (batch query)."""
        if not votable_ids:
            return []

        stmt = select(votes_table).where(
            and_(
                votes_table.c.client_id == client_id.root,
                votes_table.c.votable_type == votable_type.value,
                votes_table.c.votable_id.in_(votable_ids),
            )
        )
        try:
            async with self.session_factory() as session:
                result = await session.execute(stmt)
                rows = result.fetchall()
        except (SQLAlchemyError, OSError) as e:
            raise _translate(e) from e
        return [row_to_vote(row._asdict()) for row in rows]
