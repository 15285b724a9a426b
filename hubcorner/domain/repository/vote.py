"""Vote store interface.

The vote ledger needs several reads and writes to happen as one unit,
so the store hands out transactions rather than single operations.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from typing import List, Optional, Sequence

from hubcorner.domain.model.vote import Vote
from hubcorner.domain.value import ClientId, VotableType, VoteCounts, VoteValue


class VoteTransaction(ABC):
    """Operations available inside one store transaction.

    Everything done through a transaction is committed together when the
    transaction scope exits normally and discarded on any other exit.
    """

    @abstractmethod
    async def get_counts(
        self, votable_type: VotableType, votable_id: int
    ) -> Optional[VoteCounts]:
        """Read the counters of a post or comment.

        Args:
            votable_type: Type of item (post or comment)
            votable_id: ID of the item

        Returns:
            Current counters, None if the item does not exist
        """
        pass

    @abstractmethod
    async def find_vote(
        self, votable_type: VotableType, votable_id: int, client_id: ClientId
    ) -> Optional[Vote]:
        """Find a client's vote and lock it until the transaction ends.

        Args:
            votable_type: Type of item (post or comment)
            votable_id: ID of the item
            client_id: Voting client

        Returns:
            The vote if one exists, None otherwise
        """
        pass

    @abstractmethod
    async def insert_vote(self, vote: Vote) -> bool:
        """Insert a vote unless one already exists for its key.

        A concurrent transaction may have created the same key since
        ``find_vote`` returned None. In that case nothing is inserted and
        the caller should re-read the key.

        Args:
            vote: The vote to insert

        Returns:
            True if inserted, False if the key already existed
        """
        pass

    @abstractmethod
    async def update_vote(
        self,
        votable_type: VotableType,
        votable_id: int,
        client_id: ClientId,
        value: VoteValue,
    ) -> None:
        """Change the value of an existing vote.

        Args:
            votable_type: Type of item (post or comment)
            votable_id: ID of the item
            client_id: Voting client
            value: New vote value
        """
        pass

    @abstractmethod
    async def delete_vote(
        self, votable_type: VotableType, votable_id: int, client_id: ClientId
    ) -> bool:
        """Physically delete a vote.

        Args:
            votable_type: Type of item (post or comment)
            votable_id: ID of the item
            client_id: Voting client

        Returns:
            True if a vote was deleted
        """
        pass

    @abstractmethod
    async def adjust_counts(
        self,
        votable_type: VotableType,
        votable_id: int,
        upvotes_delta: int,
        downvotes_delta: int,
    ) -> Optional[VoteCounts]:
        """Atomically add deltas to an item's counters.

        Args:
            votable_type: Type of item (post or comment)
            votable_id: ID of the item
            upvotes_delta: Amount added to upvotes
            downvotes_delta: Amount added to downvotes

        Returns:
            Counters after the update, None if the item does not exist
        """
        pass


class VoteStore(ABC):
    """Store for the vote ledger and the item counters it drives."""

    @abstractmethod
    def transaction(self) -> AbstractAsyncContextManager[VoteTransaction]:
        """Open a transaction scope.

        Usage:
            async with store.transaction() as tx:
                ...

        Raises (on entering, inside, or on commit):
            TransactionConflictError: The store aborted the transaction
                (serialization failure, deadlock); it may be re-run
            StoreError: Any other store failure
        """
        pass

    @abstractmethod
    async def find_client_votes(
        self,
        client_id: ClientId,
        votable_type: VotableType,
        votable_ids: Sequence[int],
    ) -> List[Vote]:
        """Find a client's votes on several items (batch query).

        Args:
            client_id: Voting client
            votable_type: Type of items (post or comment)
            votable_ids: IDs of the items to check

        Returns:
            The client's votes on those items
        """
        pass
