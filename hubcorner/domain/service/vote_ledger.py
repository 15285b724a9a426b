"""Vote ledger domain service.

Keeps the per-client vote ledger and the denormalized counters on posts and
comments in lockstep. Each vote is one store transaction; serialization
conflicts are re-run a bounded number of times.
"""

from typing import Sequence

import logfire

from hubcorner.domain.error import (
    InvalidArgumentError,
    NotFoundError,
    StoreError,
    TransactionConflictError,
    VoteFailedError,
)
from hubcorner.domain.model.vote import Vote, VoteAction, plan_vote_transition
from hubcorner.domain.repository import VoteStore
from hubcorner.domain.value import ClientId, VotableType, VoteCounts, VoteValue

from .base import Service


class VoteLedger(Service):
    """Domain service applying votes to the ledger and item counters."""

    def __init__(self, vote_store: VoteStore, max_attempts: int = 3) -> None:
        """Initialize vote ledger.

        Args:
            vote_store: Transactional vote store
            max_attempts: Attempts per vote when the store reports a
                serialization conflict
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.vote_store = vote_store
        self.max_attempts = max_attempts

    async def apply_vote(
        self,
        votable_type: VotableType | str,
        votable_id: int,
        client_id: ClientId | str,
        value: VoteValue | int,
    ) -> VoteCounts:
        """Apply a client's vote to a post or comment.

        - No vote yet: record it and bump the matching counter.
        - Same vote again: remove it (toggle off) and decrement the counter.
        - Opposite vote: switch direction, moving one count between counters.

        Args:
            votable_type: Item kind (post or comment)
            votable_id: Item ID
            client_id: Opaque client identifier
            value: +1 (upvote) or -1 (downvote)

        Returns:
            The item's counters after the vote

        Raises:
            InvalidArgumentError: Bad item kind, client id or vote value
            NotFoundError: The item does not exist
            VoteFailedError: The store failed; nothing was written
        """
        kind, client, requested = self._validate(
            votable_type, votable_id, client_id, value
        )

        with logfire.span(
            "vote_ledger.apply_vote",
            votable_type=kind.value,
            votable_id=votable_id,
            value=int(requested),
        ):
            last_conflict: TransactionConflictError | None = None
            for attempt in range(1, self.max_attempts + 1):
                try:
                    counts = await self._apply_once(
                        kind, votable_id, client, requested
                    )
                except TransactionConflictError as e:
                    last_conflict = e
                    logfire.warn(
                        "Vote transaction conflict",
                        votable_type=kind.value,
                        votable_id=votable_id,
                        attempt=attempt,
                        max_attempts=self.max_attempts,
                        error=str(e),
                    )
                    continue
                except StoreError as e:
                    logfire.error(
                        "Vote store failure",
                        votable_type=kind.value,
                        votable_id=votable_id,
                        error=str(e),
                    )
                    raise VoteFailedError() from e

                logfire.info(
                    "Vote applied",
                    votable_type=kind.value,
                    votable_id=votable_id,
                    upvotes=counts.upvotes,
                    downvotes=counts.downvotes,
                    attempts=attempt,
                )
                return counts

            logfire.error(
                "Vote retries exhausted",
                votable_type=kind.value,
                votable_id=votable_id,
                attempts=self.max_attempts,
            )
            raise VoteFailedError() from last_conflict

    async def _apply_once(
        self,
        kind: VotableType,
        votable_id: int,
        client: ClientId,
        requested: VoteValue,
    ) -> VoteCounts:
        async with self.vote_store.transaction() as tx:
            current = await tx.get_counts(kind, votable_id)
            if current is None:
                logfire.warn(
                    "Vote on non-existent item",
                    votable_type=kind.value,
                    votable_id=votable_id,
                )
                raise NotFoundError(kind.value.capitalize(), str(votable_id))

            existing = await tx.find_vote(kind, votable_id, client)
            transition = plan_vote_transition(
                existing.value if existing else None, requested
            )

            if transition.action == VoteAction.INSERT:
                inserted = await tx.insert_vote(
                    Vote(
                        votable_type=kind,
                        votable_id=votable_id,
                        client_id=client,
                        value=requested,
                    )
                )
                if not inserted:
                    # A concurrent vote from the same client created the entry
                    existing = await tx.find_vote(kind, votable_id, client)
                    if existing is None:
                        raise TransactionConflictError(
                            "Vote entry changed concurrently"
                        )
                    if existing.value == requested:
                        logfire.info(
                            "Duplicate concurrent vote ignored",
                            votable_type=kind.value,
                            votable_id=votable_id,
                        )
                        counts = await tx.get_counts(kind, votable_id)
                        if counts is None:
                            raise NotFoundError(
                                kind.value.capitalize(), str(votable_id)
                            )
                        return counts
                    transition = plan_vote_transition(existing.value, requested)

            if transition.action == VoteAction.DELETE:
                await tx.delete_vote(kind, votable_id, client)
            elif transition.action == VoteAction.FLIP:
                await tx.update_vote(kind, votable_id, client, requested)

            counts = await tx.adjust_counts(
                kind,
                votable_id,
                transition.upvotes_delta,
                transition.downvotes_delta,
            )
            if counts is None:
                raise NotFoundError(kind.value.capitalize(), str(votable_id))
        return counts

    @staticmethod
    def _validate(
        votable_type: VotableType | str,
        votable_id: int,
        client_id: ClientId | str,
        value: VoteValue | int,
    ) -> tuple[VotableType, ClientId, VoteValue]:
        try:
            kind = VotableType(votable_type)
        except ValueError:
            raise InvalidArgumentError(f"Invalid item kind: {votable_type!r}")

        if isinstance(votable_id, bool) or not isinstance(votable_id, int):
            raise InvalidArgumentError(f"Invalid item id: {votable_id!r}")

        if isinstance(client_id, ClientId):
            client = client_id
        else:
            try:
                client = ClientId(client_id)
            except ValueError:
                raise InvalidArgumentError("Client id must be a non-empty string")

        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidArgumentError(f"Invalid vote value: {value!r}")
        try:
            requested = VoteValue(value)
        except ValueError:
            raise InvalidArgumentError(f"Vote value must be 1 or -1, got {value}")

        return kind, client, requested

    async def get_client_votes(
        self,
        client_id: ClientId,
        votable_type: VotableType,
        votable_ids: Sequence[int],
    ) -> dict[int, VoteValue]:
        """Look up a client's current votes on several items.

        Args:
            client_id: Client identifier
            votable_type: Item kind
            votable_ids: Item IDs to check

        Returns:
            Mapping of item ID to vote value; items without a vote are absent
        """
        if not votable_ids:
            return {}

        with logfire.span(
            "vote_ledger.get_client_votes",
            votable_type=votable_type.value,
            count=len(votable_ids),
        ):
            # Batch query to fetch all votes at once (avoid N+1)
            votes = await self.vote_store.find_client_votes(
                client_id=client_id,
                votable_type=votable_type,
                votable_ids=votable_ids,
            )
            return {vote.votable_id: vote.value for vote in votes}
