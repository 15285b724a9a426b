"""Cast vote use case."""

from pydantic import BaseModel

from hubcorner.domain.service import VoteLedger
from hubcorner.domain.value import VotableType

from ..base import BaseUseCase


class CastVoteRequest(BaseModel):
    """Cast vote request."""

    votable_type: VotableType
    votable_id: int
    client_id: str  # Opaque client identifier from the request layer
    value: int  # 1 (up) or -1 (down); anything else is rejected by the ledger


class CastVoteResponse(BaseModel):
    """Counters of the voted item after the vote."""

    upvotes: int
    downvotes: int
    score: int


class CastVoteUseCase(BaseUseCase):
    """Use case for voting on a post or comment.

    Repeating a vote removes it, voting the other way switches it.
    """

    def __init__(self, vote_ledger: VoteLedger) -> None:
        """Initialize cast vote use case.

        Args:
            vote_ledger: Vote ledger domain service
        """
        self.vote_ledger = vote_ledger

    async def execute(self, request: CastVoteRequest) -> CastVoteResponse:
        """Execute cast vote flow.

        Args:
            request: Cast vote request

        Returns:
            Item counters after the vote

        Raises:
            InvalidArgumentError: If the value or client id is invalid
            NotFoundError: If the item does not exist
            VoteFailedError: If the vote could not be stored
        """
        counts = await self.vote_ledger.apply_vote(
            votable_type=request.votable_type,
            votable_id=request.votable_id,
            client_id=request.client_id,
            value=request.value,
        )
        return CastVoteResponse(
            upvotes=counts.upvotes,
            downvotes=counts.downvotes,
            score=counts.score,
        )
