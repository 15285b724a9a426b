"""Vote entity and vote transitions.

A vote is one client's current stance on one post or comment. The ledger
holds at most one vote per (votable_type, votable_id, client_id); there is
no neutral vote, a missing row means "no vote".
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field

from hubcorner.domain.model.common import DomainModel
from hubcorner.domain.value import ClientId, VotableType, VoteId, VoteValue


class Vote(DomainModel):
    """Vote ledger entry.

    Business rules:
    - One vote per client per item (unique key, also enforced by the database)
    - Updated in place on a flip, physically deleted on a toggle-off
    """

    id: Optional[VoteId] = None
    votable_type: VotableType
    votable_id: int  # PostId or CommentId
    client_id: ClientId
    value: VoteValue
    created_at: datetime = Field(default_factory=datetime.now)


class VoteAction(str, Enum):
    """Ledger mutation performed by a vote."""

    INSERT = "insert"  # First vote on the item
    DELETE = "delete"  # Same vote repeated: toggle off
    FLIP = "flip"  # Opposite vote: switch direction


@dataclass(frozen=True)
class VoteTransition:
    """Ledger mutation and matching counter deltas for one vote."""

    action: VoteAction
    upvotes_delta: int
    downvotes_delta: int


def _delta(value: VoteValue, amount: int) -> tuple[int, int]:
    return (amount, 0) if value == VoteValue.UP else (0, amount)


def plan_vote_transition(
    existing: Optional[VoteValue], requested: VoteValue
) -> VoteTransition:
    """Decide how a vote changes the ledger and the item's counters.

    Every transition keeps each client's contribution at most one on
    exactly one counter, so counters can never become negative.

    Args:
        existing: Value of the client's current vote, None if there is none
        requested: Value the client just submitted

    Returns:
        The ledger action and the deltas to apply to (upvotes, downvotes)
    """
    if existing is None:
        up, down = _delta(requested, 1)
        return VoteTransition(VoteAction.INSERT, up, down)

    if existing == requested:
        up, down = _delta(requested, -1)
        return VoteTransition(VoteAction.DELETE, up, down)

    new_up, new_down = _delta(requested, 1)
    old_up, old_down = _delta(existing, -1)
    return VoteTransition(VoteAction.FLIP, new_up + old_up, new_down + old_down)
