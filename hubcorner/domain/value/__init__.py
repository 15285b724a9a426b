"""Domain value objects for HubCorner."""

from hubcorner.domain.value.identifiers import (
    CommentId,
    CommunityId,
    PostId,
    VoteId,
)
from hubcorner.domain.value.types import (
    ClientId,
    CommunityName,
    ThreadOrder,
    VotableType,
    VoteCounts,
    VoteValue,
)

__all__ = [
    # Identifiers
    "CommunityId",
    "PostId",
    "CommentId",
    "VoteId",
    # Types
    "ClientId",
    "CommunityName",
    "ThreadOrder",
    "VotableType",
    "VoteCounts",
    "VoteValue",
]
