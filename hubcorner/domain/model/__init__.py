"""Domain model entities for HubCorner."""

from hubcorner.domain.model.comment import Comment
from hubcorner.domain.model.community import Community
from hubcorner.domain.model.post import Post
from hubcorner.domain.model.vote import (
    Vote,
    VoteAction,
    VoteTransition,
    plan_vote_transition,
)

__all__ = [
    "Community",
    "Post",
    "Comment",
    "Vote",
    "VoteAction",
    "VoteTransition",
    "plan_vote_transition",
]
