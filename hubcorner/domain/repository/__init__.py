"""Repository interfaces for HubCorner domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from hubcorner.domain.repository.comment import CommentRepository
from hubcorner.domain.repository.community import CommunityRepository
from hubcorner.domain.repository.post import PostRepository
from hubcorner.domain.repository.vote import VoteStore, VoteTransaction

__all__ = [
    "CommunityRepository",
    "PostRepository",
    "CommentRepository",
    "VoteStore",
    "VoteTransaction",
]
