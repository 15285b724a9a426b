"""In-memory repository implementations for testing."""

from .comment import InMemoryCommentRepository
from .community import InMemoryCommunityRepository
from .post import InMemoryPostRepository
from .state import InMemoryState
from .vote import InMemoryVoteStore, InMemoryVoteTransaction

__all__ = [
    "InMemoryCommentRepository",
    "InMemoryCommunityRepository",
    "InMemoryPostRepository",
    "InMemoryState",
    "InMemoryVoteStore",
    "InMemoryVoteTransaction",
]
