"""PostgreSQL repository implementations."""

from hubcorner.persistence.repository.comment import PostgresCommentRepository
from hubcorner.persistence.repository.community import PostgresCommunityRepository
from hubcorner.persistence.repository.post import PostgresPostRepository
from hubcorner.persistence.repository.vote import PostgresVoteStore

__all__ = [
    "PostgresCommunityRepository",
    "PostgresPostRepository",
    "PostgresCommentRepository",
    "PostgresVoteStore",
]
