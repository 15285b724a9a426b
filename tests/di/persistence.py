"""Mock persistence providers for testing."""

from dishka import Scope, provide

from hubcorner.domain.repository import (
    CommentRepository,
    CommunityRepository,
    PostRepository,
    VoteStore,
)
from hubcorner.persistence.repository.inmemory import (
    InMemoryCommentRepository,
    InMemoryCommunityRepository,
    InMemoryPostRepository,
    InMemoryState,
    InMemoryVoteStore,
)
from hubcorner.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    Uses REQUEST scope to ensure test isolation - each test gets a fresh
    state shared by all of its repositories and the vote store.
    """

    __is_mock__ = True

    @provide(scope=Scope.REQUEST)
    def get_state(self) -> InMemoryState:
        """Provide the in-memory tables."""
        return InMemoryState()

    @provide(scope=Scope.REQUEST)
    def get_community_repository(self, state: InMemoryState) -> CommunityRepository:
        """Provide in-memory community repository."""
        return InMemoryCommunityRepository(state)

    @provide(scope=Scope.REQUEST)
    def get_post_repository(self, state: InMemoryState) -> PostRepository:
        """Provide in-memory post repository."""
        return InMemoryPostRepository(state)

    @provide(scope=Scope.REQUEST)
    def get_comment_repository(self, state: InMemoryState) -> CommentRepository:
        """Provide in-memory comment repository."""
        return InMemoryCommentRepository(state)

    @provide(scope=Scope.REQUEST)
    def get_vote_store(self, state: InMemoryState) -> VoteStore:
        """Provide in-memory vote store."""
        return InMemoryVoteStore(state)
