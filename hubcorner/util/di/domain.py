"""Domain layer DI providers."""

from dishka import Scope, provide

from hubcorner.config import Settings
from hubcorner.domain.repository import (
    CommentRepository,
    CommunityRepository,
    PostRepository,
    VoteStore,
)
from hubcorner.domain.service import (
    CommentService,
    CommunityService,
    PostService,
    ThreadAssembler,
    VoteLedger,
)
from hubcorner.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    """

    scope = Scope.REQUEST

    @provide
    def get_community_service(
        self, community_repository: CommunityRepository
    ) -> CommunityService:
        """Provide community domain service."""
        return CommunityService(community_repository=community_repository)

    @provide
    def get_post_service(
        self,
        post_repository: PostRepository,
        community_repository: CommunityRepository,
    ) -> PostService:
        """Provide post domain service."""
        return PostService(
            post_repository=post_repository,
            community_repository=community_repository,
        )

    @provide
    def get_comment_service(
        self, comment_repository: CommentRepository
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(comment_repository=comment_repository)

    @provide
    def get_vote_ledger(self, vote_store: VoteStore, settings: Settings) -> VoteLedger:
        """Provide vote ledger with the configured retry budget."""
        return VoteLedger(
            vote_store=vote_store,
            max_attempts=settings.voting.max_attempts,
        )

    @provide
    def get_thread_assembler(self, settings: Settings) -> ThreadAssembler:
        """Provide thread assembler."""
        return ThreadAssembler(strict_cycles=settings.threads.strict_cycles)
