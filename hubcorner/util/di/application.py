"""Application layer DI providers."""

from dishka import Scope, provide

from hubcorner.application.usecase.comment import (
    CreateCommentUseCase,
    GetThreadUseCase,
)
from hubcorner.application.usecase.community import (
    CreateCommunityUseCase,
    GetCommunityUseCase,
    ListCommunitiesUseCase,
)
from hubcorner.application.usecase.post import (
    CreatePostUseCase,
    GetPostUseCase,
    ListPostsUseCase,
)
from hubcorner.application.usecase.vote import CastVoteUseCase
from hubcorner.config import Settings
from hubcorner.domain.service import (
    CommentService,
    CommunityService,
    PostService,
    ThreadAssembler,
    VoteLedger,
)
from hubcorner.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Vote use cases
    @provide(scope=Scope.REQUEST)
    def get_cast_vote_use_case(self, vote_ledger: VoteLedger) -> CastVoteUseCase:
        """Provide cast vote use case."""
        return CastVoteUseCase(vote_ledger=vote_ledger)

    # Community use cases
    @provide(scope=Scope.REQUEST)
    def get_create_community_use_case(
        self, community_service: CommunityService
    ) -> CreateCommunityUseCase:
        """Provide create community use case."""
        return CreateCommunityUseCase(community_service=community_service)

    @provide(scope=Scope.REQUEST)
    def get_list_communities_use_case(
        self, community_service: CommunityService
    ) -> ListCommunitiesUseCase:
        """Provide list communities use case."""
        return ListCommunitiesUseCase(community_service=community_service)

    @provide(scope=Scope.REQUEST)
    def get_get_community_use_case(
        self,
        community_service: CommunityService,
        post_service: PostService,
        vote_ledger: VoteLedger,
    ) -> GetCommunityUseCase:
        """Provide get community use case."""
        return GetCommunityUseCase(
            community_service=community_service,
            post_service=post_service,
            vote_ledger=vote_ledger,
        )

    # Post use cases
    @provide(scope=Scope.REQUEST)
    def get_create_post_use_case(self, post_service: PostService) -> CreatePostUseCase:
        """Provide create post use case."""
        return CreatePostUseCase(post_service=post_service)

    @provide(scope=Scope.REQUEST)
    def get_get_post_use_case(
        self, post_service: PostService, vote_ledger: VoteLedger
    ) -> GetPostUseCase:
        """Provide get post use case."""
        return GetPostUseCase(post_service=post_service, vote_ledger=vote_ledger)

    @provide(scope=Scope.REQUEST)
    def get_list_posts_use_case(
        self, post_service: PostService, vote_ledger: VoteLedger
    ) -> ListPostsUseCase:
        """Provide list posts use case."""
        return ListPostsUseCase(post_service=post_service, vote_ledger=vote_ledger)

    # Comment use cases
    @provide(scope=Scope.REQUEST)
    def get_create_comment_use_case(
        self, comment_service: CommentService, post_service: PostService
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(
            comment_service=comment_service, post_service=post_service
        )

    @provide(scope=Scope.REQUEST)
    def get_get_thread_use_case(
        self,
        comment_service: CommentService,
        post_service: PostService,
        vote_ledger: VoteLedger,
        thread_assembler: ThreadAssembler,
        settings: Settings,
    ) -> GetThreadUseCase:
        """Provide get thread use case."""
        return GetThreadUseCase(
            comment_service=comment_service,
            post_service=post_service,
            vote_ledger=vote_ledger,
            thread_assembler=thread_assembler,
            max_render_depth=settings.threads.max_render_depth,
        )
