"""Get community use case."""

from pydantic import BaseModel

from hubcorner.application.usecase.post.list_posts import PostItem, to_post_items
from hubcorner.domain.service import CommunityService, PostService, VoteLedger
from hubcorner.domain.value import ClientId

from ..base import BaseUseCase
from .create_community import CommunityItem


class GetCommunityRequest(BaseModel):
    """Get community request."""

    name: str
    client_id: str | None = None


class GetCommunityResponse(BaseModel):
    """Community with its posts."""

    community: CommunityItem
    posts: list[PostItem]


class GetCommunityUseCase(BaseUseCase):
    """Use case for viewing a community page."""

    def __init__(
        self,
        community_service: CommunityService,
        post_service: PostService,
        vote_ledger: VoteLedger,
    ) -> None:
        """Initialize get community use case.

        Args:
            community_service: Community domain service
            post_service: Post domain service
            vote_ledger: Vote ledger for the client's own votes
        """
        self.community_service = community_service
        self.post_service = post_service
        self.vote_ledger = vote_ledger

    async def execute(self, request: GetCommunityRequest) -> GetCommunityResponse:
        """Execute get community flow.

        Raises:
            NotFoundError: If the community does not exist
        """
        community = await self.community_service.get_by_name(request.name)
        posts = await self.post_service.list_posts(community_id=community.id)
        client_id = ClientId(request.client_id) if request.client_id else None

        return GetCommunityResponse(
            community=CommunityItem(
                community_id=community.id,  # type: ignore[arg-type]
                name=community.name.root,
                description=community.description,
                post_count=community.post_count,
                created_at=community.created_at,
            ),
            posts=await to_post_items(posts, client_id, self.vote_ledger),
        )
