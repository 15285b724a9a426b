"""List communities use case."""

from pydantic import BaseModel

from hubcorner.domain.service import CommunityService

from ..base import BaseUseCase
from .create_community import CommunityItem


class ListCommunitiesRequest(BaseModel):
    """List communities request."""

    pass


class ListCommunitiesResponse(BaseModel):
    """List communities response."""

    communities: list[CommunityItem]
    total: int


class ListCommunitiesUseCase(BaseUseCase):
    """Use case for listing all communities."""

    def __init__(self, community_service: CommunityService) -> None:
        """Initialize list communities use case.

        Args:
            community_service: Community domain service
        """
        self.community_service = community_service

    async def execute(self, request: ListCommunitiesRequest) -> ListCommunitiesResponse:
        """Execute list communities flow."""
        communities = await self.community_service.list_communities()
        items = [
            CommunityItem(
                community_id=c.id,  # type: ignore[arg-type]
                name=c.name.root,
                description=c.description,
                post_count=c.post_count,
                created_at=c.created_at,
            )
            for c in communities
        ]
        return ListCommunitiesResponse(communities=items, total=len(items))
