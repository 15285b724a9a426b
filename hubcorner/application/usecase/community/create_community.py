"""Create community use case."""

from datetime import datetime

from pydantic import BaseModel, Field

from hubcorner.domain.service import CommunityService

from ..base import BaseUseCase


class CreateCommunityRequest(BaseModel):
    """Create community request."""

    name: str = Field(min_length=3, max_length=50)
    description: str = Field(default="", max_length=500)


class CommunityItem(BaseModel):
    """Community in responses."""

    community_id: int
    name: str
    description: str
    post_count: int
    created_at: datetime


class CreateCommunityUseCase(BaseUseCase):
    """Use case for creating a community."""

    def __init__(self, community_service: CommunityService) -> None:
        """Initialize create community use case.

        Args:
            community_service: Community domain service
        """
        self.community_service = community_service

    async def execute(self, request: CreateCommunityRequest) -> CommunityItem:
        """Execute create community flow.

        Raises:
            InvalidArgumentError: If the name is malformed
            ConflictError: If the name is taken
        """
        community = await self.community_service.create_community(
            name=request.name,
            description=request.description,
        )
        return CommunityItem(
            community_id=community.id,  # type: ignore[arg-type]
            name=community.name.root,
            description=community.description,
            post_count=community.post_count,
            created_at=community.created_at,
        )
