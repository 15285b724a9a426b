"""Community domain service."""

import logfire
from pydantic import ValidationError

from hubcorner.domain.error import ConflictError, InvalidArgumentError, NotFoundError
from hubcorner.domain.model.community import Community
from hubcorner.domain.repository import CommunityRepository
from hubcorner.domain.value import CommunityId, CommunityName

from .base import Service


class CommunityService(Service):
    """Domain service for community operations."""

    def __init__(self, community_repository: CommunityRepository) -> None:
        """Initialize community service.

        Args:
            community_repository: Community repository
        """
        self.community_repository = community_repository

    async def create_community(self, name: str, description: str = "") -> Community:
        """Create a community with a unique name.

        Args:
            name: Community name
            description: Optional description

        Returns:
            Created community

        Raises:
            InvalidArgumentError: If name or description is malformed
            ConflictError: If the name is already taken
        """
        with logfire.span("community_service.create_community", name=name):
            try:
                community = Community(
                    name=CommunityName(name), description=description.strip()
                )
            except ValidationError as e:
                logfire.warn("Invalid community", name=name, error=str(e))
                raise InvalidArgumentError(str(e))

            if await self.community_repository.find_by_name(community.name):
                logfire.warn("Community name taken", name=name)
                raise ConflictError(f"Community already exists: {name}")

            saved = await self.community_repository.save(community)
            logfire.info("Community created", community_id=saved.id, name=name)
            return saved

    async def get_by_name(self, name: str) -> Community:
        """Get community by name.

        Raises:
            NotFoundError: If community not found
        """
        with logfire.span("community_service.get_by_name", name=name):
            try:
                community_name = CommunityName(name)
            except ValidationError:
                raise NotFoundError("Community", name)

            community = await self.community_repository.find_by_name(community_name)
            if not community:
                logfire.warn("Community not found", name=name)
                raise NotFoundError("Community", name)
            return community

    async def get_by_id(self, community_id: CommunityId) -> Community:
        """Get community by ID.

        Raises:
            NotFoundError: If community not found
        """
        with logfire.span("community_service.get_by_id", community_id=community_id):
            community = await self.community_repository.find_by_id(community_id)
            if not community:
                logfire.warn("Community not found", community_id=community_id)
                raise NotFoundError("Community", str(community_id))
            return community

    async def list_communities(self) -> list[Community]:
        """List all communities ordered by name."""
        with logfire.span("community_service.list_communities"):
            communities = await self.community_repository.find_all()
            logfire.info("Communities listed", count=len(communities))
            return communities
