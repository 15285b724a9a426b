"""In-memory community repository for testing."""

from typing import Optional

from hubcorner.domain.error import ConflictError
from hubcorner.domain.model import Community
from hubcorner.domain.repository import CommunityRepository
from hubcorner.domain.value import CommunityId, CommunityName

from .state import InMemoryState


class InMemoryCommunityRepository(CommunityRepository):
    """In-memory implementation of CommunityRepository for testing."""

    def __init__(self, state: InMemoryState) -> None:
        self.state = state

    def _with_post_count(self, community: Community) -> Community:
        post_count = sum(
            1 for post in self.state.posts.values() if post.community_id == community.id
        )
        return community.model_copy(update={"post_count": post_count})

    async def find_by_id(self, community_id: CommunityId) -> Optional[Community]:
        """Find a community by ID."""
        community = self.state.communities.get(community_id)
        return self._with_post_count(community) if community else None

    async def find_by_name(self, name: CommunityName) -> Optional[Community]:
        """Find a community by name."""
        for community in self.state.communities.values():
            if community.name == name:
                return self._with_post_count(community)
        return None

    async def find_all(self) -> list[Community]:
        """Find all communities ordered by name."""
        communities = sorted(
            self.state.communities.values(), key=lambda c: c.name.root
        )
        return [self._with_post_count(c) for c in communities]

    async def save(self, community: Community) -> Community:
        """Insert a community.

        Raises:
            ConflictError: If the name is already taken
        """
        if await self.find_by_name(community.name):
            raise ConflictError(f"Community already exists: {community.name}")

        saved = community.model_copy(
            update={"id": CommunityId(self.state.next_id("communities"))}
        )
        self.state.communities[saved.id] = saved  # type: ignore[index]
        return saved
