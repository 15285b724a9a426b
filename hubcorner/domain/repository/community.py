"""Community repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from hubcorner.domain.model.community import Community
from hubcorner.domain.value import CommunityId, CommunityName


class CommunityRepository(ABC):
    """Repository for Community entity.

    Defines the contract for community persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, community_id: CommunityId) -> Optional[Community]:
        """Find a community by ID.

        Args:
            community_id: The community's unique identifier

        Returns:
            The community if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_name(self, name: CommunityName) -> Optional[Community]:
        """Find a community by its unique name.

        Args:
            name: Community name

        Returns:
            The community if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all(self) -> List[Community]:
        """Find all communities ordered by name, with post counts.

        Returns:
            List of communities
        """
        pass

    @abstractmethod
    async def save(self, community: Community) -> Community:
        """Create a community.

        Args:
            community: Community without an ID

        Returns:
            The persisted community with its assigned ID

        Raises:
            ConflictError: If the name is already taken
        """
        pass
