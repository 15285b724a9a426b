"""Post repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from hubcorner.domain.model.post import Post
from hubcorner.domain.value import CommunityId, PostId


class PostRepository(ABC):
    """Repository for Post entity.

    Defines the contract for post persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID, with community name and comment count.

        Args:
            post_id: The post's unique identifier

        Returns:
            The post if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all(self, community_id: Optional[CommunityId] = None) -> List[Post]:
        """Find posts, optionally restricted to one community.

        Posts are ordered by score descending, newest first on ties.

        Args:
            community_id: Only return posts of this community if given

        Returns:
            List of posts
        """
        pass

    @abstractmethod
    async def save(self, post: Post) -> Post:
        """Create a post.

        Vote counters are never written here; they belong to the vote ledger.

        Args:
            post: Post without an ID

        Returns:
            The persisted post with its assigned ID
        """
        pass
