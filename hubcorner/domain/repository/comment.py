"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from hubcorner.domain.model.comment import Comment
from hubcorner.domain.value import CommentId, PostId


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_post(self, post_id: PostId) -> List[Comment]:
        """Find all comments of a post as a flat list in creation order.

        Ties on ``created_at`` are broken by ID so the order is stable.

        Args:
            post_id: The post ID

        Returns:
            List of comments in creation order
        """
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Create a comment.

        Vote counters are never written here; they belong to the vote ledger.

        Args:
            comment: Comment without an ID

        Returns:
            The persisted comment with its assigned ID
        """
        pass
