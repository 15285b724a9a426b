"""Comment domain service."""

from typing import Optional

import logfire
from pydantic import ValidationError

from hubcorner.domain.error import InvalidArgumentError
from hubcorner.domain.model.comment import Comment
from hubcorner.domain.repository import CommentRepository
from hubcorner.domain.value import CommentId, PostId

from .base import Service


class CommentService(Service):
    """Domain service for comment operations."""

    def __init__(self, comment_repository: CommentRepository) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
        """
        self.comment_repository = comment_repository

    async def create_comment(
        self,
        post_id: PostId,
        content: str,
        parent_id: Optional[CommentId] = None,
    ) -> Comment:
        """Create a comment on a post or reply to another comment.

        Args:
            post_id: Post ID
            content: Comment text
            parent_id: Parent comment ID for replies (None for top-level)

        Returns:
            Created comment

        Raises:
            InvalidArgumentError: If content is malformed, or the parent is
                missing or belongs to another post
        """
        with logfire.span(
            "comment_service.create_comment",
            post_id=post_id,
            parent_id=parent_id,
        ):
            if parent_id is not None:
                parent = await self.comment_repository.find_by_id(parent_id)
                if not parent:
                    logfire.error(
                        "Parent comment not found",
                        parent_id=parent_id,
                        post_id=post_id,
                    )
                    raise InvalidArgumentError("Parent comment not found")
                if parent.post_id != post_id:
                    logfire.error(
                        "Parent comment does not belong to post",
                        parent_id=parent_id,
                        parent_post_id=parent.post_id,
                        target_post_id=post_id,
                    )
                    raise InvalidArgumentError(
                        "Parent comment does not belong to this post"
                    )

            try:
                comment = Comment(
                    post_id=post_id, parent_id=parent_id, content=content.strip()
                )
            except ValidationError as e:
                logfire.warn("Invalid comment", post_id=post_id, error=str(e))
                raise InvalidArgumentError(str(e))

            saved = await self.comment_repository.save(comment)
            logfire.info(
                "Comment created",
                comment_id=saved.id,
                post_id=post_id,
                is_reply=parent_id is not None,
            )
            return saved

    async def get_comments_for_post(self, post_id: PostId) -> list[Comment]:
        """Get all comments for a post in creation order.

        Args:
            post_id: Post ID

        Returns:
            Flat list of comments in creation order
        """
        with logfire.span("comment_service.get_comments_for_post", post_id=post_id):
            comments = await self.comment_repository.find_by_post(post_id)
            logfire.info(
                "Comments retrieved for post", post_id=post_id, count=len(comments)
            )
            return comments

    async def get_comment_by_id(self, comment_id: CommentId) -> Comment | None:
        """Get a comment by ID."""
        with logfire.span(
            "comment_service.get_comment_by_id", comment_id=comment_id
        ):
            return await self.comment_repository.find_by_id(comment_id)
