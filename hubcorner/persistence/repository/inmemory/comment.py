"""In-memory comment repository for testing."""

from typing import Optional

from hubcorner.domain.model import Comment
from hubcorner.domain.repository import CommentRepository
from hubcorner.domain.value import CommentId, PostId

from .state import InMemoryState


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self, state: InMemoryState) -> None:
        self.state = state

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self.state.comments.get(comment_id)

    async def find_by_post(self, post_id: PostId) -> list[Comment]:
        """Find all comments of a post in creation order."""
        comments = [c for c in self.state.comments.values() if c.post_id == post_id]
        comments.sort(key=lambda c: (c.created_at, c.id))
        return comments

    async def save(self, comment: Comment) -> Comment:
        """Insert a comment with fresh counters."""
        saved = comment.model_copy(
            update={
                "id": CommentId(self.state.next_id("comments")),
                "upvotes": 0,
                "downvotes": 0,
            }
        )
        self.state.comments[saved.id] = saved  # type: ignore[index]
        return saved
