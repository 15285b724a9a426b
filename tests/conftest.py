"""Test configuration and fixtures."""

from datetime import datetime, timedelta

from hubcorner.domain.model import Comment
from hubcorner.domain.value import CommentId, PostId

BASE_TIME = datetime(2024, 1, 1, 12, 0, 0)


def make_comment(
    comment_id: int,
    parent_id: int | None = None,
    post_id: int = 1,
    upvotes: int = 0,
    downvotes: int = 0,
    minute: int | None = None,
) -> Comment:
    """Helper function to build stored comments for assembly tests.

    Args:
        comment_id: Comment ID
        parent_id: Parent comment ID (None for top-level)
        post_id: Post the comment belongs to
        upvotes: Upvote counter
        downvotes: Downvote counter
        minute: Creation time as minutes after BASE_TIME (defaults to the ID)

    Returns:
        Comment with a deterministic creation time
    """
    return Comment(
        id=CommentId(comment_id),
        post_id=PostId(post_id),
        parent_id=CommentId(parent_id) if parent_id is not None else None,
        content=f"comment {comment_id}",
        upvotes=upvotes,
        downvotes=downvotes,
        created_at=BASE_TIME + timedelta(minutes=comment_id if minute is None else minute),
    )
