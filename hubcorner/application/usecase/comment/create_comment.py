"""Create comment use case."""

from datetime import datetime

from pydantic import BaseModel, Field

from hubcorner.domain.error import NotFoundError
from hubcorner.domain.service import CommentService, PostService
from hubcorner.domain.value import CommentId, PostId

from ..base import BaseUseCase


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    post_id: int
    content: str = Field(min_length=1, max_length=10000)
    parent_id: int | None = None  # Parent comment ID for replies


class CreateCommentResponse(BaseModel):
    """Create comment response."""

    comment_id: int
    post_id: int
    parent_id: int | None
    content: str
    created_at: datetime


class CreateCommentUseCase(BaseUseCase):
    """Use case for creating a comment on a post or replying to another comment."""

    def __init__(
        self,
        comment_service: CommentService,
        post_service: PostService,
    ) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
            post_service: Post domain service
        """
        self.comment_service = comment_service
        self.post_service = post_service

    async def execute(self, request: CreateCommentRequest) -> CreateCommentResponse:
        """Execute create comment flow.

        Steps:
        1. Verify post exists via post service
        2. Create comment via comment service (validates parent if replying)

        Args:
            request: Create comment request

        Returns:
            Create comment response with comment details

        Raises:
            NotFoundError: If the post does not exist
            InvalidArgumentError: If the parent comment is invalid
        """
        post_id = PostId(request.post_id)

        # Verify post exists
        post = await self.post_service.get_post_by_id(post_id)
        if not post:
            raise NotFoundError("Post", str(post_id))

        # Create comment (service handles parent validation)
        comment = await self.comment_service.create_comment(
            post_id=post_id,
            content=request.content,
            parent_id=(
                CommentId(request.parent_id) if request.parent_id is not None else None
            ),
        )

        return CreateCommentResponse(
            comment_id=comment.id,  # type: ignore[arg-type]
            post_id=comment.post_id,
            parent_id=comment.parent_id,
            content=comment.content,
            created_at=comment.created_at,
        )
