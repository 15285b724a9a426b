"""Create post use case."""

from pydantic import BaseModel, Field

from hubcorner.domain.service import PostService
from hubcorner.domain.value import CommunityId

from ..base import BaseUseCase
from .list_posts import PostItem


class CreatePostRequest(BaseModel):
    """Create post request."""

    community_id: int
    title: str = Field(min_length=1, max_length=300)
    content: str = Field(default="", max_length=40000)


class CreatePostUseCase(BaseUseCase):
    """Use case for creating a post in a community."""

    def __init__(self, post_service: PostService) -> None:
        """Initialize create post use case.

        Args:
            post_service: Post domain service
        """
        self.post_service = post_service

    async def execute(self, request: CreatePostRequest) -> PostItem:
        """Execute create post flow.

        Raises:
            NotFoundError: If the community does not exist
            InvalidArgumentError: If title or content is malformed
        """
        post = await self.post_service.create_post(
            community_id=CommunityId(request.community_id),
            title=request.title,
            content=request.content,
        )
        return PostItem(
            post_id=post.id,  # type: ignore[arg-type]
            community_id=post.community_id,
            community_name=post.community_name,
            title=post.title,
            content=post.content,
            upvotes=post.upvotes,
            downvotes=post.downvotes,
            score=post.score,
            comment_count=post.comment_count,
            created_at=post.created_at,
            my_vote=None,
        )
