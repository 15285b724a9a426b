"""Post domain service."""

from typing import Optional

import logfire
from pydantic import ValidationError

from hubcorner.domain.error import InvalidArgumentError, NotFoundError
from hubcorner.domain.model.post import Post
from hubcorner.domain.repository import CommunityRepository, PostRepository
from hubcorner.domain.value import CommunityId, PostId

from .base import Service


class PostService(Service):
    """Domain service for post operations."""

    def __init__(
        self,
        post_repository: PostRepository,
        community_repository: CommunityRepository,
    ) -> None:
        """Initialize post service.

        Args:
            post_repository: Post repository
            community_repository: Community repository
        """
        self.post_repository = post_repository
        self.community_repository = community_repository

    async def create_post(
        self, community_id: CommunityId, title: str, content: str = ""
    ) -> Post:
        """Create a post in a community.

        New posts start with no votes.

        Args:
            community_id: Target community
            title: Post title
            content: Post body

        Returns:
            Created post

        Raises:
            NotFoundError: If the community does not exist
            InvalidArgumentError: If title or content is malformed
        """
        with logfire.span(
            "post_service.create_post", community_id=community_id, title=title
        ):
            community = await self.community_repository.find_by_id(community_id)
            if not community:
                logfire.warn("Post in non-existent community", community_id=community_id)
                raise NotFoundError("Community", str(community_id))

            try:
                post = Post(
                    community_id=community_id,
                    community_name=community.name.root,
                    title=title.strip(),
                    content=content.strip(),
                )
            except ValidationError as e:
                logfire.warn("Invalid post", error=str(e))
                raise InvalidArgumentError(str(e))

            saved = await self.post_repository.save(post)
            logfire.info("Post created", post_id=saved.id, community_id=community_id)
            return saved

    async def get_post_by_id(self, post_id: PostId) -> Post | None:
        """Get a post by ID.

        Args:
            post_id: Post ID

        Returns:
            Post if found, None otherwise
        """
        with logfire.span("post_service.get_post_by_id", post_id=post_id):
            post = await self.post_repository.find_by_id(post_id)

            if post:
                logfire.info("Post found", post_id=post_id, title=post.title)
            else:
                logfire.warn("Post not found", post_id=post_id)

            return post

    async def list_posts(
        self, community_id: Optional[CommunityId] = None
    ) -> list[Post]:
        """List posts by score, newest first on ties.

        Args:
            community_id: Restrict to one community if given

        Returns:
            List of posts
        """
        with logfire.span("post_service.list_posts", community_id=community_id):
            posts = await self.post_repository.find_all(community_id=community_id)
            logfire.info("Posts listed", count=len(posts), community_id=community_id)
            return posts
