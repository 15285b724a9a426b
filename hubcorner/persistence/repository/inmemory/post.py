"""In-memory post repository for testing."""

from typing import Optional

from hubcorner.domain.model import Post
from hubcorner.domain.repository import PostRepository
from hubcorner.domain.value import CommunityId, PostId

from .state import InMemoryState


class InMemoryPostRepository(PostRepository):
    """In-memory implementation of PostRepository for testing."""

    def __init__(self, state: InMemoryState) -> None:
        self.state = state

    def _hydrate(self, post: Post) -> Post:
        community = self.state.communities.get(post.community_id)
        comment_count = sum(
            1 for comment in self.state.comments.values() if comment.post_id == post.id
        )
        return post.model_copy(
            update={
                "community_name": community.name.root if community else None,
                "comment_count": comment_count,
            }
        )

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        post = self.state.posts.get(post_id)
        return self._hydrate(post) if post else None

    async def find_all(self, community_id: Optional[CommunityId] = None) -> list[Post]:
        """Find posts ordered by score, newest first on ties."""
        posts = [
            post
            for post in self.state.posts.values()
            if community_id is None or post.community_id == community_id
        ]
        posts.sort(key=lambda p: (p.score, p.created_at, p.id), reverse=True)
        return [self._hydrate(p) for p in posts]

    async def save(self, post: Post) -> Post:
        """Insert a post with fresh counters."""
        saved = post.model_copy(
            update={
                "id": PostId(self.state.next_id("posts")),
                "upvotes": 0,
                "downvotes": 0,
            }
        )
        self.state.posts[saved.id] = saved  # type: ignore[index]
        return self._hydrate(saved)
