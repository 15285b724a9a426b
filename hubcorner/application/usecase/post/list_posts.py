"""List posts use case."""

from datetime import datetime
from typing import Optional, Sequence

from pydantic import BaseModel

from hubcorner.domain.model import Post
from hubcorner.domain.service import PostService, VoteLedger
from hubcorner.domain.value import ClientId, CommunityId, VotableType

from ..base import BaseUseCase


class PostItem(BaseModel):
    """Post in responses."""

    post_id: int
    community_id: int
    community_name: str | None
    title: str
    content: str
    upvotes: int
    downvotes: int
    score: int
    comment_count: int
    created_at: datetime
    my_vote: int | None  # Requesting client's vote: 1, -1 or None


async def to_post_items(
    posts: Sequence[Post], client_id: Optional[ClientId], vote_ledger: VoteLedger
) -> list[PostItem]:
    """Convert posts to response items with the client's votes.

    Args:
        posts: Posts to convert
        client_id: Requesting client, if known
        vote_ledger: Ledger used to look up the client's votes

    Returns:
        Response items in the order of ``posts``
    """
    my_votes = {}
    if client_id and posts:
        # Batch query to fetch all votes at once (avoid N+1)
        my_votes = await vote_ledger.get_client_votes(
            client_id=client_id,
            votable_type=VotableType.POST,
            votable_ids=[post.id for post in posts],  # type: ignore[misc]
        )

    return [
        PostItem(
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
            my_vote=int(my_votes[post.id]) if post.id in my_votes else None,
        )
        for post in posts
    ]


class ListPostsRequest(BaseModel):
    """List posts request."""

    community_id: int | None = None  # Filter by community
    client_id: str | None = None


class ListPostsResponse(BaseModel):
    """List posts response."""

    posts: list[PostItem]
    total: int


class ListPostsUseCase(BaseUseCase):
    """Use case for listing posts by score."""

    def __init__(self, post_service: PostService, vote_ledger: VoteLedger) -> None:
        """Initialize list posts use case.

        Args:
            post_service: Post domain service
            vote_ledger: Vote ledger for the client's own votes
        """
        self.post_service = post_service
        self.vote_ledger = vote_ledger

    async def execute(self, request: ListPostsRequest) -> ListPostsResponse:
        """Execute list posts flow.

        Posts are ordered by score descending, newest first on ties.
        """
        community_id = (
            CommunityId(request.community_id)
            if request.community_id is not None
            else None
        )
        posts = await self.post_service.list_posts(community_id=community_id)
        client_id = ClientId(request.client_id) if request.client_id else None
        items = await to_post_items(posts, client_id, self.vote_ledger)
        return ListPostsResponse(posts=items, total=len(items))
