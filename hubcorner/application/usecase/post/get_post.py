"""Get post use case."""

from typing import Optional

from pydantic import BaseModel

from hubcorner.domain.service import PostService, VoteLedger
from hubcorner.domain.value import ClientId, PostId

from ..base import BaseUseCase
from .list_posts import PostItem, to_post_items


class GetPostRequest(BaseModel):
    """Get post request."""

    post_id: int
    client_id: str | None = None


class GetPostUseCase(BaseUseCase):
    """Use case for retrieving a post by ID."""

    def __init__(self, post_service: PostService, vote_ledger: VoteLedger) -> None:
        """Initialize get post use case.

        Args:
            post_service: Post domain service
            vote_ledger: Vote ledger for the client's own vote
        """
        self.post_service = post_service
        self.vote_ledger = vote_ledger

    async def execute(self, request: GetPostRequest) -> Optional[PostItem]:
        """Execute get post flow.

        Returns:
            Post details if found, None otherwise
        """
        post = await self.post_service.get_post_by_id(PostId(request.post_id))
        if not post:
            return None

        client_id = ClientId(request.client_id) if request.client_id else None
        items = await to_post_items([post], client_id, self.vote_ledger)
        return items[0]
