"""Get thread use case."""

from datetime import datetime

from pydantic import BaseModel

from hubcorner.domain.error import NotFoundError
from hubcorner.domain.service import (
    CommentNode,
    CommentService,
    PostService,
    ThreadAssembler,
    VoteLedger,
    order_for_assembly,
)
from hubcorner.domain.value import ClientId, PostId, ThreadOrder, VotableType, VoteValue

from ..base import BaseUseCase


class CommentTreeItem(BaseModel):
    """Comment with nested replies in response."""

    comment_id: int
    post_id: int
    parent_id: int | None
    content: str
    upvotes: int
    downvotes: int
    score: int
    depth: int
    created_at: datetime
    my_vote: int | None  # Requesting client's vote: 1, -1 or None
    replies: list["CommentTreeItem"]


class GetThreadRequest(BaseModel):
    """Get thread request."""

    post_id: int
    sort: ThreadOrder = ThreadOrder.TOP
    client_id: str | None = None


class GetThreadResponse(BaseModel):
    """Get thread response."""

    post_id: int
    sort: ThreadOrder
    comments: list[CommentTreeItem]
    total: int


def _to_item(node: CommentNode, my_votes: dict[int, VoteValue]) -> CommentTreeItem:
    comment = node.comment
    return CommentTreeItem(
        comment_id=comment.id,  # type: ignore[arg-type]
        post_id=comment.post_id,
        parent_id=comment.parent_id,
        content=comment.content,
        upvotes=comment.upvotes,
        downvotes=comment.downvotes,
        score=comment.score,
        depth=node.depth,
        created_at=comment.created_at,
        my_vote=int(my_votes[comment.id]) if comment.id in my_votes else None,
        replies=[],
    )


def to_tree_items(
    roots: list[CommentNode],
    my_votes: dict[int, VoteValue],
    max_render_depth: int,
) -> list[CommentTreeItem]:
    """Convert an assembled forest to response items.

    Items are nested at most ``max_render_depth`` levels below the roots.
    Deeper replies are listed after their deepest rendered ancestor, in
    depth-first thread order, and keep their real ``depth`` and
    ``parent_id``.

    Args:
        roots: Root nodes from the thread assembler
        my_votes: Requesting client's votes by comment ID
        max_render_depth: Maximum nesting level of ``replies``

    Returns:
        Top-level response items
    """
    items: list[CommentTreeItem] = []
    stack = [(root, items, 0) for root in reversed(roots)]
    while stack:
        node, siblings, level = stack.pop()
        item = _to_item(node, my_votes)
        siblings.append(item)
        if level < max_render_depth:
            target, target_level = item.replies, level + 1
        else:
            target, target_level = siblings, level
        stack.extend(
            (child, target, target_level) for child in reversed(node.children)
        )
    return items


class GetThreadUseCase(BaseUseCase):
    """Use case for reading a post's comments as a nested thread."""

    def __init__(
        self,
        comment_service: CommentService,
        post_service: PostService,
        vote_ledger: VoteLedger,
        thread_assembler: ThreadAssembler,
        max_render_depth: int = 32,
    ) -> None:
        """Initialize get thread use case.

        Args:
            comment_service: Comment domain service
            post_service: Post domain service
            vote_ledger: Vote ledger for the client's own votes
            thread_assembler: Builds the reply tree
            max_render_depth: Nesting levels of replies in the response
        """
        self.comment_service = comment_service
        self.post_service = post_service
        self.vote_ledger = vote_ledger
        self.thread_assembler = thread_assembler
        self.max_render_depth = max_render_depth

    async def execute(self, request: GetThreadRequest) -> GetThreadResponse:
        """Execute get thread flow.

        Top-level comments follow ``request.sort``; replies are always in
        creation order. Nesting stops at ``max_render_depth`` levels.

        Raises:
            NotFoundError: If the post does not exist
        """
        post_id = PostId(request.post_id)
        post = await self.post_service.get_post_by_id(post_id)
        if not post:
            raise NotFoundError("Post", str(post_id))

        comments = await self.comment_service.get_comments_for_post(post_id)
        roots = self.thread_assembler.build(
            order_for_assembly(comments, order=request.sort)
        )

        my_votes: dict[int, VoteValue] = {}
        if request.client_id and comments:
            my_votes = await self.vote_ledger.get_client_votes(
                client_id=ClientId(request.client_id),
                votable_type=VotableType.COMMENT,
                votable_ids=[c.id for c in comments],  # type: ignore[misc]
            )

        return GetThreadResponse(
            post_id=post_id,
            sort=request.sort,
            comments=to_tree_items(roots, my_votes, self.max_render_depth),
            total=len(comments),
        )
