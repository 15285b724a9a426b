"""Comment entity.

Comments belong to one post and optionally reply to another comment of
the same post, forming a forest per post.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from hubcorner.domain.model.common import VotableModel
from hubcorner.domain.value import CommentId, PostId


class Comment(VotableModel):
    """Comment entity.

    Threading is stored only as ``parent_id`` (None for top-level
    comments). The nested shape is rebuilt on read by the thread assembler.
    """

    id: Optional[CommentId] = None
    post_id: PostId
    parent_id: Optional[CommentId] = None
    content: str = Field(min_length=1, max_length=10000)
    created_at: datetime = Field(default_factory=datetime.now)
