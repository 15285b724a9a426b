"""Post entity.

Posts belong to a community and are votable.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from hubcorner.domain.model.common import VotableModel
from hubcorner.domain.value import CommunityId, PostId


class Post(VotableModel):
    """Post entity.

    ``id`` is None until the post has been persisted. ``community_name``
    and ``comment_count`` are joined/derived by the repository on read.
    """

    id: Optional[PostId] = None
    community_id: CommunityId
    community_name: Optional[str] = None
    title: str = Field(min_length=1, max_length=300)
    content: str = Field(default="", max_length=40000)
    comment_count: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=datetime.now)
