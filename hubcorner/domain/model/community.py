"""Community entity.

Communities group posts by topic and are addressed by name (``/c/<name>``).
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from hubcorner.domain.model.common import DomainModel
from hubcorner.domain.value import CommunityId, CommunityName


class Community(DomainModel):
    """Community entity.

    ``id`` is None until the community has been persisted.
    ``post_count`` is derived by the repository on read.
    """

    id: Optional[CommunityId] = None
    name: CommunityName
    description: str = Field(default="", max_length=500)
    created_at: datetime = Field(default_factory=datetime.now)
    post_count: int = Field(default=0, ge=0)
