"""Domain value objects for HubCorner.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from enum import Enum, IntEnum

from pydantic import Field, computed_field, field_validator

from hubcorner.domain.value.common import RootValueObject, ValueObject


class VoteValue(IntEnum):
    """Direction of a vote.

    There is no neutral value: a client without a vote has no ledger entry.
    """

    UP = 1
    DOWN = -1

    @property
    def opposite(self) -> "VoteValue":
        """The other direction."""
        return VoteValue.DOWN if self is VoteValue.UP else VoteValue.UP


class VotableType(str, Enum):
    """Type of entity that can be voted on."""

    POST = "post"
    COMMENT = "comment"


class ThreadOrder(str, Enum):
    """Ordering of top-level comments in a thread.

    Replies always keep creation order.
    """

    TOP = "top"  # Score descending, oldest first on ties
    NEW = "new"  # Creation time descending


class ClientId(RootValueObject[str]):
    """Opaque client identifier (usually a cookie value).

    Not authenticated: the same string is treated as the same voter.
    """

    @field_validator("root")
    @classmethod
    def validate_client_id(cls, v: str) -> str:
        """Validate client id is not blank and within length limits."""
        if not v or not v.strip():
            raise ValueError("Client id must not be empty")
        if len(v) > 255:
            raise ValueError("Client id must be at most 255 characters")
        return v


class CommunityName(RootValueObject[str]):
    """Community name used in URLs (``/c/<name>``).

    3-50 characters: letters, digits, underscores and hyphens.
    """

    @field_validator("root")
    @classmethod
    def validate_community_name(cls, v: str) -> str:
        """Validate community name format."""
        if not re.match(r"^[A-Za-z0-9_-]{3,50}$", v):
            raise ValueError(
                "Community name must be 3-50 characters of letters, digits, "
                "underscores or hyphens"
            )
        return v


class VoteCounts(ValueObject):
    """Vote counters of a single post or comment."""

    upvotes: int = Field(default=0, ge=0)
    downvotes: int = Field(default=0, ge=0)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def score(self) -> int:
        """Upvotes minus downvotes."""
        return self.upvotes - self.downvotes
