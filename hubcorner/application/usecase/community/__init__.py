"""Community use cases."""

from .create_community import (
    CommunityItem,
    CreateCommunityRequest,
    CreateCommunityUseCase,
)
from .get_community import (
    GetCommunityRequest,
    GetCommunityResponse,
    GetCommunityUseCase,
)
from .list_communities import (
    ListCommunitiesRequest,
    ListCommunitiesResponse,
    ListCommunitiesUseCase,
)

__all__ = [
    "CommunityItem",
    "CreateCommunityRequest",
    "CreateCommunityUseCase",
    "GetCommunityRequest",
    "GetCommunityResponse",
    "GetCommunityUseCase",
    "ListCommunitiesRequest",
    "ListCommunitiesResponse",
    "ListCommunitiesUseCase",
]
