"""Community routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, HTTPException, Request, status

from hubcorner.application.usecase.community import (
    CommunityItem,
    CreateCommunityRequest,
    CreateCommunityUseCase,
    GetCommunityRequest,
    GetCommunityResponse,
    GetCommunityUseCase,
    ListCommunitiesRequest,
    ListCommunitiesResponse,
    ListCommunitiesUseCase,
)
from hubcorner.config import Settings
from hubcorner.domain.error import ConflictError, InvalidArgumentError, NotFoundError
from hubcorner.interface.api.client import read_client_id

router = APIRouter(prefix="/communities", tags=["communities"], route_class=DishkaRoute)


@router.get("", response_model=ListCommunitiesResponse)
async def list_communities(
    list_communities_use_case: FromDishka[ListCommunitiesUseCase],
) -> ListCommunitiesResponse:
    """List all communities with their post counts."""
    return await list_communities_use_case.execute(ListCommunitiesRequest())


@router.post("", response_model=CommunityItem, status_code=status.HTTP_201_CREATED)
async def create_community(
    request: CreateCommunityRequest,
    create_community_use_case: FromDishka[CreateCommunityUseCase],
) -> CommunityItem:
    """Create a community.

    Raises:
        HTTPException: 400 if the name is malformed, 409 if it is taken
    """
    try:
        return await create_community_use_case.execute(request)
    except InvalidArgumentError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except ConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


@router.get("/{name}", response_model=GetCommunityResponse)
async def get_community(
    name: str,
    http_request: Request,
    get_community_use_case: FromDishka[GetCommunityUseCase],
    settings: FromDishka[Settings],
) -> GetCommunityResponse:
    """Get a community and its posts, best first.

    Raises:
        HTTPException: 404 if the community does not exist
    """
    try:
        return await get_community_use_case.execute(
            GetCommunityRequest(
                name=name, client_id=read_client_id(http_request, settings)
            )
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
