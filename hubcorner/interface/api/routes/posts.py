"""Post routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, HTTPException, Request, status

from hubcorner.application.usecase.post import (
    CreatePostRequest,
    CreatePostUseCase,
    GetPostRequest,
    GetPostUseCase,
    ListPostsRequest,
    ListPostsResponse,
    ListPostsUseCase,
    PostItem,
)
from hubcorner.config import Settings
from hubcorner.domain.error import InvalidArgumentError, NotFoundError
from hubcorner.interface.api.client import read_client_id

router = APIRouter(prefix="/posts", tags=["posts"], route_class=DishkaRoute)


@router.get("", response_model=ListPostsResponse)
async def list_posts(
    http_request: Request,
    list_posts_use_case: FromDishka[ListPostsUseCase],
    settings: FromDishka[Settings],
    community_id: int | None = None,
) -> ListPostsResponse:
    """List posts by score, newest first on ties.

    Args:
        http_request: Incoming request (client id cookie)
        list_posts_use_case: List posts use case from DI
        settings: Application settings
        community_id: Only list posts of this community

    Returns:
        Posts with the requesting client's votes
    """
    return await list_posts_use_case.execute(
        ListPostsRequest(
            community_id=community_id,
            client_id=read_client_id(http_request, settings),
        )
    )


@router.post("", response_model=PostItem, status_code=status.HTTP_201_CREATED)
async def create_post(
    request: CreatePostRequest,
    create_post_use_case: FromDishka[CreatePostUseCase],
) -> PostItem:
    """Create a post in a community.

    Raises:
        HTTPException: 404 if the community does not exist, 400 on bad input
    """
    try:
        return await create_post_use_case.execute(request)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except InvalidArgumentError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/{post_id}", response_model=PostItem)
async def get_post(
    post_id: int,
    http_request: Request,
    get_post_use_case: FromDishka[GetPostUseCase],
    settings: FromDishka[Settings],
) -> PostItem:
    """Get a post by ID.

    Raises:
        HTTPException: 404 if the post does not exist
    """
    post = await get_post_use_case.execute(
        GetPostRequest(
            post_id=post_id, client_id=read_client_id(http_request, settings)
        )
    )
    if not post:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Post not found"
        )
    return post
