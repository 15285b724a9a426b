"""Comment routes."""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, HTTPException, Request, status
from pydantic import BaseModel, Field

from hubcorner.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
    GetThreadRequest,
    GetThreadResponse,
    GetThreadUseCase,
)
from hubcorner.config import Settings
from hubcorner.domain.error import (
    AssemblyInputInvalidError,
    InvalidArgumentError,
    NotFoundError,
)
from hubcorner.domain.value import ThreadOrder
from hubcorner.interface.api.client import read_client_id

router = APIRouter(prefix="/posts", tags=["comments"], route_class=DishkaRoute)


class CreateCommentAPIRequest(BaseModel):
    """API request for creating a comment."""

    content: str = Field(min_length=1, max_length=10000)
    parent_id: int | None = None  # Parent comment ID for replies


@router.post(
    "/{post_id}/comments",
    response_model=CreateCommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    post_id: int,
    request: CreateCommentAPIRequest,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
) -> CreateCommentResponse:
    """Create a comment on a post or reply to another comment.

    Args:
        post_id: Post ID
        request: Comment creation data
        create_comment_use_case: Create comment use case from DI

    Returns:
        Created comment details

    Raises:
        HTTPException: 404 if the post does not exist, 400 if the parent
            comment is missing or belongs to another post
    """
    try:
        return await create_comment_use_case.execute(
            CreateCommentRequest(
                post_id=post_id,
                content=request.content,
                parent_id=request.parent_id,
            )
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except InvalidArgumentError as e:
        logfire.warn("Comment creation failed", post_id=post_id, error=str(e))
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/{post_id}/comments", response_model=GetThreadResponse)
async def get_thread(
    post_id: int,
    http_request: Request,
    get_thread_use_case: FromDishka[GetThreadUseCase],
    settings: FromDishka[Settings],
    sort: ThreadOrder = ThreadOrder.TOP,
) -> GetThreadResponse:
    """Get a post's comments as a nested thread.

    Args:
        post_id: Post ID
        http_request: Incoming request (client id cookie)
        get_thread_use_case: Get thread use case from DI
        settings: Application settings
        sort: Order of top-level comments (replies keep creation order)

    Returns:
        Nested comment tree with the requesting client's votes

    Raises:
        HTTPException: 404 if the post does not exist
    """
    try:
        return await get_thread_use_case.execute(
            GetThreadRequest(
                post_id=post_id,
                sort=sort,
                client_id=read_client_id(http_request, settings),
            )
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except AssemblyInputInvalidError as e:
        logfire.error("Comment thread is corrupted", post_id=post_id, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Comment thread could not be assembled",
        )
