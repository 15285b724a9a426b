"""Vote routes."""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, HTTPException, Request, Response, status
from pydantic import BaseModel, StrictInt

from hubcorner.application.usecase.vote import (
    CastVoteRequest,
    CastVoteResponse,
    CastVoteUseCase,
)
from hubcorner.config import Settings
from hubcorner.domain.error import InvalidArgumentError, NotFoundError, VoteFailedError
from hubcorner.domain.value import VotableType
from hubcorner.interface.api.client import ensure_client_id

router = APIRouter(tags=["votes"], route_class=DishkaRoute)


class VoteAPIRequest(BaseModel):
    """API request for voting."""

    value: StrictInt  # 1 to upvote, -1 to downvote; JSON booleans are rejected


async def _cast_vote(
    votable_type: VotableType,
    votable_id: int,
    value: int,
    client_id: str,
    cast_vote_use_case: CastVoteUseCase,
) -> CastVoteResponse:
    try:
        return await cast_vote_use_case.execute(
            CastVoteRequest(
                votable_type=votable_type,
                votable_id=votable_id,
                client_id=client_id,
                value=value,
            )
        )
    except InvalidArgumentError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except VoteFailedError as e:
        logfire.error(
            "Vote failed",
            votable_type=votable_type.value,
            votable_id=votable_id,
            error=str(e),
        )
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(e),
        )


@router.post("/posts/{post_id}/vote", response_model=CastVoteResponse)
async def vote_post(
    post_id: int,
    body: VoteAPIRequest,
    request: Request,
    response: Response,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    settings: FromDishka[Settings],
) -> CastVoteResponse:
    """Vote on a post.

    Voting the same way twice removes the vote; voting the other way
    switches it.

    Args:
        post_id: Post ID
        body: Vote value
        request: Incoming request (client id cookie)
        response: Outgoing response (issues a client id cookie if missing)
        cast_vote_use_case: Cast vote use case from DI
        settings: Application settings

    Returns:
        Post counters after the vote

    Raises:
        HTTPException: 400 on a bad value, 404 if the post does not exist,
            503 if the vote could not be stored
    """
    client_id = ensure_client_id(request, response, settings)
    return await _cast_vote(
        VotableType.POST, post_id, body.value, client_id, cast_vote_use_case
    )


@router.post("/comments/{comment_id}/vote", response_model=CastVoteResponse)
async def vote_comment(
    comment_id: int,
    body: VoteAPIRequest,
    request: Request,
    response: Response,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    settings: FromDishka[Settings],
) -> CastVoteResponse:
    """Vote on a comment.

    Args:
        comment_id: Comment ID
        body: Vote value
        request: Incoming request (client id cookie)
        response: Outgoing response (issues a client id cookie if missing)
        cast_vote_use_case: Cast vote use case from DI
        settings: Application settings

    Returns:
        Comment counters after the vote

    Raises:
        HTTPException: 400 on a bad value, 404 if the comment does not exist,
            503 if the vote could not be stored
    """
    client_id = ensure_client_id(request, response, settings)
    return await _cast_vote(
        VotableType.COMMENT, comment_id, body.value, client_id, cast_vote_use_case
    )
