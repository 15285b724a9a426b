"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict

from hubcorner.domain.model import Comment, Community, Post, Vote
from hubcorner.domain.value import (
    ClientId,
    CommentId,
    CommunityId,
    CommunityName,
    PostId,
    VotableType,
    VoteCounts,
    VoteId,
    VoteValue,
)


def row_to_community(row: Dict[str, Any]) -> Community:
    """Convert database row to Community domain model.

    Args:
        row: Database row as dict, optionally with a ``post_count`` column

    Returns:
        Community domain model
    """
    return Community(
        id=CommunityId(row["id"]),
        name=CommunityName(row["name"]),
        description=row.get("description") or "",
        created_at=row["created_at"],
        post_count=row.get("post_count") or 0,
    )


def community_to_dict(community: Community) -> Dict[str, Any]:
    """Convert Community domain model to an insert dict.

    ``id`` and ``created_at`` are assigned by the database.
    """
    return {
        "name": community.name.root,
        "description": community.description,
    }


def row_to_post(row: Dict[str, Any]) -> Post:
    """Convert database row to Post domain model.

    Args:
        row: Database row as dict, optionally joined with ``community_name``
            and ``comment_count``

    Returns:
        Post domain model
    """
    return Post(
        id=PostId(row["id"]),
        community_id=CommunityId(row["community_id"]),
        community_name=row.get("community_name"),
        title=row["title"],
        content=row.get("content") or "",
        upvotes=row["upvotes"],
        downvotes=row["downvotes"],
        comment_count=row.get("comment_count") or 0,
        created_at=row["created_at"],
    )


def post_to_dict(post: Post) -> Dict[str, Any]:
    """Convert Post domain model to an insert dict.

    Counters are left to their server defaults.
    """
    return {
        "community_id": post.community_id,
        "title": post.title,
        "content": post.content,
    }


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model."""
    return Comment(
        id=CommentId(row["id"]),
        post_id=PostId(row["post_id"]),
        parent_id=CommentId(row["parent_id"]) if row["parent_id"] is not None else None,
        content=row["content"],
        upvotes=row["upvotes"],
        downvotes=row["downvotes"],
        created_at=row["created_at"],
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to an insert dict."""
    return {
        "post_id": comment.post_id,
        "parent_id": comment.parent_id,
        "content": comment.content,
    }


def row_to_vote(row: Dict[str, Any]) -> Vote:
    """Convert database row to Vote domain model."""
    return Vote(
        id=VoteId(row["id"]),
        votable_type=VotableType(row["votable_type"]),
        votable_id=row["votable_id"],
        client_id=ClientId(row["client_id"]),
        value=VoteValue(row["value"]),
        created_at=row["created_at"],
    )


def vote_to_dict(vote: Vote) -> Dict[str, Any]:
    """Convert Vote domain model to an insert dict.

    ``created_at`` is assigned by the database.
    """
    return {
        "votable_type": vote.votable_type.value,
        "votable_id": vote.votable_id,
        "client_id": vote.client_id.root,
        "value": int(vote.value),
    }


def row_to_counts(row: Dict[str, Any]) -> VoteCounts:
    """Convert an (upvotes, downvotes) row to VoteCounts."""
    return VoteCounts(upvotes=row["upvotes"], downvotes=row["downvotes"])
