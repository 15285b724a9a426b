"""PostgreSQL implementation of Post repository."""

from typing import List, Optional

import logfire
from sqlalchemy import desc, func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from hubcorner.domain.model import Post
from hubcorner.domain.repository import PostRepository
from hubcorner.domain.value import CommunityId, PostId
from hubcorner.persistence.mappers import post_to_dict, row_to_post
from hubcorner.persistence.tables import (
    comments_table,
    communities_table,
    posts_table,
)


class PostgresPostRepository(PostRepository):
    """PostgreSQL implementation of PostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    def _select_posts(self):
        comment_count = (
            select(func.count())
            .select_from(comments_table)
            .where(comments_table.c.post_id == posts_table.c.id)
            .scalar_subquery()
            .label("comment_count")
        )
        return (
            select(
                posts_table,
                communities_table.c.name.label("community_name"),
                comment_count,
            )
            .select_from(posts_table)
            .join(communities_table, posts_table.c.community_id == communities_table.c.id)
        )

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        with logfire.span("post_repository.find_by_id", post_id=post_id):
            stmt = self._select_posts().where(posts_table.c.id == post_id)
            result = await self.session.execute(stmt)
            row = result.fetchone()

            if not row:
                logfire.warn("Post not found", post_id=post_id)
                return None

            return row_to_post(row._asdict())

    async def find_all(self, community_id: Optional[CommunityId] = None) -> List[Post]:
        """Find posts ordered by score, newest first on ties."""
        with logfire.span("post_repository.find_all", community_id=community_id):
            stmt = self._select_posts()

            if community_id is not None:
                stmt = stmt.where(posts_table.c.community_id == community_id)

            stmt = stmt.order_by(
                desc(posts_table.c.upvotes - posts_table.c.downvotes),
                desc(posts_table.c.created_at),
                desc(posts_table.c.id),
            )

            result = await self.session.execute(stmt)
            posts = [row_to_post(row._asdict()) for row in result.fetchall()]
            logfire.info("Found posts", count=len(posts))
            return posts

    async def save(self, post: Post) -> Post:
        """Insert a post."""
        with logfire.span(
            "post_repository.save", community_id=post.community_id, title=post.title
        ):
            stmt = (
                insert(posts_table)
                .values(**post_to_dict(post))
                .returning(posts_table)
            )
            result = await self.session.execute(stmt)
            row = result.one()
            await self.session.flush()

            saved = row_to_post({**row._asdict(), "community_name": post.community_name})
            logfire.info("Post saved successfully", post_id=saved.id)
            return saved
