"""PostgreSQL implementation of Community repository."""

from typing import List, Optional

import logfire
from sqlalchemy import func, insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from hubcorner.domain.error import ConflictError
from hubcorner.domain.model import Community
from hubcorner.domain.repository import CommunityRepository
from hubcorner.domain.value import CommunityId, CommunityName
from hubcorner.persistence.mappers import community_to_dict, row_to_community
from hubcorner.persistence.tables import communities_table, posts_table


class PostgresCommunityRepository(CommunityRepository):
    """PostgreSQL implementation of CommunityRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    def _select_with_post_count(self):
        post_count = (
            select(func.count())
            .select_from(posts_table)
            .where(posts_table.c.community_id == communities_table.c.id)
            .scalar_subquery()
            .label("post_count")
        )
        return select(communities_table, post_count)

    async def find_by_id(self, community_id: CommunityId) -> Optional[Community]:
        """Find a community by ID."""
        stmt = self._select_with_post_count().where(
            communities_table.c.id == community_id
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_community(row._asdict()) if row else None

    async def find_by_name(self, name: CommunityName) -> Optional[Community]:
        """Find a community by name."""
        stmt = self._select_with_post_count().where(
            communities_table.c.name == name.root
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_community(row._asdict()) if row else None

    async def find_all(self) -> List[Community]:
        """Find all communities ordered by name."""
        with logfire.span("community_repository.find_all"):
            stmt = self._select_with_post_count().order_by(communities_table.c.name)
            result = await self.session.execute(stmt)
            return [row_to_community(row._asdict()) for row in result.fetchall()]

    async def save(self, community: Community) -> Community:
        """Insert a community."""
        with logfire.span("community_repository.save", name=community.name.root):
            stmt = (
                insert(communities_table)
                .values(**community_to_dict(community))
                .returning(communities_table)
            )
            try:
                # Savepoint so a duplicate does not poison the request session
                async with self.session.begin_nested():
                    result = await self.session.execute(stmt)
            except IntegrityError:
                logfire.warn("Duplicate community name", name=community.name.root)
                raise ConflictError(f"Community already exists: {community.name}")

            row = result.one()
            return row_to_community(row._asdict())
