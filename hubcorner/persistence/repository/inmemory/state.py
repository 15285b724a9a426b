"""Shared in-memory storage for testing.

All in-memory repositories of one container share a single state object,
the way the PostgreSQL repositories share one database.
"""

import asyncio
import itertools
from dataclasses import dataclass, field
from typing import Iterator

from hubcorner.domain.model import Comment, Community, Post, Vote
from hubcorner.domain.value import VotableType

VoteKey = tuple[VotableType, int, str]
ItemKey = tuple[VotableType, int]


@dataclass
class InMemoryState:
    """Tables and row locks of the in-memory store."""

    communities: dict[int, Community] = field(default_factory=dict)
    posts: dict[int, Post] = field(default_factory=dict)
    comments: dict[int, Comment] = field(default_factory=dict)
    votes: dict[VoteKey, Vote] = field(default_factory=dict)
    vote_locks: dict[VoteKey, asyncio.Lock] = field(default_factory=dict)
    item_locks: dict[ItemKey, asyncio.Lock] = field(default_factory=dict)
    _sequences: dict[str, Iterator[int]] = field(default_factory=dict)

    def next_id(self, table: str) -> int:
        """Return the next autoincrement value for a table."""
        sequence = self._sequences.setdefault(table, itertools.count(1))
        return next(sequence)

    def vote_lock(self, key: VoteKey) -> asyncio.Lock:
        """Row lock for a ledger key."""
        return self.vote_locks.setdefault(key, asyncio.Lock())

    def item_lock(self, key: ItemKey) -> asyncio.Lock:
        """Row lock for a post or comment."""
        return self.item_locks.setdefault(key, asyncio.Lock())

    def items(self, votable_type: VotableType) -> dict[int, Post] | dict[int, Comment]:
        """Table holding items of a kind."""
        return self.posts if votable_type == VotableType.POST else self.comments
