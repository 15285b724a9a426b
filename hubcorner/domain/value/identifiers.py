"""Strongly typed identifiers for HubCorner domain entities.

Identifiers are database-assigned integers. NewType keeps a PostId from
being passed where a CommentId is expected.
"""

from typing import NewType

CommunityId = NewType("CommunityId", int)
PostId = NewType("PostId", int)
CommentId = NewType("CommentId", int)
VoteId = NewType("VoteId", int)
