"""Domain services."""

from .base import Service
from .comment_service import CommentService
from .community_service import CommunityService
from .post_service import PostService
from .thread_assembler import CommentNode, ThreadAssembler, order_for_assembly
from .vote_ledger import VoteLedger

__all__ = [
    "CommentNode",
    "CommentService",
    "CommunityService",
    "PostService",
    "Service",
    "ThreadAssembler",
    "VoteLedger",
    "order_for_assembly",
]
