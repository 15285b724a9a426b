"""Thread assembler domain service.

Turns the flat list of a post's comments into a forest of reply trees.
The assembler keeps the order of its input: roots appear in input order and
every child list is in the order its members were visited. Callers that want
a particular order pre-sort with ``order_for_assembly``.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Iterable, Optional, Sequence

import logfire

from hubcorner.domain.error import AssemblyInputInvalidError
from hubcorner.domain.model.comment import Comment
from hubcorner.domain.value import CommentId, ThreadOrder

from .base import Service


@dataclass(frozen=True)
class CommentNode:
    """Comment with its replies.

    Nodes are read-only snapshots; rebuild the tree to reflect new data.
    """

    comment: Comment
    children: tuple["CommentNode", ...] = ()
    depth: int = 0

    def walk(self) -> Iterable["CommentNode"]:
        """Yield this node and its descendants in depth-first order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))


def _top_key(comment: Comment) -> tuple[int, datetime, int]:
    return (-comment.score, comment.created_at, comment.id or 0)


def _new_key(comment: Comment) -> tuple[float, int]:
    return (-comment.created_at.timestamp(), -(comment.id or 0))


ROOT_ORDER_KEYS: dict[ThreadOrder, Callable[[Comment], tuple]] = {
    ThreadOrder.TOP: _top_key,
    ThreadOrder.NEW: _new_key,
}


def _has_resolvable_parent(
    comment: Comment, by_id: dict[Optional[CommentId], Comment]
) -> bool:
    if comment.parent_id is None:
        return False
    parent = by_id.get(comment.parent_id)
    return parent is not None and parent.post_id == comment.post_id


def order_for_assembly(
    comments: Sequence[Comment],
    order: ThreadOrder = ThreadOrder.TOP,
    key: Optional[Callable[[Comment], tuple]] = None,
) -> list[Comment]:
    """Pre-order comments for ``ThreadAssembler.build``.

    Top-level comments come first, sorted by ``key`` (or the key for
    ``order``); replies follow in creation order, so every reply list
    keeps creation order.

    Args:
        comments: Comments of one post
        order: Root ordering used when no explicit key is given
        key: Sort key for top-level comments

    Returns:
        Comments ready for assembly
    """
    sort_key = key or ROOT_ORDER_KEYS[order]
    by_id = {comment.id: comment for comment in comments}

    roots: list[Comment] = []
    replies: list[Comment] = []
    for comment in comments:
        if _has_resolvable_parent(comment, by_id):
            replies.append(comment)
        else:
            roots.append(comment)

    roots.sort(key=sort_key)
    replies.sort(key=lambda c: (c.created_at, c.id or 0))
    return roots + replies


class ThreadAssembler(Service):
    """Builds reply forests from flat comment lists."""

    def __init__(self, strict_cycles: bool = False) -> None:
        """Initialize thread assembler.

        Args:
            strict_cycles: Raise on parent cycles instead of breaking them
        """
        self.strict_cycles = strict_cycles

    def build(self, comments: Sequence[Comment]) -> list[CommentNode]:
        """Assemble comments into a forest.

        A comment becomes a root when it has no parent, when its parent is
        not in the input, or when its parent belongs to another post.
        Comments caught in a parent cycle are reached from no root; the
        first of them in input order is made a root until none remain.

        Args:
            comments: Comments of one post, in the desired visiting order

        Returns:
            Root nodes in input order

        Raises:
            AssemblyInputInvalidError: A parent cycle was found and the
                assembler is strict
        """
        with logfire.span("thread_assembler.build", count=len(comments)):
            # Arena: one slot per distinct comment, addressed by index
            items: list[Comment] = []
            index: dict[CommentId, int] = {}
            for comment in comments:
                if comment.id is None or comment.id in index:
                    logfire.warn(
                        "Skipping comment without unique id",
                        comment_id=comment.id,
                    )
                    continue
                index[comment.id] = len(items)
                items.append(comment)

            parents: list[Optional[int]] = []
            for comment in items:
                parent_idx = (
                    index.get(comment.parent_id)
                    if comment.parent_id is not None
                    else None
                )
                if parent_idx is not None and items[parent_idx].post_id != comment.post_id:
                    logfire.warn(
                        "Comment parent belongs to another post",
                        comment_id=comment.id,
                        parent_id=comment.parent_id,
                    )
                    parent_idx = None
                parents.append(parent_idx)

            children: list[list[int]] = [[] for _ in items]
            for idx, parent_idx in enumerate(parents):
                if parent_idx is not None:
                    children[parent_idx].append(idx)

            reached = self._reach(parents, children)
            while len(reached) < len(items):
                stranded = [i for i in range(len(items)) if i not in reached]
                if self.strict_cycles:
                    raise AssemblyInputInvalidError(
                        [items[i].id for i in stranded]  # type: ignore[misc]
                    )
                demoted = stranded[0]
                logfire.warn(
                    "Breaking comment parent cycle",
                    comment_id=items[demoted].id,
                    parent_id=items[demoted].parent_id,
                    stranded=len(stranded),
                )
                old_parent = parents[demoted]
                if old_parent is not None:
                    children[old_parent].remove(demoted)
                parents[demoted] = None
                reached = self._reach(parents, children)

            # Parents precede children in breadth-first order, so building
            # in reverse order always finds child nodes ready.
            depth = [0] * len(items)
            bfs = [i for i, p in enumerate(parents) if p is None]
            for idx in bfs:
                for child in children[idx]:
                    depth[child] = depth[idx] + 1
                    bfs.append(child)

            nodes: list[Optional[CommentNode]] = [None] * len(items)
            for idx in reversed(bfs):
                nodes[idx] = CommentNode(
                    comment=items[idx],
                    children=tuple(nodes[c] for c in children[idx]),  # type: ignore[misc]
                    depth=depth[idx],
                )

            roots = [nodes[i] for i, p in enumerate(parents) if p is None]
            logfire.info(
                "Thread assembled", comments=len(items), roots=len(roots)
            )
            return roots  # type: ignore[return-value]

    @staticmethod
    def _reach(parents: list[Optional[int]], children: list[list[int]]) -> set[int]:
        seen: set[int] = set()
        stack = [i for i, p in enumerate(parents) if p is None]
        while stack:
            idx = stack.pop()
            if idx in seen:
                continue
            seen.add(idx)
            stack.extend(children[idx])
        return seen
