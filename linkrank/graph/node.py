"""
Node model for the link graph.
"""
import time
from dataclasses import dataclass, field
from typing import List, Optional

from ..types import NodeSnapshot


@dataclass(order=True, unsafe_hash=True)
class Node:
    """A single identified resource (e.g. a URL) and its edges.

    Identity, ordering and hashing use ``identifier`` only.
    """
    identifier: str
    timestamp: Optional[float] = field(default=None, compare=False)
    rank: float = field(default=0.0, compare=False)
    children: List[str] = field(default_factory=list, compare=False, repr=False)
    parents: List[str] = field(default_factory=list, compare=False, repr=False)

    def __post_init__(self):
        if self.timestamp is None:
            self.timestamp = time.time()

    @property
    def out_degree(self) -> int:
        return len(self.children)

    def has_child(self, child_id: str) -> bool:
        return child_id in self.children

    def has_parent(self, parent_id: str) -> bool:
        return parent_id in self.parents

    def add_child(self, child_id: str) -> bool:
        """Add an outgoing edge. Returns False if it already exists."""
        if self.has_child(child_id):
            return False
        self.children.append(child_id)
        return True

    def add_parent(self, parent_id: str) -> bool:
        """Add an incoming edge. Returns False if it already exists."""
        if self.has_parent(parent_id):
            return False
        self.parents.append(parent_id)
        return True

    def update_rank(self, rank: float):
        self.rank = rank

    def update_timestamp(self, timestamp: float):
        self.timestamp = timestamp

    def snapshot(self) -> NodeSnapshot:
        """Immutable copy of the node's current state."""
        return NodeSnapshot(
            identifier=self.identifier,
            rank=self.rank,
            timestamp=self.timestamp,
            children=tuple(self.children),
            parents=tuple(self.parents),
        )
