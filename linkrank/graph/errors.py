"""
Exceptions raised by the link graph.
"""
from typing import Optional

from ..types import PropagationResult


class GraphError(Exception):
    """Base exception for link graph operations."""
    pass


class NodeNotFoundError(GraphError, KeyError):
    """Raised when an identifier is not in the graph."""

    def __init__(self, node_id: str):
        self.node_id = node_id
        super().__init__(f"Node not found: {node_id}")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return f"Node not found: {self.node_id}"


class PropagationLimitError(GraphError):
    """Raised when rank propagation exceeds its step budget."""

    def __init__(self, start: str, steps: int, pending: int,
                 result: Optional[PropagationResult] = None):
        self.start = start
        self.steps = steps
        self.pending = pending
        # partial run: nodes updated before the limit was hit
        self.result = result
        super().__init__(
            f"Rank propagation from {start} stopped after {steps} steps "
            f"with {pending} nodes still queued"
        )
