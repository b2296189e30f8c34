from collections import deque
from typing import Any, Deque, Dict, List, Optional, Tuple
import math
import time

from ..config import settings
from ..types import NodeSnapshot, PropagationResult
from ..utils.logger import app_logger
from .errors import NodeNotFoundError, PropagationLimitError
from .node import Node


class LinkGraph:
    """Directed graph of linked resources with incremental rank propagation."""

    def __init__(self, damping_factor: Optional[float] = None,
                 rank_threshold: Optional[float] = None,
                 max_propagation_steps: Optional[int] = None):
        self.logger = app_logger.bind(component="link_graph")

        if damping_factor is None:
            damping_factor = settings.damping_factor
        if rank_threshold is None:
            rank_threshold = settings.rank_threshold
        if max_propagation_steps is None:
            max_propagation_steps = settings.max_propagation_steps

        if not 0.0 < damping_factor < 1.0:
            raise ValueError(f"damping_factor must be in (0, 1), got {damping_factor}")
        if not rank_threshold > 0.0:
            raise ValueError(f"rank_threshold must be positive, got {rank_threshold}")
        if max_propagation_steps < 0:
            raise ValueError(f"max_propagation_steps must be >= 0, got {max_propagation_steps}")

        self.damping_factor = damping_factor
        self.rank_threshold = rank_threshold
        self.max_propagation_steps = max_propagation_steps

        self._nodes: Dict[str, Node] = {}

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, identifier: str) -> bool:
        return self.has_link(identifier)

    def _get(self, identifier: str) -> Node:
        try:
            return self._nodes[identifier]
        except KeyError:
            raise NodeNotFoundError(identifier) from None

    def has_link(self, identifier: str) -> bool:
        return identifier in self._nodes

    def get_node(self, identifier: str) -> NodeSnapshot:
        """Get a read-only snapshot of a node. Raises NodeNotFoundError if absent."""
        return self._get(identifier).snapshot()

    def get_all_nodes(self) -> List[NodeSnapshot]:
        """Snapshots of every node, sorted by identifier."""
        return [node.snapshot() for node in sorted(self._nodes.values())]

    def get_rank(self, identifier: str) -> float:
        return self._get(identifier).rank

    def get_incoming_links(self, identifier: str) -> Tuple[str, ...]:
        return tuple(self._get(identifier).parents)

    def get_outgoing_links(self, identifier: str) -> Tuple[str, ...]:
        return tuple(self._get(identifier).children)

    def add_link(self, identifier: str, timestamp: Optional[float] = None) -> bool:
        """Create a node for the identifier. Returns False if it already exists."""
        if self.has_link(identifier):
            return False
        self._nodes[identifier] = Node(identifier, timestamp)
        self.logger.debug(f"Added link {identifier}")
        return True

    def touch_link(self, identifier: str, timestamp: Optional[float] = None):
        """Overwrite a node's timestamp, defaulting to now."""
        self._get(identifier).update_timestamp(time.time() if timestamp is None else timestamp)

    def add_connection(self, from_id: str, to_id: str) -> bool:
        """Add an edge from_id -> to_id, creating missing endpoints.

        Returns True if either adjacency list changed.
        """
        self.add_link(from_id)
        self.add_link(to_id)

        added_child = self._nodes[from_id].add_child(to_id)
        added_parent = self._nodes[to_id].add_parent(from_id)

        if added_child or added_parent:
            self.logger.debug(f"Added connection {from_id} -> {to_id}")
        return added_child or added_parent

    def get_all_ranks(self) -> Dict[str, Tuple[float, float]]:
        """Get the raw and normalized rank for every node.

        Returns:
            Dict[str, Tuple[float, float]]: identifier -> (raw rank, normalized rank).
            Normalized ranks are scaled so the highest raw rank maps to 10.
            When every raw rank is 0 all normalized ranks are 0.
        """
        rank_max = max((node.rank for node in self._nodes.values()), default=0.0)
        if rank_max <= 0.0:
            return {identifier: (node.rank, 0.0) for identifier, node in self._nodes.items()}

        # divide before scaling so the top node lands on exactly 10
        return {
            identifier: (node.rank, node.rank / rank_max * 10.0)
            for identifier, node in self._nodes.items()
        }

    def get_stats(self) -> Dict[str, Any]:
        """Get graph statistics."""
        return {
            "total_nodes": len(self._nodes),
            "total_edges": sum(node.out_degree for node in self._nodes.values()),
            "damping_factor": self.damping_factor,
            "rank_threshold": self.rank_threshold,
        }

    def _incoming_rank(self, node: Node) -> float:
        incoming_sum = 0.0
        for parent_id in node.parents:
            parent = self._nodes[parent_id]
            if parent.out_degree == 0:
                self.logger.warning(
                    f"Parent {parent_id} of {node.identifier} has no outgoing links, skipping"
                )
                continue
            incoming_sum += parent.rank / parent.out_degree
        return incoming_sum

    def update_rank(self, identifier: str) -> PropagationResult:
        """Recompute rank starting at a node and push changes to its descendants.

        Nodes are processed breadth-first from a work queue. A node whose rank
        moved by less than ``rank_threshold`` (relative) is converged and its
        children are not queued. There is no visited set: a node reached again
        is recomputed against the current parent ranks.

        Parameters:
            identifier: The starting node.

        Returns:
            PropagationResult describing the run.

        Raises:
            NodeNotFoundError: if the starting node does not exist.
            PropagationLimitError: if ``max_propagation_steps`` is reached
                with work still queued. Ranks written so far are kept.
        """
        self._get(identifier)

        result = PropagationResult(start=identifier)
        updated = {}
        converged = {}
        work_queue: Deque[str] = deque([identifier])

        while work_queue:
            if self.max_propagation_steps and result.steps >= self.max_propagation_steps:
                result.updated = list(updated)
                result.converged = list(converged)
                self.logger.error(
                    f"Rank propagation from {identifier} hit the step limit "
                    f"({self.max_propagation_steps}), {len(work_queue)} nodes pending"
                )
                raise PropagationLimitError(identifier, result.steps, len(work_queue), result)

            current = self._nodes[work_queue.popleft()]
            result.steps += 1

            new_rank = (1 - self.damping_factor) + self.damping_factor * self._incoming_rank(current)
            old_rank = current.rank
            if old_rank == 0.0:
                relative_change = math.inf
            else:
                relative_change = abs(new_rank - old_rank) / old_rank

            current.update_rank(new_rank)
            updated[current.identifier] = None
            self.logger.debug(
                f"Rank of {current.identifier}: {old_rank:.6f} -> {new_rank:.6f}"
            )

            if relative_change < self.rank_threshold:
                converged[current.identifier] = None
            else:
                work_queue.extend(current.children)

        result.updated = list(updated)
        result.converged = list(converged)
        self.logger.info(
            f"Rank propagation from {identifier} finished: "
            f"{result.steps} steps, {len(result.updated)} nodes updated"
        )
        return result
