from typing import List, Dict, Any, Tuple
from dataclasses import dataclass, field


@dataclass(frozen=True)
class NodeSnapshot:
    """Read-only view of a node held by the link graph."""
    identifier: str
    rank: float
    timestamp: float
    children: Tuple[str, ...] = ()
    parents: Tuple[str, ...] = ()

    @property
    def in_degree(self) -> int:
        return len(self.parents)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "identifier": self.identifier,
            "rank": self.rank,
            "timestamp": self.timestamp,
            "children": list(self.children),
            "parents": list(self.parents),
        }


@dataclass
class PropagationResult:
    """Summary of one rank propagation run."""
    start: str
    steps: int = 0
    updated: List[str] = field(default_factory=list)
    converged: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "start": self.start,
            "steps": self.steps,
            "updated": list(self.updated),
            "converged": list(self.converged),
        }
