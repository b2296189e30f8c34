"""
PageRank-style scoring for directed graphs of linked resources,
with incremental propagation from a changed node.
"""

from .graph import GraphError, LinkGraph, NodeNotFoundError, PropagationLimitError
from .types import NodeSnapshot, PropagationResult

__version__ = "0.1.0"

__all__ = [
    'GraphError',
    'LinkGraph',
    'NodeNotFoundError',
    'NodeSnapshot',
    'PropagationLimitError',
    'PropagationResult'
]
