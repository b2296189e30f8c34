"""
Graph module holding the link graph and its rank propagation.
"""

from .errors import GraphError, NodeNotFoundError, PropagationLimitError
from .link_graph import LinkGraph
from .node import Node

__all__ = [
    'GraphError',
    'LinkGraph',
    'Node',
    'NodeNotFoundError',
    'PropagationLimitError'
]
