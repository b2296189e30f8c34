"""
Load links and connections from a plain edge-list file.

One entry per line: either a single identifier or ``from to``.
Blank lines and lines starting with ``#`` are ignored.
"""
from pathlib import Path
from typing import Optional, Tuple, Union

from ..graph.link_graph import LinkGraph
from ..utils.logger import app_logger

logger = app_logger.bind(component="edge_list")


def parse_edge_line(line: str) -> Optional[Tuple[str, ...]]:
    """Split one line into identifiers.

    Returns None for blank and comment lines, otherwise a tuple of one or
    more identifiers. Validation of the token count is left to the caller.
    """
    stripped = line.strip()
    if not stripped or stripped.startswith("#"):
        return None
    return tuple(stripped.split())


def load_edge_list(path: Union[str, Path], graph: LinkGraph) -> int:
    """Feed an edge-list file into the graph.

    Returns:
        int: number of connections that were actually added.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Edge list not found: {path}")

    added = 0
    with open(path, 'r', encoding='utf-8') as f:
        for line_number, line in enumerate(f, start=1):
            tokens = parse_edge_line(line)
            if tokens is None:
                continue
            if len(tokens) == 1:
                graph.add_link(tokens[0])
            elif len(tokens) == 2:
                if graph.add_connection(tokens[0], tokens[1]):
                    added += 1
            else:
                logger.warning(f"{path}:{line_number}: expected 1 or 2 identifiers, got {len(tokens)}")

    logger.info(f"Loaded {len(graph)} links and {added} connections from {path}")
    return added
