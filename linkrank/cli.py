"""
Command line entry point: load an edge list, propagate ranks, print them.
"""

import argparse
import json
import sys
from typing import List, Optional

from .config import settings
from .graph import GraphError, LinkGraph
from .ingest import load_edge_list
from .utils.logger import app_logger, setup_logging


LOG_LEVELS = ["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="linkrank", description="Rank the links of a directed graph")
    parser.add_argument("edge_file", help="Edge list file, one 'from to' pair or single link per line")
    parser.add_argument("--start", action="append", default=None,
                        help="Identifier to propagate from (repeatable)")
    parser.add_argument("--damping", type=float, default=settings.damping_factor, help="Damping factor")
    parser.add_argument("--threshold", type=float, default=settings.rank_threshold,
                        help="Relative change below which a node is converged")
    parser.add_argument("--max-steps", type=int, default=settings.max_propagation_steps,
                        help="Propagation step limit per start node, 0 for none")
    parser.add_argument("--top", type=int, default=0, help="Only print the N highest ranked links")
    parser.add_argument("--json", action="store_true", help="Print JSON instead of a table")
    parser.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS, default=settings.log_level,
                        help="Log level")
    return parser


def default_starts(graph: LinkGraph) -> List[str]:
    """Nodes without incoming links, or every node if there are none."""
    nodes = graph.get_all_nodes()
    roots = [node.identifier for node in nodes if node.in_degree == 0]
    return roots or [node.identifier for node in nodes]


def format_table(ranks, top: int = 0) -> str:
    ordered = sorted(ranks.items(), key=lambda item: (-item[1][0], item[0]))
    if top > 0:
        ordered = ordered[:top]

    width = max([len("Link")] + [len(identifier) for identifier, _ in ordered])
    lines = [f"{'Link':<{width}}  {'Rank':>10}  {'Score':>6}"]
    lines.append("-" * len(lines[0]))
    for identifier, (raw, normalized) in ordered:
        lines.append(f"{identifier:<{width}}  {raw:>10.6f}  {normalized:>6.2f}")
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the command line tool."""
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level, settings.log_file)

    try:
        graph = LinkGraph(
            damping_factor=args.damping,
            rank_threshold=args.threshold,
            max_propagation_steps=args.max_steps,
        )
        load_edge_list(args.edge_file, graph)

        starts = args.start or default_starts(graph)
        results = [graph.update_rank(start) for start in starts]
    except (GraphError, FileNotFoundError, ValueError) as e:
        app_logger.error(f"{e}")
        return 1

    ranks = graph.get_all_ranks()
    if args.json:
        output = {
            "ranks": {
                identifier: {"rank": raw, "normalized": normalized}
                for identifier, (raw, normalized) in sorted(ranks.items())
            },
            "propagation": [result.to_dict() for result in results],
        }
        print(json.dumps(output, indent=2))
    else:
        print(format_table(ranks, args.top))
    return 0


if __name__ == "__main__":
    sys.exit(main())
