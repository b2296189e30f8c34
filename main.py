#!/usr/bin/env python3
"""
Link Rank - Command Line Entry Point

Loads a directed graph of links from an edge-list file, propagates
PageRank-style ranks through it and prints the resulting scores.
"""

import sys

from linkrank.cli import main


if __name__ == "__main__":
    sys.exit(main())
