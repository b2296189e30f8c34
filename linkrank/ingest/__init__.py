from .edge_list import load_edge_list, parse_edge_line

__all__ = ['load_edge_list', 'parse_edge_line']
