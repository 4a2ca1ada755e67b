"""General-purpose data structures: dependency graphs, sparse vectors, path trees and text coordinates."""

__version__ = "0.1.0"

__all__ = [
    "dependency_graph",
    "hash_map_tree",
    "index",
    "opt_vec",
    "text",
]