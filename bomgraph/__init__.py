"""Bill-of-materials models, in-memory repository, graph, cycle detection and traversal."""

__version__ = "0.1.0"
__all__ = ["__version__"]