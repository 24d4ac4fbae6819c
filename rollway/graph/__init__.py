"""NetworkX integration."""

from rollway.graph.annotate import annotate_graph, tags_from_data

__all__ = ["annotate_graph", "tags_from_data"]
