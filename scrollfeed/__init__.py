"""ScrollFeed - incremental segment loading for scrollable lists."""

__version__ = "3.1.0"
