"""Include graph recorded while parsing xcconfig files."""

from .include_graph import IncludeGraph

__all__ = ["IncludeGraph"]
