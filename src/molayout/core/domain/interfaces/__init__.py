"""Domain interfaces."""

from .layout_engine import LayoutEngine
from .coordinate_suggester import CoordinateSuggester, CoordinateSuggestionError

__all__ = ["LayoutEngine", "CoordinateSuggester", "CoordinateSuggestionError"]
