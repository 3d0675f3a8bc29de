"""Core domain models and interfaces."""

from .models.atom import Atom
from .models.bond import Bond, BondType
from .models.molecular_graph import MolecularGraph
from .models.layout_result import InitialState, LayoutResult
from .interfaces.layout_engine import LayoutEngine
from .interfaces.coordinate_suggester import (
    CoordinateSuggester,
    CoordinateSuggestionError,
)

__all__ = [
    "Atom",
    "Bond",
    "BondType",
    "MolecularGraph",
    "InitialState",
    "LayoutResult",
    "LayoutEngine",
    "CoordinateSuggester",
    "CoordinateSuggestionError",
]
