"""Core domain models, interfaces and services for molecular layout."""

from .config import LayoutParameters
from .domain.models.atom import Atom
from .domain.models.bond import Bond, BondType
from .domain.models.molecular_graph import MolecularGraph
from .domain.models.layout_result import InitialState, LayoutResult
from .domain.interfaces.layout_engine import LayoutEngine
from .domain.interfaces.coordinate_suggester import (
    CoordinateSuggester,
    CoordinateSuggestionError,
)
from .domain.implementations.force_directed_layout import ForceDirectedLayout
from .services.layout_service import LayoutService

__all__ = [
    "LayoutParameters",
    "Atom",
    "Bond",
    "BondType",
    "MolecularGraph",
    "InitialState",
    "LayoutResult",
    "LayoutEngine",
    "CoordinateSuggester",
    "CoordinateSuggestionError",
    "ForceDirectedLayout",
    "LayoutService",
]
