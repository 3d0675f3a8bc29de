"""Domain model classes."""

from .atom import Atom
from .bond import Bond, BondType
from .molecular_graph import MolecularGraph
from .layout_result import InitialState, LayoutResult

__all__ = [
    "Atom",
    "Bond",
    "BondType",
    "MolecularGraph",
    "InitialState",
    "LayoutResult",
]
