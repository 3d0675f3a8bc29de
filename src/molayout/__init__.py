"""Force-directed 3D layout of molecular graphs."""

from .core import (
    Atom,
    Bond,
    BondType,
    ForceDirectedLayout,
    LayoutParameters,
    LayoutService,
    MolecularGraph,
)

__version__ = "0.1.0"

__all__ = [
    "Atom",
    "Bond",
    "BondType",
    "ForceDirectedLayout",
    "LayoutParameters",
    "LayoutService",
    "MolecularGraph",
]
