#!/usr/bin/env python3
# src/molayout/core/domain/models/atom.py

"""
Domain model representing an atom in a molecular graph.
"""

from dataclasses import dataclass, replace
from typing import Hashable, Tuple


@dataclass(frozen=True)
class Atom:
    """Represents an atom: an opaque identity, an element label and a position."""

    atom_id: Hashable
    element: str
    coordinates: Tuple[float, float, float] = (0.0, 0.0, 0.0)

    @property
    def x(self) -> float:
        return self.coordinates[0]

    @property
    def y(self) -> float:
        return self.coordinates[1]

    @property
    def z(self) -> float:
        return self.coordinates[2]

    def moved_to(self, x: float, y: float, z: float) -> "Atom":
        """Return a copy of this atom at a new position."""
        return replace(self, coordinates=(float(x), float(y), float(z)))
