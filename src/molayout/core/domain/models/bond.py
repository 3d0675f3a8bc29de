#!/usr/bin/env python3
# src/molayout/core/domain/models/bond.py

"""
Domain model representing a chemical bond between atoms.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Hashable, Optional


class BondType(Enum):
    """Enumeration of the bond types the layout distinguishes."""

    SINGLE = 1
    DOUBLE = 2
    TRIPLE = 3

    @classmethod
    def from_order(cls, order: int) -> "BondType":
        """Map an integer bond order to a bond type; anything unknown is single."""
        try:
            return cls(int(order))
        except (TypeError, ValueError):
            return cls.SINGLE


@dataclass(frozen=True)
class Bond:
    """Represents an unordered bond between two atoms."""

    atom1_id: Hashable
    atom2_id: Hashable
    order: int = 1
    bond_id: Optional[str] = None

    @property
    def bond_type(self) -> BondType:
        return BondType.from_order(self.order)
