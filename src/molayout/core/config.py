# src/molayout/core/config.py
"""Tuning constants for the force-directed layout."""

import json
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Union

from .domain.models.bond import BondType


@dataclass(frozen=True)
class LayoutParameters:
    """
    One coherent set of simulation constants.

    Repulsion and spring stiffness are tuned together: the repulsion is strong
    enough to open bond angles well past the pull of the centering gravity,
    the springs stiff enough to hold bonds within a few tenths of their rest
    length. The starting temperature lets atoms thousands of units apart
    close the gap before the cap cools below the spring forces.
    """

    # Force constants
    repulsion: float = 1.5
    spring: float = 1.0
    gravity: float = 0.01
    damping: float = 0.85

    # Rest lengths per bond order
    single_bond_length: float = 3.5
    double_bond_length: float = 3.0
    triple_bond_length: float = 2.5

    # Annealing schedule
    initial_temperature: float = 80.0
    cooling_factor: float = 0.97
    min_temperature: float = 0.1
    min_velocity_sq: float = 0.01
    max_iterations: int = 600

    # Symmetry breaking
    scramble_radius: float = 5.0
    golden_angle: float = 2.39996
    jitter: float = 0.1
    degeneracy_threshold: float = 0.5

    # Singularity guards
    distance_epsilon_sq: float = 0.01
    bond_distance_floor: float = 0.1

    def __post_init__(self):
        """Validate the parameter set."""
        positive = (
            "repulsion",
            "spring",
            "single_bond_length",
            "double_bond_length",
            "triple_bond_length",
            "initial_temperature",
            "scramble_radius",
            "distance_epsilon_sq",
            "bond_distance_floor",
        )
        for name in positive:
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")
        for name in ("gravity", "jitter", "degeneracy_threshold", "min_temperature", "min_velocity_sq"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative, got {getattr(self, name)}")
        for name in ("damping", "cooling_factor"):
            value = getattr(self, name)
            if not 0.0 < value < 1.0:
                raise ValueError(f"{name} must lie in (0, 1), got {value}")
        if self.max_iterations < 1:
            raise ValueError(f"max_iterations must be at least 1, got {self.max_iterations}")
        if not (
            self.single_bond_length > self.double_bond_length > self.triple_bond_length
        ):
            raise ValueError(
                "Bond lengths must decrease with bond order "
                f"({self.single_bond_length}, {self.double_bond_length}, "
                f"{self.triple_bond_length})"
            )

    def rest_length(self, order: int) -> float:
        """Target bond length for a bond order; unknown orders use the single length."""
        bond_type = BondType.from_order(order)
        if bond_type is BondType.DOUBLE:
            return self.double_bond_length
        if bond_type is BondType.TRIPLE:
            return self.triple_bond_length
        return self.single_bond_length

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, values: Dict[str, Any]) -> "LayoutParameters":
        """
        Build parameters from a partial mapping; missing keys keep their defaults.

        Raises:
            ValueError: If a key is not a known parameter or a value is invalid
        """
        known = {f.name: f.type for f in fields(cls)}
        unknown = sorted(set(values) - set(known))
        if unknown:
            raise ValueError(f"Unknown layout parameters: {', '.join(unknown)}")
        converted = {}
        for key, value in values.items():
            converted[key] = int(value) if key == "max_iterations" else float(value)
        return cls(**converted)

    @classmethod
    def from_json_file(cls, path: Union[str, Path]) -> "LayoutParameters":
        """Load a partial parameter override from a JSON object file."""
        path = Path(path)
        try:
            with open(path, "r") as f:
                values = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in parameter file {path}: {e}") from e
        if not isinstance(values, dict):
            raise ValueError(f"Parameter file {path} must contain a JSON object")
        return cls.from_dict(values)
