"""Domain model for the outcome of a layout run."""

from dataclasses import dataclass
from enum import Enum

from .molecular_graph import MolecularGraph


class InitialState(Enum):
    """How the starting positions were prepared before integration."""

    EMPTY = "empty"
    SCRAMBLE = "scramble"
    JITTER = "jitter"


@dataclass
class LayoutResult:
    """Contains the laid-out graph and simulation diagnostics."""

    graph: MolecularGraph
    initial_state: InitialState
    iterations: int
    converged: bool
    final_temperature: float
    max_velocity_sq: float
