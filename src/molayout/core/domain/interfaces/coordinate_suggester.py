"""Interface for external services that propose atom positions."""

from abc import ABC, abstractmethod
from typing import Hashable, Mapping, Sequence

from ..models.molecular_graph import MolecularGraph


class CoordinateSuggestionError(RuntimeError):
    """Raised when a coordinate suggestion service cannot answer."""


class CoordinateSuggester(ABC):
    """Abstract base class for coordinate suggestion services."""

    @abstractmethod
    def suggest(self, graph: MolecularGraph) -> Mapping[Hashable, Sequence[float]]:
        """
        Propose 3D positions for the atoms of a graph.

        Args:
            graph: Molecular graph to position

        Returns:
            Mapping from atom id to an (x, y, z) sequence; atoms may be missing

        Raises:
            CoordinateSuggestionError: If the service is unavailable
        """
        pass
