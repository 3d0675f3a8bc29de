"""Interface for molecular layout strategies."""

from abc import ABC, abstractmethod
from typing import Optional

from ..models.layout_result import LayoutResult
from ..models.molecular_graph import MolecularGraph


class LayoutEngine(ABC):
    """Abstract base class for layout strategies."""

    @abstractmethod
    def layout(
        self,
        graph: MolecularGraph,
        width_hint: Optional[float] = None,
        height_hint: Optional[float] = None,
    ) -> MolecularGraph:
        """
        Position the atoms of a molecular graph.

        Args:
            graph: Molecular graph whose positions may be meaningless
            width_hint: Layout area width, kept for 2D callers
            height_hint: Layout area height, kept for 2D callers

        Returns:
            Graph with the same atoms and bonds and new positions
        """
        pass

    def run(self, graph: MolecularGraph) -> LayoutResult:
        """Lay out a graph and report diagnostics, for engines that track them."""
        raise NotImplementedError(
            f"{type(self).__name__} does not report layout diagnostics"
        )
