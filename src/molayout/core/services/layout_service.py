# src/molayout/core/services/layout_service.py
"""Service for laying out molecules, with or without suggested coordinates."""

import logging
import math
from typing import Any, Callable, Hashable, Iterable, List, Mapping, Optional, Sequence

from tqdm import tqdm

from ..domain.interfaces.coordinate_suggester import CoordinateSuggester
from ..domain.interfaces.layout_engine import LayoutEngine
from ..domain.implementations.force_directed_layout import ForceDirectedLayout
from ..domain.models.atom import Atom
from ..domain.models.bond import Bond
from ..domain.models.layout_result import LayoutResult
from ..domain.models.molecular_graph import MolecularGraph
from ..utils.benchmarking import PerformanceStats, timer

logger = logging.getLogger(__name__)


class LayoutService:
    """
    Entry point used by applications to position molecules.

    Wraps a layout engine and handles the cases around it: merging positions
    proposed by an external service, falling back to the engine alone when
    that service fails, and building graphs from bare connectivity records.
    """

    def __init__(self, engine: Optional[LayoutEngine] = None):
        """Initialize service with a layout engine (force-directed by default)."""
        self._engine = engine or ForceDirectedLayout()
        self.performance = PerformanceStats()

    @property
    def engine(self) -> LayoutEngine:
        return self._engine

    def layout(self, graph: MolecularGraph) -> MolecularGraph:
        """Lay out a graph with the configured engine and record the timing."""
        with timer("layout", self.performance, atoms=len(graph.atoms)):
            return self._engine.layout(graph)

    def run(self, graph: MolecularGraph) -> LayoutResult:
        """
        Lay out a graph and keep the engine diagnostics.

        Raises:
            NotImplementedError: If the engine does not report diagnostics
        """
        with timer("layout", self.performance, atoms=len(graph.atoms)):
            return self._engine.run(graph)

    def refine(
        self,
        graph: MolecularGraph,
        suggester: Optional[CoordinateSuggester] = None,
    ) -> MolecularGraph:
        """
        Lay out a graph, starting from suggested coordinates when available.

        Args:
            graph: Graph to position
            suggester: Optional external coordinate service

        Returns:
            Laid-out graph; when the suggester fails the raw graph is laid out
        """
        if suggester is None:
            return self.layout(graph)

        try:
            suggestions = suggester.suggest(graph)
        except Exception as e:
            logger.warning(
                "Coordinate suggestion failed for %s, laying out raw graph: %s",
                graph.name or graph.graph_id or "molecule",
                e,
            )
            return self.layout(graph)

        return self.layout(self.apply_suggestions(graph, suggestions))

    @staticmethod
    def apply_suggestions(
        graph: MolecularGraph, suggestions: Mapping[Hashable, Sequence[Any]]
    ) -> MolecularGraph:
        """
        Merge suggested coordinates into a graph by atom id.

        Atoms without a usable suggestion keep their current position.
        """
        atoms = []
        for atom in graph.atoms:
            coords = _as_coordinates(suggestions.get(atom.atom_id))
            atoms.append(atom.moved_to(*coords) if coords is not None else atom)
        return MolecularGraph(atoms, graph.bonds, name=graph.name, graph_id=graph.graph_id)

    def layout_from_connectivity(
        self,
        atoms: Iterable[Mapping[str, Any]],
        bonds: Iterable[Mapping[str, Any]],
        name: Optional[str] = None,
        graph_id: Optional[str] = None,
    ) -> MolecularGraph:
        """
        Build a graph from bare atom and bond records and lay it out.

        Records look like ``{"id": "c1", "element": "C"}`` and
        ``{"source": "c1", "target": "o1", "order": 2}``. Atoms without id or
        element and bonds to unknown atoms are discarded. Every atom starts
        at the origin, so the engine builds the geometry from scratch.
        """
        graph = self.graph_from_records(atoms, bonds, name=name, graph_id=graph_id)
        return self.layout(graph)

    @staticmethod
    def graph_from_records(
        atoms: Iterable[Mapping[str, Any]],
        bonds: Iterable[Mapping[str, Any]],
        name: Optional[str] = None,
        graph_id: Optional[str] = None,
    ) -> MolecularGraph:
        """Build an all-zero-coordinate graph from atom and bond records."""
        graph_atoms = [
            Atom(str(record["id"]), str(record["element"]))
            for record in atoms
            if _present(record.get("id")) and _present(record.get("element"))
        ]
        known = {atom.atom_id for atom in graph_atoms}

        graph_bonds = []
        for index, record in enumerate(bonds):
            source, target = str(record.get("source")), str(record.get("target"))
            if source not in known or target not in known:
                logger.debug("Dropping bond %s-%s to unknown atom", source, target)
                continue
            graph_bonds.append(
                Bond(
                    source,
                    target,
                    order=_as_order(record.get("order")),
                    bond_id=f"bond-{index}",
                )
            )
        return MolecularGraph(graph_atoms, graph_bonds, name=name, graph_id=graph_id)

    def layout_many(
        self, graphs: Iterable[MolecularGraph], progress: bool = False
    ) -> List[MolecularGraph]:
        """
        Lay out a batch of graphs.

        Args:
            graphs: Graphs to position
            progress: Show a tqdm progress bar

        Returns:
            Laid-out graphs in input order
        """
        return self._batch(self.layout, graphs, progress)

    def run_many(
        self, graphs: Iterable[MolecularGraph], progress: bool = False
    ) -> List[LayoutResult]:
        """Like layout_many, but keeps the diagnostics of every run."""
        return self._batch(self.run, graphs, progress)

    def _batch(self, step: Callable, graphs: Iterable[MolecularGraph], progress: bool) -> list:
        graphs = list(graphs)
        results = [
            step(graph)
            for graph in tqdm(graphs, desc="Laying out molecules", disable=not progress)
        ]
        logger.info("Layout timings:\n%s", self.performance.report())
        return results


def _as_coordinates(value: Any) -> Optional[tuple]:
    """Read an (x, y, z) suggestion from a sequence or an x/y/z mapping."""
    if value is None:
        return None
    if isinstance(value, dict):
        value = (value.get("x"), value.get("y"), value.get("z", 0.0))
    try:
        coords = tuple(float(v) for v in value)
    except (TypeError, ValueError):
        return None
    if len(coords) != 3 or not all(math.isfinite(c) for c in coords):
        return None
    return coords


def _as_order(value: Any) -> int:
    try:
        return int(value) if value else 1
    except (TypeError, ValueError):
        return 1


def _present(value: Any) -> bool:
    return value is not None and str(value) != ""
