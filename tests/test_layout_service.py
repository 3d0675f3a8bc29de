import logging

import numpy as np
import pytest

from molayout.core.domain.implementations.force_directed_layout import ForceDirectedLayout
from molayout.core.domain.interfaces.coordinate_suggester import (
    CoordinateSuggester,
    CoordinateSuggestionError,
)
from molayout.core.domain.interfaces.layout_engine import LayoutEngine
from molayout.core.domain.models.layout_result import InitialState
from molayout.core.domain.models.molecular_graph import MolecularGraph
from molayout.core.services.layout_service import LayoutService
from molayout.core.utils.geometry import z_range


class RecordingEngine(LayoutEngine):
    """Returns its input unchanged and remembers what it was given."""

    def __init__(self):
        self.seen = []

    def layout(self, graph, width_hint=None, height_hint=None):
        self.seen.append(graph)
        return graph


class FixedSuggester(CoordinateSuggester):
    def __init__(self, coordinates):
        self.coordinates = coordinates

    def suggest(self, graph):
        return self.coordinates


class UnavailableSuggester(CoordinateSuggester):
    def suggest(self, graph):
        raise CoordinateSuggestionError("service unreachable")


@pytest.fixture
def recording_service():
    engine = RecordingEngine()
    return LayoutService(engine), engine


def test_default_engine_is_force_directed():
    assert isinstance(LayoutService().engine, ForceDirectedLayout)


def test_refine_without_suggester_matches_engine(flat_water):
    service = LayoutService(ForceDirectedLayout(seed=9))
    expected = ForceDirectedLayout(seed=9).layout(flat_water)

    result = service.refine(flat_water)
    assert np.array_equal(result.get_coordinates(), expected.get_coordinates())


def test_suggested_coordinates_are_merged_by_id(recording_service, flat_water):
    service, engine = recording_service
    suggester = FixedSuggester(
        {
            "o1": (1.0, 2.0, 3.0),
            "h1": {"x": 4.0, "y": 5.0, "z": 6.0},
            "h2": ("a", "b", "c"),
            "unknown": (7.0, 8.0, 9.0),
        }
    )

    service.refine(flat_water, suggester)

    merged = engine.seen[0]
    assert merged.atoms[0].coordinates == (1.0, 2.0, 3.0)
    assert merged.atoms[1].coordinates == (4.0, 5.0, 6.0)
    # unusable suggestion keeps the previous position
    assert merged.atoms[2].coordinates == flat_water.atoms[2].coordinates
    assert merged.bonds == flat_water.bonds


def test_failed_suggestion_falls_back_to_raw_graph(recording_service, flat_water, caplog):
    service, engine = recording_service

    with caplog.at_level(logging.WARNING):
        result = service.refine(flat_water, UnavailableSuggester())

    assert engine.seen == [flat_water]
    assert result is flat_water
    assert "service unreachable" in caplog.text


def test_fallback_still_produces_3d_layout(flat_water):
    service = LayoutService(ForceDirectedLayout(seed=1))
    result = service.refine(flat_water, UnavailableSuggester())

    assert len(result.atoms) == 3
    assert z_range(result) > 0.5


def test_graph_from_records_discards_incomplete_data():
    atoms = [
        {"id": "c1", "element": "C"},
        {"id": "o1", "element": "O"},
        {"id": "", "element": "H"},
        {"element": "N"},
        {"id": "x1"},
    ]
    bonds = [
        {"source": "c1", "target": "o1", "order": 2},
        {"source": "c1", "target": "n9", "order": 1},
        {"source": "o1", "target": "c1"},
    ]

    graph = LayoutService.graph_from_records(atoms, bonds, name="CO")

    assert graph.atom_ids() == ["c1", "o1"]
    assert [(b.atom1_id, b.atom2_id, b.order) for b in graph.bonds] == [
        ("c1", "o1", 2),
        ("o1", "c1", 1),
    ]
    assert np.array_equal(graph.get_coordinates(), np.zeros((2, 3)))


def test_layout_from_connectivity_builds_geometry():
    atoms = [{"id": "c", "element": "C"}] + [
        {"id": f"h{i}", "element": "H"} for i in range(4)
    ]
    bonds = [{"source": "c", "target": f"h{i}", "order": 1} for i in range(4)]
    service = LayoutService(ForceDirectedLayout(seed=0))

    result = service.layout_from_connectivity(atoms, bonds, name="Methane", graph_id="p-0")

    assert result.name == "Methane"
    assert result.graph_id == "p-0"
    assert len(result.bonds) == 4
    assert z_range(result) > 0.5


def test_layout_many_keeps_order_and_records_timings(flat_water, flat_methane):
    service = LayoutService(ForceDirectedLayout(seed=2))

    results = service.layout_many([flat_water, flat_methane, MolecularGraph([], [])])

    assert [g.graph_id for g in results] == ["water", "methane", None]
    stats = service.performance.get_stats("layout")
    assert stats.count == 3
    assert stats.atoms_processed == 8


def test_zero_atom_id_is_kept():
    atoms = [{"id": 0, "element": "C"}, {"id": 1, "element": "O"}]
    bonds = [{"source": 0, "target": 1, "order": 2}]

    graph = LayoutService.graph_from_records(atoms, bonds)

    assert graph.atom_ids() == ["0", "1"]
    assert [(b.atom1_id, b.atom2_id, b.order) for b in graph.bonds] == [("0", "1", 2)]


def test_run_keeps_diagnostics(flat_methane):
    service = LayoutService(ForceDirectedLayout(seed=4))

    result = service.run(flat_methane)

    assert result.initial_state is InitialState.SCRAMBLE
    assert result.converged
    assert 0 < result.iterations <= service.engine.parameters.max_iterations
    assert service.performance.get_stats("layout").count == 1


def test_run_many_returns_results_in_order(flat_water, flat_methane):
    service = LayoutService(ForceDirectedLayout(seed=2))

    results = service.run_many([flat_water, flat_methane])

    assert [r.graph.graph_id for r in results] == ["water", "methane"]
    assert all(r.converged for r in results)


def test_run_needs_engine_with_diagnostics(recording_service, flat_water):
    service, _ = recording_service
    with pytest.raises(NotImplementedError):
        service.run(flat_water)
