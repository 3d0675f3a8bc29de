import pytest

from molayout.core.domain.models.atom import Atom
from molayout.core.domain.models.bond import Bond
from molayout.core.domain.models.molecular_graph import MolecularGraph
from molayout.core.domain.implementations.force_directed_layout import ForceDirectedLayout

# Allowed deviation from a rest length after relaxation
BOND_TOLERANCE = 0.35


@pytest.fixture
def engine():
    return ForceDirectedLayout(seed=42)


@pytest.fixture
def flat_water():
    """Water drawn in the xy-plane, as a 2D editor would leave it."""
    atoms = [
        Atom("o1", "O", (0.0, 0.0, 0.0)),
        Atom("h1", "H", (2.9, 2.0, 0.0)),
        Atom("h2", "H", (-2.9, 2.0, 0.0)),
    ]
    bonds = [Bond("o1", "h1", 1, "b1"), Bond("o1", "h2", 1, "b2")]
    return MolecularGraph(atoms, bonds, name="Water", graph_id="water")


@pytest.fixture
def flat_methane():
    atoms = [
        Atom("c", "C", (0.0, 0.0, 0.0)),
        Atom("h1", "H", (3.5, 0.0, 0.0)),
        Atom("h2", "H", (-3.5, 0.0, 0.0)),
        Atom("h3", "H", (0.0, 3.5, 0.0)),
        Atom("h4", "H", (0.0, -3.5, 0.0)),
    ]
    bonds = [Bond("c", f"h{i}", 1, f"b{i}") for i in range(1, 5)]
    return MolecularGraph(atoms, bonds, name="Methane", graph_id="methane")


@pytest.fixture
def collapsed_methane(flat_methane):
    """Methane connectivity with every atom at the origin."""
    return flat_methane.with_coordinates([[0.0, 0.0, 0.0]] * 5)
