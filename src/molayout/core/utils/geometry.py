"""Geometric measurements on laid-out molecular graphs."""

from typing import Dict, Tuple

import numpy as np

from ..domain.models.molecular_graph import MolecularGraph


def z_range(graph: MolecularGraph) -> float:
    """Spread of the z coordinate across all atoms (0 for an empty graph)."""
    coords = graph.get_coordinates()
    if len(coords) == 0:
        return 0.0
    return float(np.ptp(coords[:, 2]))


def bond_lengths(graph: MolecularGraph) -> Dict[Tuple, float]:
    """
    Distances between bonded atoms.

    Args:
        graph: Molecular graph

    Returns:
        Mapping of (atom1_id, atom2_id) to distance, for bonds between existing atoms
    """
    positions = {atom.atom_id: np.asarray(atom.coordinates) for atom in graph.atoms}
    return {
        (bond.atom1_id, bond.atom2_id): float(
            np.linalg.norm(positions[bond.atom1_id] - positions[bond.atom2_id])
        )
        for bond in graph.valid_bonds()
    }


def displacements(before: MolecularGraph, after: MolecularGraph) -> np.ndarray:
    """Per-atom distance moved between two layouts of the same atoms."""
    if before.atom_ids() != after.atom_ids():
        raise ValueError("Graphs do not contain the same atoms in the same order")
    return np.linalg.norm(after.get_coordinates() - before.get_coordinates(), axis=1)


def centroid(graph: MolecularGraph) -> np.ndarray:
    coords = graph.get_coordinates()
    if len(coords) == 0:
        return np.zeros(3)
    return coords.mean(axis=0)
