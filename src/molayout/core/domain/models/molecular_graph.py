#!/usr/bin/env python3
# src/molayout/core/domain/models/molecular_graph.py

"""
Domain model representing a molecular structure as a graph.
"""

from typing import Hashable, List, Optional, Sequence

import networkx as nx
import numpy as np

from .atom import Atom
from .bond import Bond


class MolecularGraph:
    """Graph representation of a molecular structure."""

    def __init__(
        self,
        atoms: Sequence[Atom],
        bonds: Sequence[Bond],
        name: Optional[str] = None,
        graph_id: Optional[str] = None,
    ):
        """
        Initialize a MolecularGraph.

        Args:
            atoms: Atoms in a fixed order; ids are assumed to be unique
            bonds: Bonds between atoms of this graph
            name: Optional display name, passed through unchanged
            graph_id: Optional identifier, passed through unchanged
        """
        self.atoms: List[Atom] = list(atoms)
        self.bonds: List[Bond] = list(bonds)
        self.name = name
        self.graph_id = graph_id

    def __len__(self) -> int:
        return len(self.atoms)

    def __repr__(self) -> str:
        return (
            f"MolecularGraph(name={self.name!r}, atoms={len(self.atoms)}, "
            f"bonds={len(self.bonds)})"
        )

    def atom_ids(self) -> List[Hashable]:
        return [atom.atom_id for atom in self.atoms]

    def get_coordinates(self) -> np.ndarray:
        """Get coordinates of all atoms in the graph.

        Returns:
            numpy array of shape (n_atoms, 3) containing xyz coordinates
        """
        if not self.atoms:
            return np.zeros((0, 3), dtype=float)
        return np.array([atom.coordinates for atom in self.atoms], dtype=float)

    def with_coordinates(self, coordinates: np.ndarray) -> "MolecularGraph":
        """
        Create a copy of this graph with new atom positions.

        Args:
            coordinates: Array of shape (n_atoms, 3), in atom order

        Returns:
            New MolecularGraph with the same atoms, bonds, name and id
        """
        coordinates = np.asarray(coordinates, dtype=float)
        if coordinates.shape != (len(self.atoms), 3):
            raise ValueError(
                f"Expected coordinates of shape ({len(self.atoms)}, 3), "
                f"got {coordinates.shape}"
            )
        atoms = [atom.moved_to(*xyz) for atom, xyz in zip(self.atoms, coordinates)]
        return MolecularGraph(atoms, self.bonds, name=self.name, graph_id=self.graph_id)

    def valid_bonds(self) -> List[Bond]:
        """Bonds whose endpoints both exist in this graph, in input order."""
        ids = set(self.atom_ids())
        return [
            bond
            for bond in self.bonds
            if bond.atom1_id in ids and bond.atom2_id in ids
        ]

    def to_networkx(self) -> nx.Graph:
        """Create a NetworkX graph; dangling bonds are left out."""
        G = nx.Graph()
        for atom in self.atoms:
            G.add_node(atom.atom_id, element=atom.element, coord=atom.coordinates)
        for bond in self.valid_bonds():
            G.add_edge(bond.atom1_id, bond.atom2_id, order=bond.order)
        return G

    def fragment_count(self) -> int:
        """Number of disconnected fragments (isolated atoms count as one each)."""
        if not self.atoms:
            return 0
        return nx.number_connected_components(self.to_networkx())
