"""Force-directed 3D layout of molecular graphs with simulated annealing."""

import logging
from typing import Optional, Tuple

import numpy as np

from ..interfaces.layout_engine import LayoutEngine
from ..models.layout_result import InitialState, LayoutResult
from ..models.molecular_graph import MolecularGraph
from ...config import LayoutParameters

logger = logging.getLogger(__name__)


class ForceDirectedLayout(LayoutEngine):
    """
    Relax a molecular graph into a non-degenerate 3D arrangement.

    Every pair of atoms repels with an inverse-square force, every bond is a
    linear spring pulling towards the rest length of its order and a weak
    gravity keeps the structure near the origin. Speeds are capped by a
    temperature that decays every iteration, so early iterations explore and
    late ones only settle.

    Each call builds its own position, velocity and force arrays; the engine
    itself only holds the parameters and the seed.
    """

    def __init__(
        self,
        parameters: Optional[LayoutParameters] = None,
        seed: Optional[int] = None,
    ):
        """
        Initialize the engine.

        Args:
            parameters: Simulation constants, defaults to LayoutParameters()
            seed: Seed for symmetry breaking; None draws fresh entropy per call
        """
        self.parameters = parameters or LayoutParameters()
        self.seed = seed

    def layout(
        self,
        graph: MolecularGraph,
        width_hint: Optional[float] = None,
        height_hint: Optional[float] = None,
    ) -> MolecularGraph:
        """Position the atoms of a graph; the size hints are ignored."""
        return self.run(graph).graph

    def run(
        self, graph: MolecularGraph, rng: Optional[np.random.Generator] = None
    ) -> LayoutResult:
        """
        Lay out a graph and report how the simulation went.

        Args:
            graph: Input graph; its positions may be zero, flat or collinear
            rng: Random source for this call, overrides the engine seed

        Returns:
            LayoutResult with the repositioned graph and diagnostics
        """
        params = self.parameters
        if not graph.atoms:
            return LayoutResult(
                graph=graph,
                initial_state=InitialState.EMPTY,
                iterations=0,
                converged=True,
                final_temperature=params.initial_temperature,
                max_velocity_sq=0.0,
            )

        if rng is None:
            rng = np.random.default_rng(self.seed)

        # Non-finite input coordinates are read as the origin
        positions = np.nan_to_num(
            graph.get_coordinates(), nan=0.0, posinf=0.0, neginf=0.0
        )
        initial_state = self.classify(positions)
        positions = self._initial_positions(positions, initial_state, rng)

        sources, targets, rest_lengths = self._edge_arrays(graph)
        pair_i, pair_j = np.triu_indices(len(positions), k=1)
        velocities = np.zeros_like(positions)

        temperature = params.initial_temperature
        max_velocity_sq = 0.0
        converged = False
        iteration = 0
        for iteration in range(1, params.max_iterations + 1):
            forces = self._forces(
                positions, pair_i, pair_j, sources, targets, rest_lengths
            )
            velocities = (velocities + forces) * params.damping

            speed_sq = np.einsum("ij,ij->i", velocities, velocities)
            too_fast = speed_sq > temperature * temperature
            if np.any(too_fast):
                scale = temperature / np.sqrt(speed_sq[too_fast])
                velocities[too_fast] *= scale[:, np.newaxis]
            positions += velocities

            max_velocity_sq = float(speed_sq.max())
            temperature *= params.cooling_factor
            if (
                temperature < params.min_temperature
                and max_velocity_sq < params.min_velocity_sq
            ):
                converged = True
                break

        positions -= positions.mean(axis=0)
        logger.debug(
            "Layout of %d atoms (%s start) stopped after %d iterations, "
            "temperature %.4g, converged=%s",
            len(positions),
            initial_state.value,
            iteration,
            temperature,
            converged,
        )

        laid_out = MolecularGraph(
            [atom.moved_to(*xyz) for atom, xyz in zip(graph.atoms, positions)],
            graph.valid_bonds(),
            name=graph.name,
            graph_id=graph.graph_id,
        )
        return LayoutResult(
            graph=laid_out,
            initial_state=initial_state,
            iterations=iteration,
            converged=converged,
            final_temperature=temperature,
            max_velocity_sq=max_velocity_sq,
        )

    def classify(self, positions: np.ndarray) -> InitialState:
        """Decide whether the starting positions are flat/linear and need scrambling."""
        if len(positions) == 0:
            return InitialState.EMPTY
        z_range = float(np.ptp(positions[:, 2]))
        if len(positions) > 2 and z_range < self.parameters.degeneracy_threshold:
            return InitialState.SCRAMBLE
        return InitialState.JITTER

    def scramble(self, n_atoms: int) -> np.ndarray:
        """
        Place atoms on a sphere using golden-angle increments.

        The polar coordinate runs linearly from +1 to -1 so every atom gets a
        distinct point and any four consecutive points are non-coplanar.
        """
        params = self.parameters
        index = np.arange(n_atoms, dtype=float)
        y_sphere = 1.0 - (index / max(n_atoms - 1, 1)) * 2.0
        theta = index * params.golden_angle
        radius_at_y = np.sqrt(np.clip(1.0 - y_sphere * y_sphere, 0.0, None))

        return params.scramble_radius * np.column_stack(
            (np.cos(theta) * radius_at_y, y_sphere, np.sin(theta) * radius_at_y)
        )

    def _initial_positions(
        self,
        positions: np.ndarray,
        initial_state: InitialState,
        rng: np.random.Generator,
    ) -> np.ndarray:
        if initial_state is InitialState.SCRAMBLE:
            logger.debug("Input of %d atoms is flat, scrambling", len(positions))
            return self.scramble(len(positions))
        jitter = self.parameters.jitter
        return positions + rng.uniform(-jitter, jitter, size=positions.shape)

    def _edge_arrays(
        self, graph: MolecularGraph
    ) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Index arrays and rest lengths of the bonds between existing atoms."""
        index = {atom.atom_id: i for i, atom in enumerate(graph.atoms)}
        sources, targets, rest_lengths = [], [], []
        for bond in graph.bonds:
            if bond.atom1_id not in index or bond.atom2_id not in index:
                continue
            sources.append(index[bond.atom1_id])
            targets.append(index[bond.atom2_id])
            rest_lengths.append(self.parameters.rest_length(bond.order))

        dropped = len(graph.bonds) - len(sources)
        if dropped:
            logger.debug("Ignoring %d bonds that reference unknown atoms", dropped)
        return (
            np.array(sources, dtype=int),
            np.array(targets, dtype=int),
            np.array(rest_lengths, dtype=float),
        )

    def _forces(
        self,
        positions: np.ndarray,
        pair_i: np.ndarray,
        pair_j: np.ndarray,
        sources: np.ndarray,
        targets: np.ndarray,
        rest_lengths: np.ndarray,
    ) -> np.ndarray:
        """Total force on every atom for the current positions."""
        params = self.parameters
        forces = np.zeros_like(positions)

        # Repulsion, each unordered pair once
        delta = positions[pair_i] - positions[pair_j]
        dist_sq = np.maximum(np.einsum("ij,ij->i", delta, delta), params.distance_epsilon_sq)
        dist = np.sqrt(dist_sq)
        pair_force = delta * (params.repulsion / (dist_sq * dist))[:, np.newaxis]
        np.add.at(forces, pair_i, pair_force)
        np.add.at(forces, pair_j, -pair_force)

        # Bond springs
        delta = positions[targets] - positions[sources]
        dist = np.maximum(
            np.sqrt(np.einsum("ij,ij->i", delta, delta)), params.bond_distance_floor
        )
        stretch = params.spring * (dist - rest_lengths)
        spring_force = delta * (stretch / dist)[:, np.newaxis]
        np.add.at(forces, sources, spring_force)
        np.add.at(forces, targets, -spring_force)

        # Centering gravity
        forces -= positions * params.gravity
        return forces
