# src/molayout/infrastructure/io/molecule_json.py
"""Read and write molecule documents as JSON."""

import json
import math
from pathlib import Path
from typing import Any, Dict, Union

from ...core.domain.models.atom import Atom
from ...core.domain.models.bond import Bond
from ...core.domain.models.molecular_graph import MolecularGraph


def graph_from_dict(document: Dict[str, Any]) -> MolecularGraph:
    """
    Build a MolecularGraph from a molecule document.

    Documents look like::

        {"id": "m1", "name": "Water",
         "atoms": [{"id": "o1", "element": "O", "x": 0, "y": 0, "z": 0}, ...],
         "bonds": [{"id": "b1", "sourceAtomId": "o1", "targetAtomId": "h1",
                    "order": 1}, ...]}

    Missing coordinates are read as 0 and a missing order as 1. Bonds are kept
    as given, including ones that reference unknown atoms.

    Raises:
        ValueError: If an atom or bond lacks its identifying keys
    """
    atoms = []
    for record in document.get("atoms") or []:
        try:
            atoms.append(
                Atom(
                    record["id"],
                    str(record["element"]),
                    (
                        _coordinate(record.get("x")),
                        _coordinate(record.get("y")),
                        _coordinate(record.get("z")),
                    ),
                )
            )
        except KeyError as e:
            raise ValueError(f"Atom record missing key {e}: {record}") from e

    bonds = []
    for record in document.get("bonds") or []:
        try:
            bonds.append(
                Bond(
                    record["sourceAtomId"],
                    record["targetAtomId"],
                    order=int(record.get("order") or 1),
                    bond_id=record.get("id"),
                )
            )
        except KeyError as e:
            raise ValueError(f"Bond record missing key {e}: {record}") from e

    return MolecularGraph(
        atoms, bonds, name=document.get("name"), graph_id=document.get("id")
    )


def graph_to_dict(graph: MolecularGraph) -> Dict[str, Any]:
    """Serialize a MolecularGraph into a molecule document."""
    document: Dict[str, Any] = {}
    if graph.graph_id is not None:
        document["id"] = graph.graph_id
    if graph.name is not None:
        document["name"] = graph.name
    document["atoms"] = [
        {"id": atom.atom_id, "element": atom.element, "x": atom.x, "y": atom.y, "z": atom.z}
        for atom in graph.atoms
    ]
    document["bonds"] = []
    for index, bond in enumerate(graph.bonds):
        document["bonds"].append(
            {
                "id": bond.bond_id if bond.bond_id is not None else f"bond-{index}",
                "sourceAtomId": bond.atom1_id,
                "targetAtomId": bond.atom2_id,
                "order": bond.order,
            }
        )
    return document


def read_molecule(path: Union[str, Path]) -> MolecularGraph:
    """Load a molecule document; the file stem is used when it has no id."""
    path = Path(path)
    try:
        with open(path, "r") as f:
            document = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {path}: {e}") from e
    if not isinstance(document, dict):
        raise ValueError(f"{path} does not contain a molecule object")

    graph = graph_from_dict(document)
    if graph.graph_id is None:
        graph.graph_id = path.stem
    return graph


def write_molecule(graph: MolecularGraph, path: Union[str, Path]) -> None:
    with open(path, "w") as f:
        json.dump(graph_to_dict(graph), f, indent=2)


def _coordinate(value: Any) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0
