# src/molayout/infrastructure/io/pdb_writer.py
"""Export laid-out molecular graphs as PDB files."""

from collections import defaultdict
from pathlib import Path
from typing import Dict, List, TextIO, Union

import numpy as np
from Bio.PDB.PDBIO import PDBIO
from Bio.PDB.Structure import Structure
from Bio.PDB.StructureBuilder import StructureBuilder

from ...core.domain.models.molecular_graph import MolecularGraph

# Atom names are at most four characters and must be unique per residue
ATOMS_PER_RESIDUE = 100


def build_structure(graph: MolecularGraph, residue_name: str = "MOL") -> Structure:
    """
    Convert a MolecularGraph into a Biopython Structure.

    All atoms go into hetero residues of chain A, one residue per hundred atoms,
    and are named after their element and index within the residue.
    """
    builder = StructureBuilder()
    builder.init_structure(str(graph.graph_id or graph.name or "molecule"))
    builder.init_model(0)
    builder.init_chain("A")
    builder.init_seg("    ")

    for index, atom in enumerate(graph.atoms):
        if index % ATOMS_PER_RESIDUE == 0:
            builder.init_residue(residue_name, "H", index // ATOMS_PER_RESIDUE + 1, " ")
        element = atom.element[:2].upper()
        name = f"{element}{index % ATOMS_PER_RESIDUE}"
        builder.init_atom(
            name,
            np.array(atom.coordinates, dtype=float),
            0.0,
            1.0,
            " ",
            f"{name:<4s}",
            serial_number=index + 1,
            element=element,
        )

    return builder.get_structure()


def conect_records(graph: MolecularGraph) -> List[str]:
    """CONECT lines for the valid bonds, with serials following atom order."""
    serials = {atom.atom_id: index + 1 for index, atom in enumerate(graph.atoms)}
    partners: Dict[int, List[int]] = defaultdict(list)
    for bond in graph.valid_bonds():
        a, b = serials[bond.atom1_id], serials[bond.atom2_id]
        if a == b:
            continue
        partners[a].append(b)
        partners[b].append(a)

    lines = []
    for serial in sorted(partners):
        bonded = partners[serial]
        for start in range(0, len(bonded), 4):
            chunk = "".join(f"{p:5d}" for p in bonded[start : start + 4])
            lines.append(f"CONECT{serial:5d}{chunk}\n")
    return lines


def write_pdb(graph: MolecularGraph, target: Union[str, Path, TextIO]) -> None:
    """
    Write a graph as a PDB file with HETATM and CONECT records.

    Args:
        graph: Laid-out molecular graph
        target: Path or open text handle
    """
    if isinstance(target, (str, Path)):
        with open(target, "w") as f:
            _write(graph, f)
    else:
        _write(graph, target)


def _write(graph: MolecularGraph, fhandle: TextIO) -> None:
    io = PDBIO()
    io.set_structure(build_structure(graph))
    io.save(fhandle, write_end=False)
    for line in conect_records(graph):
        fhandle.write(line)
    fhandle.write("END\n")
