"""File formats for molecules handled by the command line tools."""

from .molecule_json import graph_from_dict, graph_to_dict, read_molecule, write_molecule
from .pdb_writer import build_structure, conect_records, write_pdb

__all__ = [
    "graph_from_dict",
    "graph_to_dict",
    "read_molecule",
    "write_molecule",
    "build_structure",
    "conect_records",
    "write_pdb",
]
