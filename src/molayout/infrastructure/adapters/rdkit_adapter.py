"""Build connectivity-only molecular graphs with RDKit."""

import logging
from typing import Optional

from rdkit import Chem

from ...core.domain.models.atom import Atom
from ...core.domain.models.bond import Bond
from ...core.domain.models.molecular_graph import MolecularGraph

logger = logging.getLogger(__name__)

_BOND_ORDERS = {
    Chem.BondType.SINGLE: 1,
    Chem.BondType.DOUBLE: 2,
    Chem.BondType.TRIPLE: 3,
}


def graph_from_mol(mol: Chem.Mol, name: Optional[str] = None) -> MolecularGraph:
    """
    Convert an RDKit Mol to a MolecularGraph with every atom at the origin.

    Atom ids are the RDKit atom indices. Aromatic bonds should be kekulized
    beforehand; any bond type without an integer order is read as single.

    Args:
        mol: RDKit molecule
        name: Optional name for the graph

    Returns:
        MolecularGraph carrying only connectivity
    """
    atoms = [Atom(atom.GetIdx(), atom.GetSymbol()) for atom in mol.GetAtoms()]
    bonds = []
    for bond in mol.GetBonds():
        order = _BOND_ORDERS.get(bond.GetBondType())
        if order is None:
            logger.debug(
                "Bond %d has type %s, using single bond", bond.GetIdx(), bond.GetBondType()
            )
            order = 1
        bonds.append(
            Bond(
                bond.GetBeginAtomIdx(),
                bond.GetEndAtomIdx(),
                order=order,
                bond_id=f"bond-{bond.GetIdx()}",
            )
        )
    return MolecularGraph(atoms, bonds, name=name)


def graph_from_smiles(
    smiles: str, add_hydrogens: bool = False, name: Optional[str] = None
) -> MolecularGraph:
    """
    Parse a SMILES string into a connectivity-only MolecularGraph.

    Args:
        smiles: SMILES string
        add_hydrogens: Add explicit hydrogen atoms
        name: Graph name, defaults to the SMILES string

    Raises:
        ValueError: If RDKit cannot parse the SMILES
    """
    mol = Chem.MolFromSmiles(smiles)
    if mol is None:
        raise ValueError(f"Invalid SMILES: {smiles}")
    if add_hydrogens:
        mol = Chem.AddHs(mol)
    Chem.Kekulize(mol, clearAromaticFlags=True)
    return graph_from_mol(mol, name=name or smiles)
