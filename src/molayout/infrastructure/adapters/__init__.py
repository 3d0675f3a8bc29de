"""Adapters to third-party chemistry toolkits."""

from .rdkit_adapter import graph_from_mol, graph_from_smiles

__all__ = ["graph_from_mol", "graph_from_smiles"]
