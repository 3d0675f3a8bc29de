"""Command-line interface for laying out molecules in 3D."""

import argparse
import logging
import os
from dataclasses import replace
from pathlib import Path
from typing import List, Optional, Sequence, Set

from ...core.config import LayoutParameters
from ...core.domain.implementations.force_directed_layout import ForceDirectedLayout
from ...core.domain.models.molecular_graph import MolecularGraph
from ...core.services.layout_service import LayoutService
from ...core.utils.geometry import bond_lengths, z_range
from ...infrastructure.adapters.rdkit_adapter import graph_from_smiles
from ...infrastructure.io.molecule_json import read_molecule, write_molecule
from ...infrastructure.io.pdb_writer import write_pdb

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False, log_file: Optional[str] = None) -> None:
    """Configure logging."""
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=handlers,
        force=True,
    )


def setup_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser."""
    parser = argparse.ArgumentParser(
        description="Lay out molecular graphs in 3D with a force-directed simulation"
    )
    parser.add_argument("inputs", nargs="*", help="Molecule JSON files")
    parser.add_argument(
        "-o", "--output-dir", required=True, help="Directory for laid-out molecules"
    )
    parser.add_argument(
        "--smiles",
        nargs="+",
        default=[],
        help="SMILES strings to lay out in addition to the input files",
    )
    parser.add_argument(
        "--add-hydrogens",
        action="store_true",
        help="Add explicit hydrogens to SMILES inputs",
    )
    parser.add_argument(
        "--format",
        choices=("json", "pdb"),
        default="json",
        help="Output file format",
    )
    parser.add_argument("--params", help="JSON file overriding layout parameters")
    parser.add_argument("--seed", type=int, help="Random seed for symmetry breaking")
    parser.add_argument(
        "--max-iterations", type=int, help="Override the iteration cap"
    )
    parser.add_argument("--progress", action="store_true", help="Show a progress bar")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log progress")
    parser.add_argument("--log-file", help="Also write the log to this file")
    return parser


def load_parameters(args: argparse.Namespace) -> LayoutParameters:
    parameters = (
        LayoutParameters.from_json_file(args.params) if args.params else LayoutParameters()
    )
    if args.max_iterations is not None:
        parameters = replace(parameters, max_iterations=args.max_iterations)
    return parameters


def collect_inputs(args: argparse.Namespace) -> tuple:
    """Read every input; returns the graphs and the number of failed inputs."""
    graphs: List[MolecularGraph] = []
    failures = 0

    for path in args.inputs:
        try:
            graphs.append(read_molecule(path))
        except (OSError, ValueError) as e:
            logger.error(f"Could not read {path}: {e}")
            failures += 1

    for index, smiles in enumerate(args.smiles, start=1):
        try:
            graph = graph_from_smiles(smiles, add_hydrogens=args.add_hydrogens)
        except ValueError as e:
            logger.error(str(e))
            failures += 1
            continue
        graph.graph_id = f"smiles-{index}"
        graphs.append(graph)

    return graphs, failures


def output_path(
    output_dir: str, graph: MolecularGraph, fmt: str, taken: Optional[Set[Path]] = None
) -> Path:
    """Output file for a graph; names already in `taken` get a numeric suffix."""
    stem = str(graph.graph_id or graph.name or "molecule").replace(os.sep, "_")
    path = Path(output_dir) / f"{stem}.{fmt}"
    if taken is None:
        return path

    suffix = 2
    while path in taken:
        path = Path(output_dir) / f"{stem}-{suffix}.{fmt}"
        suffix += 1
    if suffix > 2:
        logger.warning(f"Output name {stem}.{fmt} is already used, writing {path.name}")
    taken.add(path)
    return path


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the layout CLI."""
    parser = setup_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose, args.log_file)

    if not args.inputs and not args.smiles:
        parser.error("nothing to lay out: give input files or --smiles")

    try:
        parameters = load_parameters(args)
    except (OSError, ValueError) as e:
        logger.error(f"Invalid layout parameters: {e}")
        return 2

    service = LayoutService(ForceDirectedLayout(parameters, seed=args.seed))
    os.makedirs(args.output_dir, exist_ok=True)

    graphs, failures = collect_inputs(args)
    results = service.run_many(graphs, progress=args.progress)

    written: Set[Path] = set()
    for result in results:
        graph = result.graph
        path = output_path(args.output_dir, graph, args.format, written)
        try:
            if args.format == "pdb":
                write_pdb(graph, path)
            else:
                write_molecule(graph, path)
        except OSError as e:
            logger.error(f"Could not write {path}: {e}")
            failures += 1
            continue

        lengths = list(bond_lengths(graph).values())
        logger.info(
            f"{path.name}: {len(graph.atoms)} atoms, {graph.fragment_count()} fragments, "
            f"{result.iterations} iterations, converged={result.converged}, "
            f"z-range {z_range(graph):.2f}, "
            f"bond lengths {min(lengths, default=0.0):.2f}-{max(lengths, default=0.0):.2f}"
        )

    if failures:
        logger.error(f"{failures} molecule(s) failed")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
