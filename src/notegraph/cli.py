"""CLI for notegraph."""

import argparse
import json
import sys
from pathlib import Path

import yaml

from .graph import NoteGraph, load_graph, load_positions, seed_graph
from .layout import (
    CurvatureConfig,
    LayoutResult,
    PlacementConfig,
    compute_all_curvatures,
    compute_layout,
    make_rng,
)
from .layout.rings import RING_SPACING
from .layout.spatial import DEFAULT_CELL_SIZE


def load_config(config_path: Path) -> dict:
    """Load configuration from YAML file.

    Args:
        config_path: Path to the YAML config file.

    Returns:
        Dictionary of configuration values (empty for an empty file).
    """
    with open(config_path) as f:
        return yaml.safe_load(f) or {}


def add_common_args(parser: argparse.ArgumentParser) -> None:
    """Add common arguments shared between subcommands."""
    parser.add_argument("--graph", type=Path, help="Graph snapshot JSON file")
    parser.add_argument(
        "--seed-graph",
        action="store_true",
        help="Use the built-in five-node starter graph instead of --graph",
    )
    parser.add_argument(
        "--positions",
        type=Path,
        help="Persisted node positions JSON file (id -> {x, y})",
    )
    parser.add_argument("--config", type=Path, help="Path to YAML config file")


def resolve_common_args(
    args: argparse.Namespace, parser: argparse.ArgumentParser, config: dict
) -> tuple[NoteGraph, list[str] | None, dict[str, tuple[float, float]]]:
    """Resolve graph and position inputs from args and config.

    Returns:
        Tuple of (graph, locked_ids from the graph source, saved_positions).
    """
    if not args.graph and "graph" in config:
        args.graph = Path(config["graph"])
    if not args.positions and "positions" in config:
        args.positions = Path(config["positions"])

    if args.seed_graph:
        graph, locked = seed_graph()
        graph_locked: list[str] | None = [n for n in graph.node_ids() if n in locked]
    elif args.graph:
        try:
            graph, graph_locked = load_graph(args.graph)
        except (OSError, TypeError, ValueError) as err:
            parser.error(f"cannot read graph {args.graph}: {err}")
    else:
        parser.error("--graph or --seed-graph is required")

    saved: dict[str, tuple[float, float]] = {}
    if args.positions:
        try:
            saved = load_positions(args.positions)
        except (OSError, TypeError, ValueError) as err:
            parser.error(f"cannot read positions {args.positions}: {err}")

    return graph, graph_locked, saved


def placement_config_from(config: dict) -> PlacementConfig:
    """Build a PlacementConfig from the ``placement:`` config section."""
    return PlacementConfig(**config.get("placement", {}))


def curvature_config_from(config: dict) -> CurvatureConfig:
    """Build a CurvatureConfig from the ``curvature:`` config section."""
    return CurvatureConfig(**config.get("curvature", {}))


def generate_json(
    graph: NoteGraph,
    result: LayoutResult,
    curvature_config: CurvatureConfig,
) -> dict:
    """Serialize a layout result with per-edge curvature.

    Args:
        graph: The graph snapshot that was laid out.
        result: Layout result for that snapshot.
        curvature_config: Thresholds for edge bending.

    Returns:
        JSON-compatible dictionary.
    """
    curvatures = compute_all_curvatures(result.positions, graph.valid_edges(), curvature_config)
    return {
        "anchor": result.anchor,
        "positions": {
            node_id: {"x": x, "y": y} for node_id, (x, y) in result.positions.items()
        },
        "depths": result.depths,
        "curvatures": [
            {
                "source": edge.source,
                "target": edge.target,
                "type": getattr(edge.type, "value", edge.type),
                "curvature": value,
            }
            for edge, value in curvatures
        ],
        "warnings": result.warnings,
    }


def cmd_layout(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    """Run the layout subcommand."""
    config = load_config(args.config) if args.config else {}
    graph, graph_locked, saved = resolve_common_args(args, parser, config)

    if args.locked is not None:
        locked = args.locked
    elif "locked" in config:
        locked = list(config["locked"])
    elif graph_locked is not None:
        locked = graph_locked
    else:
        locked = []

    seed = args.seed if args.seed is not None else config.get("seed")
    if not args.output and "output" in config:
        args.output = Path(config["output"])

    try:
        placement = placement_config_from(config)
        curvature_config = curvature_config_from(config)
        result = compute_layout(
            graph,
            locked_ids=locked,
            saved_positions=saved,
            rng=make_rng(seed),
            ring_spacing=config.get("ring-spacing", RING_SPACING),
            placement=placement,
            cell_size=config.get("cell-size", DEFAULT_CELL_SIZE),
        )
    except (TypeError, ValueError) as err:
        parser.error(f"invalid configuration: {err}")

    # Keep stdout clean when it carries the JSON
    out = sys.stdout if args.output else sys.stderr
    print(
        f"Laid out {len(result.positions)} nodes ({len(result.placements)} placed near a parent)",
        file=out,
    )
    for warning in result.warnings:
        print(f"Warning: {warning}", file=out)

    data = generate_json(graph, result, curvature_config)
    if args.output:
        with open(args.output, "w") as f:
            json.dump(data, f, indent=2)
        print(f"Wrote {args.output}")
    else:
        json.dump(data, sys.stdout, indent=2)
        print()


def cmd_curvature(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    """Run the curvature subcommand on already-known positions."""
    config = load_config(args.config) if args.config else {}
    graph, _, saved = resolve_common_args(args, parser, config)

    positions = {node.id: node.position for node in graph.nodes if node.position is not None}
    positions.update({k: v for k, v in saved.items() if graph.get(k) is not None})

    try:
        curvature_config = curvature_config_from(config)
    except TypeError as err:
        parser.error(f"invalid configuration: {err}")

    for edge, value in compute_all_curvatures(positions, graph.valid_edges(), curvature_config):
        print(f"{edge.source} -> {edge.target}: {value:.4f}")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="Radial layout, node placement and edge curvature for note graphs"
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    layout_parser = subparsers.add_parser(
        "layout",
        help="Compute positions for every node and curvature for every edge",
    )
    add_common_args(layout_parser)
    layout_parser.add_argument(
        "--locked",
        type=str,
        action="append",
        help="Node id to lock onto its depth ring (can be repeated)",
    )
    layout_parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for placing free nodes (default: unseeded)",
    )
    layout_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Output JSON path (default: stdout)",
    )

    curvature_parser = subparsers.add_parser(
        "curvature",
        help="Print edge curvature for a graph with known positions",
    )
    add_common_args(curvature_parser)

    args = parser.parse_args(argv)

    if args.command == "layout":
        cmd_layout(args, layout_parser)
    elif args.command == "curvature":
        cmd_curvature(args, curvature_parser)
    else:
        # No subcommand provided - show help
        parser.print_help()


if __name__ == "__main__":
    main()
