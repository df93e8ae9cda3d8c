"""
Command-Line Interface

CLI commands for kspacing.

Commands:
    kspacing explicit  - Spacing of a k-clustering over an edge file
    kspacing hamming   - Largest k for a spacing threshold over a bit-vector file
    kspacing info      - Display input file statistics

Usage:
    # Spacing for k = 2, 3 and 4
    kspacing explicit clustering1.txt -k 2 -k 3 -k 4

    # Clusters with spacing >= 3, with merge statistics
    kspacing hamming clustering_big.txt --spacing 3 --stats

    # Cross-check neighbor enumeration against brute force
    kspacing hamming small.txt --spacing 3 --verify

    # Show stats
    kspacing info clustering1.txt --format edges
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from kspacing.config import SpacingConfig
from kspacing.utils.telemetry import MergeCollector, telemetry_collector

__all__ = ["main", "app"]

app = typer.Typer(
    name="kspacing",
    help="Maximum-spacing k-clustering over weighted graphs and bit-vectors",
    no_args_is_help=True,
)
console = Console()

_INPUT_ERRORS = (ValueError, IndexError, FileNotFoundError)


def _load_config(config_file: Optional[Path], **overrides) -> SpacingConfig:
    """Config from file (or environment), then CLI overrides that were given."""
    config = SpacingConfig.from_file(config_file) if config_file else SpacingConfig()
    given = {key: value for key, value in overrides.items() if value is not None}
    return config.with_overrides(**given) if given else config


def _configure_logging(config: SpacingConfig) -> None:
    if config.debug:
        level = logging.DEBUG
    else:
        # Unknown names fall back to WARNING
        level = logging.getLevelNamesMapping().get(config.log_level, logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _fail(error: Exception) -> None:
    console.print(f"[red]Error: {escape(str(error))}[/]")
    raise typer.Exit(code=1)


def _print_stats(collector: MergeCollector) -> None:
    report = collector.summary()

    table = Table(title="Merge Statistics")
    table.add_column("Stage", style="cyan")
    table.add_column("Candidates", justify="right")
    table.add_column("Merges", justify="right", style="green")
    table.add_column("Time (ms)", justify="right", style="dim")

    for stage in report.by_stage:
        table.add_row(
            stage.stage,
            str(stage.candidates),
            str(stage.merges),
            str(stage.total_latency_ms),
        )
    table.add_row("total", str(report.total_candidates), str(report.total_merges), str(report.total_latency_ms))

    console.print()
    console.print(table)


@app.command()
def explicit(
    path: Path = typer.Argument(
        ...,
        help="Edge file: node count, then 'node node distance' rows",
        exists=True,
    ),
    k: Optional[List[int]] = typer.Option(
        None,
        "--k", "-k",
        help="Target cluster count (repeatable, default from config)",
    ),
    label_base: Optional[int] = typer.Option(
        None,
        "--label-base", "-b",
        help="Label of the first node in the file",
    ),
    config_file: Optional[Path] = typer.Option(
        None,
        "--config", "-c",
        help="TOML configuration file",
        exists=True,
    ),
    debug: Optional[bool] = typer.Option(
        None,
        "--debug/--no-debug",
        help="Log every merge",
    ),
    stats: bool = typer.Option(
        False,
        "--stats",
        help="Show merge statistics",
    ),
) -> None:
    """Compute the maximum spacing of a k-clustering."""
    from kspacing.engine.explicit import ExplicitClusteringEngine
    from kspacing.io.readers import read_edge_file

    config = _load_config(config_file, label_base=label_base, debug=debug)
    _configure_logging(config)
    targets = k or [config.cluster_target]
    collector = MergeCollector() if stats else None

    try:
        with telemetry_collector(collector):
            graph = read_edge_file(path, label_base=config.label_base)
            engine = ExplicitClusteringEngine.from_graph(graph, config=config)
            results = [engine.run(target) for target in targets]
    except _INPUT_ERRORS as e:
        _fail(e)

    table = Table(title=f"Max Spacing: {path.name}")
    table.add_column("k", justify="right", style="cyan")
    table.add_column("Spacing", justify="right", style="green")
    table.add_column("Edges Consumed", justify="right", style="dim")
    table.add_column("Time (ms)", justify="right", style="dim")

    for result in results:
        table.add_row(
            str(result.cluster_target),
            str(result.spacing),
            f"{result.edges_consumed}/{result.edge_count}",
            str(result.total_time_ms),
        )

    console.print(table)
    if collector is not None:
        _print_stats(collector)


@app.command()
def hamming(
    path: Path = typer.Argument(
        ...,
        help="Bit-vector file: '[nodes] [bits]' header, then one vector per row",
        exists=True,
    ),
    spacing: Optional[int] = typer.Option(
        None,
        "--spacing", "-s",
        help="Required spacing threshold T (default from config)",
    ),
    config_file: Optional[Path] = typer.Option(
        None,
        "--config", "-c",
        help="TOML configuration file",
        exists=True,
    ),
    debug: Optional[bool] = typer.Option(
        None,
        "--debug/--no-debug",
        help="Log every vector and neighbor found",
    ),
    verify: bool = typer.Option(
        False,
        "--verify",
        help="Cross-check neighbor enumeration against brute force",
    ),
    stats: bool = typer.Option(
        False,
        "--stats",
        help="Show merge statistics",
    ),
) -> None:
    """Compute the largest k whose k-clustering has spacing at least T."""
    from kspacing.engine.implicit import ImplicitClusteringDriver
    from kspacing.io.readers import read_bit_vector_file

    config = _load_config(config_file, debug=debug)
    _configure_logging(config)
    threshold = config.spacing_threshold if spacing is None else spacing
    collector = MergeCollector() if stats else None

    try:
        with telemetry_collector(collector):
            vectors = read_bit_vector_file(path)
            driver = ImplicitClusteringDriver(vectors, config=config)
            result = driver.run(threshold)
    except _INPUT_ERRORS as e:
        _fail(e)

    console.print(Panel(
        f"[green]{result.clusters} clusters[/] with spacing >= {result.spacing_threshold}\n\n"
        f"  Elements: {result.element_count}\n"
        f"  Distinct vectors: {result.distinct_vectors}\n"
        f"  Bits per vector: {result.bit_length}\n"
        f"  Duration: {result.total_time_ms}ms",
        title=f"Hamming Clustering: {path.name}",
    ))

    if verify:
        for distance in range(1, threshold):
            try:
                ok = driver.verify(distance)
            except ValueError as e:
                console.print(f"[yellow]Skipping verification: {e}[/]")
                break
            if ok:
                console.print(f"  distance {distance}: [green]matches brute force[/]")
            else:
                console.print(f"  distance {distance}: [red]MISMATCH with brute force[/]")

    if collector is not None:
        _print_stats(collector)


@app.command()
def info(
    path: Path = typer.Argument(
        ...,
        help="Input file",
        exists=True,
    ),
    fmt: str = typer.Option(
        "edges",
        "--format", "-f",
        help="Input format: 'edges' or 'bits'",
    ),
    label_base: Optional[int] = typer.Option(
        None,
        "--label-base", "-b",
        help="Label of the first node (edges format, default from config)",
    ),
    config_file: Optional[Path] = typer.Option(
        None,
        "--config", "-c",
        help="TOML configuration file",
        exists=True,
    ),
) -> None:
    """Display input file statistics."""
    from kspacing.io.readers import read_bit_vector_file, read_edge_file

    config = _load_config(config_file, label_base=label_base)
    _configure_logging(config)

    table = Table(title=f"Input: {path.name}")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right", style="green")

    try:
        if fmt == "edges":
            graph = read_edge_file(path, label_base=config.label_base)
            distances = [edge.distance for edge in graph.edges]
            table.add_row("Nodes", str(graph.node_count))
            table.add_row("Edges", str(graph.edge_count))
            table.add_row("Labels referenced", str(len(graph.labels())))
            table.add_row("Label base", str(graph.label_base))
            if distances:
                table.add_row("Min distance", str(min(distances)))
                table.add_row("Max distance", str(max(distances)))
        elif fmt == "bits":
            vectors = read_bit_vector_file(path)
            distinct = vectors.distinct_count()
            table.add_row("Elements", str(vectors.element_count))
            table.add_row("Bits per vector", str(vectors.bit_length))
            table.add_row("Distinct vectors", str(distinct))
            table.add_row("Duplicates", str(vectors.element_count - distinct))
        else:
            console.print(f"[red]Unsupported format: {fmt}[/]")
            raise typer.Exit(code=1)
    except _INPUT_ERRORS as e:
        _fail(e)

    console.print(table)


def main() -> None:
    """Entry point for the CLI."""
    app()
