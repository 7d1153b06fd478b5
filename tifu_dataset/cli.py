"""Command-line interface for the TIFU dataset toolkit."""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import typer
from typing_extensions import Annotated

from tifu_dataset.acquisition.fetcher import DatasetFetcher
from tifu_dataset.config import Config
from tifu_dataset.errors import DatasetError
from tifu_dataset.logging_setup import setup_logging
from tifu_dataset.models.decoder import encode_record_to_string
from tifu_dataset.storage.collection import RecordCollection, RecordKind
from tifu_dataset.storage.loader import DatasetLoader

app = typer.Typer(help="TIFU dataset toolkit - fetch, decode and inspect the Reddit TIFU dataset")

logger = logging.getLogger(__name__)

NUMERIC_COLUMNS = ["score", "num_comments", "ups", "upvote_ratio"]


def _load_config(config_path: str, loglevel: Optional[str]) -> Config:
    config = Config.from_files(config_path)
    setup_logging(loglevel.upper() if loglevel else config.log_level, config.log_file)
    return config


@app.command()
def fetch(
    config: Annotated[str, typer.Option("--config", "-c", help="Path to configuration file")] = "config.yaml",
    force: Annotated[bool, typer.Option("--force", "-f", help="Download even if the dataset file exists")] = False,
    loglevel: Annotated[Optional[str], typer.Option("--loglevel", "-l", help="Logging level")] = None,
) -> None:
    """
    Download and extract the TIFU dataset into the data directory.
    """
    config_obj = _load_config(config, loglevel)

    try:
        path = DatasetFetcher(config_obj).ensure_dataset(force=force)
    except DatasetError as e:
        logger.error(f"Fetch failed: {e}")
        sys.exit(1)

    typer.echo(f"TIFU dataset available at {path}")


@app.command()
def show(
    config: Annotated[str, typer.Option("--config", "-c", help="Path to configuration file")] = "config.yaml",
    kind: Annotated[RecordKind, typer.Option("--kind", "-k", help="Record view to print")] = RecordKind.RAW,
    limit: Annotated[int, typer.Option("--limit", "-n", help="Maximum records to load (negative: all)")] = -1,
    index: Annotated[Optional[int], typer.Option("--index", "-i", help="Print only the record at this index")] = None,
    loglevel: Annotated[Optional[str], typer.Option("--loglevel", "-l", help="Logging level")] = None,
) -> None:
    """
    Decode the dataset file and print records as JSON lines.
    """
    config_obj = _load_config(config, loglevel)

    try:
        collection = DatasetLoader(config_obj.dataset_file_path, kind).load(limit)
        if index is not None:
            typer.echo(encode_record_to_string(collection.get(index)))
            return
    except DatasetError as e:
        logger.error(f"Failed to load dataset: {e}")
        sys.exit(1)

    for record in collection:
        typer.echo(encode_record_to_string(record))


def collect_stats(collection: RecordCollection) -> Dict[str, Any]:
    """
    Summarize a collection of raw records.

    Args:
        collection: Raw records

    Returns:
        Dictionary of statistics
    """
    stats: Dict[str, Any] = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "count": collection.count(),
    }

    df = collection.to_dataframe()
    if df.empty:
        return stats

    for column in NUMERIC_COLUMNS:
        series = df[column]
        stats[column] = {
            "mean": float(series.mean()),
            "min": float(series.min()),
            "max": float(series.max()),
        }

    stats["with_tldr"] = int(df["tldr"].notna().sum())
    stats["mean_source_tokens"] = float(df["selftext_without_tldr_tokenized"].map(len).mean())
    return stats


@app.command()
def stats(
    config: Annotated[str, typer.Option("--config", "-c", help="Path to configuration file")] = "config.yaml",
    limit: Annotated[int, typer.Option("--limit", "-n", help="Maximum records to load (negative: all)")] = -1,
    output: Annotated[Optional[str], typer.Option("--output", "-o", help="Output file for statistics (default: stdout)")] = None,
    loglevel: Annotated[Optional[str], typer.Option("--loglevel", "-l", help="Logging level")] = None,
) -> None:
    """
    Print summary statistics of the raw dataset as JSON.
    """
    config_obj = _load_config(config, loglevel)

    try:
        collection = DatasetLoader(config_obj.dataset_file_path, RecordKind.RAW).load(limit)
    except DatasetError as e:
        logger.error(f"Failed to load dataset: {e}")
        sys.exit(1)

    output_text = json.dumps(collect_stats(collection), indent=2)

    if output:
        with open(output, "w", encoding="utf-8") as f:
            f.write(output_text)
    else:
        typer.echo(output_text)


@app.command()
def validate(
    config: Annotated[str, typer.Option("--config", "-c", help="Path to configuration file")] = "config.yaml",
) -> None:
    """
    Check the configuration and report problems.
    """
    config_obj = Config.from_files(config)
    errors = config_obj.validate()

    if errors:
        for error in errors:
            typer.echo(f"Configuration error: {error}", err=True)
        sys.exit(1)

    typer.echo("Configuration OK")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
