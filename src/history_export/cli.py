"""Command-line entry point: export browser history to CSV."""

from __future__ import annotations

import logging
import sys

import click

from history_export.browser.reader import HistoryExtractor
from history_export.browser.sources import default_sources
from history_export.config import ExportConfig
from history_export.exceptions import ConfigError, OutputPathError
from history_export.export import export_families, prepare_output_dir

logger = logging.getLogger(__name__)


@click.command()
@click.option(
    "--output-path",
    type=click.Path(file_okay=False, path_type=str),
    default=None,
    help="Directory for CSV exports (default: ~/Documents/BrowserHistory).",
)
@click.option(
    "--max-results",
    type=int,
    default=None,
    help="Maximum rows read from each history database (default: 1000).",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging.")
def main(output_path, max_results, verbose):
    """Export Chrome, Edge, Brave, Opera and Firefox history to CSV files."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = ExportConfig.from_env(output_path=output_path, max_results=max_results)
        output_dir = prepare_output_dir(config.output_path)
    except (ConfigError, OutputPathError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    sources = default_sources()
    extractor = HistoryExtractor(max_results=config.max_results)
    results = extractor.extract_all(sources)
    written = export_families(results, output_dir)

    for family, records in results.items():
        if family in written:
            click.echo(f"{family}: {len(records)} records -> {written[family]}")
        else:
            click.echo(f"{family}: no history found")
    for path, error in extractor.last_errors.items():
        click.echo(f"Warning: skipped {path}: {error}", err=True)

    click.echo(f"Export complete. Output location: {output_dir}")


if __name__ == "__main__":
    main()
