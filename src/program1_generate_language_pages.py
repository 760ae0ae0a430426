"""Program 1: Language page generation from knowledge-base records.

Reads every record file in a directory, renders one scroll page per record
and writes it to the output directory. All configuration and magic values are
imported from ``src.config``; the work itself lives in
``src.pipeline.language_pages``.

Usage
-----
python -m src.program1_generate_language_pages --input-dir ... --output-dir ... [--features ...] [--log-level ...]

Notes
-----
Logging goes to the console and, unless ``DISABLE_FILE_LOGS`` is set, to a
log file. A summary table of the run is printed with Rich.
"""

import argparse
import logging
import os
from pathlib import Path

from rich.console import Console
from rich.table import Table

from src.config import FEATURES_CATALOG_PATH, OUTPUT_PAGES_DIR, RECORDS_DIR
from src.exceptions import AppError
from src.pipeline.language_pages.runner import (
    RunSummary,
    configure_logging,
    render_pages,
)

logger = logging.getLogger(__name__)


def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Parameters
    ----------
    argv : list[str] | None
        Optional argv to parse. When ``None`` the real CLI args are used.

    Returns
    -------
    argparse.Namespace
        Parsed arguments with paths and the log level.
    """
    parser = argparse.ArgumentParser(
        description="Generate language pages from knowledge-base records."
    )
    parser.add_argument(
        "--input-dir",
        type=Path,
        default=RECORDS_DIR,
        help="Directory containing one record file per language.",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=OUTPUT_PAGES_DIR,
        help="Directory to write generated pages.",
    )
    parser.add_argument(
        "--features",
        type=Path,
        default=FEATURES_CATALOG_PATH,
        help="Path to the feature catalog file.",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=os.environ.get("LOG_LEVEL", "INFO"),
        help="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).",
    )
    return parser.parse_args(argv)


def build_summary_table(summary: RunSummary) -> Table:
    """Summarise a run: one row per skipped record, then the totals."""
    table = Table(title="Language pages")
    table.add_column("Record")
    table.add_column("Status")
    for record_id, reason in sorted(summary.failed.items()):
        table.add_row(record_id, f"[red]skipped[/red]: {reason}")
    table.add_row("written", str(len(summary.written)))
    table.add_row("skipped", str(len(summary.failed)))
    return table


def main(argv: list[str] | None = None, console: Console | None = None) -> int:
    """Run page generation from CLI arguments.

    Returns
    -------
    int
        Process exit code: ``0`` when the batch ran, ``1`` on configuration
        errors. Skipped pages do not change the exit code.
    """
    args = parse_arguments(argv)
    configure_logging(args.log_level, enable_file=not os.environ.get("DISABLE_FILE_LOGS"))
    logger.info(
        f"Starting page generation from {args.input_dir} into {args.output_dir}"
    )
    try:
        summary = render_pages(args.input_dir, args.output_dir, args.features)
    except AppError as exc:
        logger.error(f"Page generation failed: {exc}")
        return 1
    (console or Console()).print(build_summary_table(summary))
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry
    raise SystemExit(main())
