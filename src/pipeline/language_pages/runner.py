"""Language page generator runner module.

Programmatic entrypoints and logging configuration for the page generation
step. The runner owns everything the renderer treats as external: it loads
record files and the feature catalog, ranks records for prev/next
navigation, builds the cross-reference index, and writes one page per record.
All page text comes from ``page.py``.

A data-quality failure in one record (an unresolved cross-reference or an
invalid title) is logged and skips that page only; the rest of the batch is
still written.

Examples
--------
>>> from src.pipeline.language_pages.runner import configure_logging, run_from_config
>>> configure_logging(log_level="INFO", enable_file=False)
>>> ok = run_from_config()
>>> isinstance(ok, bool)
True
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from src.config import (
    CURRENT_YEAR,
    FEATURES_CATALOG_PATH,
    LANGUAGE_TYPES,
    LOG_DIR,
    LOG_FILENAME_GENERATE_PAGES,
    LOG_FORMAT,
    OUTPUT_PAGES_DIR,
    PAGE_FILE_SUFFIX,
    PAGE_TEMPLATE_PATH,
    PERMALINK_FORMAT,
    RECORD_FILE_SUFFIX,
    RECORDS_DIR,
)
from src.exceptions import AppError, ConfigurationError

from .models import Feature, PageContext, Ranking, RecordLink
from .page import render_language_page
from .record import TreeNode
from .templating import load_template_and_placeholders

logger = logging.getLogger(__name__)


@dataclass
class RunSummary:
    """Outcome of a batch run: written page paths and failed record ids."""

    written: list[Path] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)


def configure_logging(log_level: str = "INFO", enable_file: bool = True) -> None:
    """Configure logging for page generation.

    Sets up a console handler and, unless disabled, a file handler in
    ``LOG_DIR``. Setting ``DISABLE_FILE_LOGS`` in the environment also turns
    the file handler off. Safe to call repeatedly.

    Parameters
    ----------
    log_level : str, optional
        The logging level (e.g., "INFO", "DEBUG"). Defaults to "INFO".
    enable_file : bool, optional
        Whether to also write ``LOG_FILENAME_GENERATE_PAGES``.
    """
    for h in logging.root.handlers[:]:
        logging.root.removeHandler(h)
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if enable_file and not os.environ.get("DISABLE_FILE_LOGS"):
        try:
            LOG_DIR.mkdir(exist_ok=True)
            handlers.insert(
                0, logging.FileHandler(LOG_DIR / LOG_FILENAME_GENERATE_PAGES, mode="a")
            )
        except OSError as exc:
            logging.getLogger(__name__).debug("File logging disabled: %s", exc)
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
    )


def load_records(input_dir: Path) -> dict[str, TreeNode]:
    """Load every record file in ``input_dir`` keyed by file stem.

    Raises
    ------
    ConfigurationError
        If ``input_dir`` is not a directory.
    """
    if not input_dir.is_dir():
        raise ConfigurationError(
            f"Records directory not found: {input_dir}",
            context={"input_dir": str(input_dir)},
        )
    return {
        path.stem: TreeNode.from_file(path)
        for path in sorted(input_dir.glob(f"*{RECORD_FILE_SUFFIX}"))
    }


def load_feature_catalog(path: Path | None) -> dict[str, Feature]:
    """Read the feature catalog; a missing catalog yields an empty one.

    Each top-level node is a feature id with optional ``name``, ``link`` and
    ``token`` children.
    """
    if path is None or not path.exists():
        logger.info("No feature catalog at %s; feature tables will be empty", path)
        return {}
    catalog = {}
    for node in TreeNode.from_file(path).children:
        if not node.key:
            continue
        catalog[node.key] = Feature(
            id=node.key,
            name=node.get_scalar("name") or node.key,
            link=node.get_scalar("link") or f"../features/{node.key}.html",
            token_path=node.get_scalar("token"),
        )
    return catalog


def _rank_key(item: tuple[str, TreeNode]) -> tuple[int, int, str]:
    record_id, record = item
    rank = record.get_scalar("rank") or ""
    if rank.isdigit():
        return (0, int(rank), record_id)
    return (1, 0, record_id)


def rank_records(records: dict[str, TreeNode]) -> list[str]:
    """Order record ids by their ``rank`` field; unranked records follow by id."""
    return [record_id for record_id, _ in sorted(records.items(), key=_rank_key)]


def build_link_index(records: dict[str, TreeNode]) -> dict[str, RecordLink]:
    return {
        record_id: RecordLink(
            title=record.get_scalar("title") or record_id,
            permalink=PERMALINK_FORMAT.format(id=record_id),
        )
        for record_id, record in records.items()
    }


def _int_field(record: TreeNode, path: str) -> int:
    value = (record.get_scalar(path) or "").replace(",", "")
    return int(value) if value.isdigit() else 0


def _table_row_count(record: TreeNode, path: str) -> int:
    group = record.get_group(path)
    if group is None or group.content == "0":
        return 0
    # First row is the header.
    return max(len(group.children) - 1, 0)


def estimate_ranking(
    record: TreeNode, rank: int, language_rank: int | None
) -> Ranking:
    """Derive the KPI estimates available from the record itself."""
    sponsors = record.get_all_values("factSponsor")
    return Ranking(
        rank=rank,
        language_rank=language_rank if language_rank is not None else 0,
        is_language=language_rank is not None,
        number_of_users=_int_field(record, "estimatedUsers"),
        number_of_jobs=record.get_most_recent_int("indeedJobs"),
        number_of_repos=_int_field(record, "githubLanguage repos")
        or _int_field(record, "githubBigQuery repos"),
        book_count=_table_row_count(record, "isbndb"),
        paper_count=_table_row_count(record, "semanticScholar"),
        fact_sponsors=tuple(sponsors) if sponsors else None,
    )


def build_page_contexts(
    records: dict[str, TreeNode],
    features: dict[str, Feature],
    current_year: int = CURRENT_YEAR,
) -> list[PageContext]:
    """Build one context per record, with wrap-around prev/next links by rank."""
    ranked = rank_records(records)
    links = build_link_index(records)
    contexts = []
    language_rank = 0
    for index, record_id in enumerate(ranked):
        record = records[record_id]
        is_language = (record.get_scalar("type") or "") in LANGUAGE_TYPES
        contexts.append(
            PageContext(
                record_id=record_id,
                record=record,
                previous_permalink=links[ranked[index - 1]].permalink,
                next_permalink=links[ranked[(index + 1) % len(ranked)]].permalink,
                ranking=estimate_ranking(
                    record, index, language_rank if is_language else None
                ),
                features=features,
                record_links=links,
                current_year=current_year,
            )
        )
        if is_language:
            language_rank += 1
    return contexts


def render_pages(
    input_dir: Path,
    output_dir: Path,
    features_path: Path | None = None,
    template_path: Path | None = None,
) -> RunSummary:
    """Render and write a page for every record in ``input_dir``.

    Returns
    -------
    RunSummary
        Paths written, and the error message for every record that failed.

    Raises
    ------
    ConfigurationError
        If the records directory or the template cannot be read.
    """
    template, _ = load_template_and_placeholders(template_path or PAGE_TEMPLATE_PATH)
    records = load_records(input_dir)
    features = load_feature_catalog(features_path)
    output_dir.mkdir(parents=True, exist_ok=True)
    summary = RunSummary()
    for page in build_page_contexts(records, features):
        try:
            content = render_language_page(page, template)
        except AppError as exc:
            logger.error("Skipping '%s': %s", page.record_id, exc)
            summary.failed[page.record_id] = str(exc)
            continue
        output_path = output_dir / f"{page.record_id}{PAGE_FILE_SUFFIX}"
        try:
            with output_path.open("w", encoding="utf-8") as output_file:
                output_file.write(content)
        except OSError as error:
            logger.error(f"Error writing {output_path}: {error}")
            summary.failed[page.record_id] = str(error)
            continue
        summary.written.append(output_path)
    logger.info(
        "Generated %d pages (%d skipped)", len(summary.written), len(summary.failed)
    )
    return summary


def run_from_config(
    input_dir: Path | None = None,
    output_dir: Path | None = None,
    features_path: Path | None = None,
) -> bool:
    """Run page generation using provided paths or defaults from config.

    Returns
    -------
    bool
        True when the batch ran (individual pages may still have been
        skipped), False on configuration failure.
    """
    try:
        render_pages(
            Path(input_dir) if input_dir is not None else RECORDS_DIR,
            Path(output_dir) if output_dir is not None else OUTPUT_PAGES_DIR,
            Path(features_path) if features_path is not None else FEATURES_CATALOG_PATH,
        )
        return True
    except AppError as exc:
        logger.error("Failed to generate pages: %s", exc)
        return False
