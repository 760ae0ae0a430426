"""Language page generation pipeline package.

Exposes the public API of the page generator: the record store, the page
context types, the fact resolver table, the table normalizer and the page
renderer, plus the batch runner used by the CLI. Consumers should import
from this package rather than reaching into submodules.

Examples
--------
>>> from src.pipeline.language_pages import PageContext, TreeNode, render_language_page
>>> record = TreeNode.parse("title Python\\ntype pl")
>>> page = render_language_page(PageContext(record_id="python", record=record))
>>> page.startswith("import header.scroll")
True
"""

from .facts import FACT_RESOLVERS, collect_facts
from .models import Example, Feature, PageContext, Ranking, RecordLink
from .page import build_page_context, render_language_page
from .record import Node, Record, TreeNode
from .runner import configure_logging, render_pages, run_from_config
from .sections import rank_feature_rows
from .tables import TableShape, parse_table, table_from_group, to_delimited
from .templating import collapse_blank_lines, render_template

__all__ = [
    "FACT_RESOLVERS",
    "Example",
    "Feature",
    "Node",
    "PageContext",
    "Ranking",
    "Record",
    "RecordLink",
    "TableShape",
    "TreeNode",
    "build_page_context",
    "collapse_blank_lines",
    "collect_facts",
    "configure_logging",
    "parse_table",
    "rank_feature_rows",
    "render_language_page",
    "render_pages",
    "render_template",
    "run_from_config",
    "table_from_group",
    "to_delimited",
]
