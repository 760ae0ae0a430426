"""Table sections rendered below the main column of a language page.

Every builder takes a ``PageContext`` and returns the section text, or ``""``
when the record has nothing to show. Headings are only emitted together with
a non-empty table.
"""

from __future__ import annotations

import logging

import pandas as pd

from .formatting import format_date
from .models import PageContext
from .tables import (
    TableShape,
    link_from,
    table_block,
    table_from_group,
    to_delimited,
    to_tree_table,
    with_column,
)

logger = logging.getLogger(__name__)

SUPPORTED_MARK = "✓"
UNSUPPORTED_MARK = "ϴ"
FEATURE_COLUMNS = ["Feature", "FeatureLink", "Supported", "Example", "Token"]


def trending_repos_section(page: PageContext) -> str:
    count = page.get("githubLanguage trendingProjectsCount") or ""
    if not count.isdigit() or int(count) <= 0:
        return ""
    table = table_from_group(
        page.record.get_group("githubLanguage trendingProjects"), TableShape.SSV
    )
    if table is None:
        logger.warning(
            "'%s' lists %s trending projects but has no trending table",
            page.record_id,
            count,
        )
        return ""
    table = with_column(table, "repo", lambda row: row.get("name", ""))
    table = with_column(table, "repoLink", lambda row: row.get("url", ""))
    github_id = page.get("githubLanguage") or ""
    heading = (
        f'## Trending <a href="https://github.com/trending/{github_id}?since=monthly">'
        f"{page.title} repos</a> on GitHub"
    )
    body = to_delimited(table, ",", ["repo", "repoLink", "stars", "description"])
    return f"{heading}\n{table_block('commaTable', body)}\n"


def semantic_scholar_section(page: PageContext) -> str:
    table = table_from_group(page.record.get_group("semanticScholar"), TableShape.PIPE)
    if table is None:
        return ""
    table = with_column(
        table,
        "titleLink",
        link_from("https://www.semanticscholar.org/paper/{}", "paperId"),
    )
    body = to_delimited(
        table,
        "|",
        ["title", "titleLink", "authors", "year", "citations", "influentialCitations"],
    )
    heading = f"## Publications about {page.title} from Semantic Scholar"
    return f"{heading}\n{table_block('pipeTable', body)}\n"


def isbndb_section(page: PageContext) -> str:
    table = table_from_group(page.record.get_group("isbndb"), TableShape.PIPE)
    if table is None:
        return ""
    table = with_column(
        table, "titleLink", link_from("https://isbndb.com/book/{}", "isbn13")
    )
    body = to_delimited(
        table, "|", ["title", "titleLink", "authors", "year", "publisher"]
    )
    return f"## Books about {page.title} from ISBNdb\n{table_block('pipeTable', body)}\n"


def _goodreads_search_link(row: dict[str, str]) -> str:
    title = row.get("title", "")
    if not title:
        return ""
    query = f"{title} {row.get('author', '')}".strip()
    return f"https://www.goodreads.com/search?q={query}"


def goodreads_section(page: PageContext) -> str:
    table = table_from_group(page.record.get_group("goodreads"), TableShape.PIPE)
    if table is None:
        return ""
    table = with_column(table, "titleLink", _goodreads_search_link)
    body = to_delimited(
        table,
        "|",
        ["title", "titleLink", "author", "year", "reviews", "ratings", "rating"],
    )
    return f"## Books about {page.title} on goodreads\n{table_block('pipeTable', body)}\n"


def _publication_link(row: dict[str, str]) -> str:
    doi = row.get("doi", "")
    return f"https://doi.org/{doi}" if doi else row.get("url", "")


def dblp_section(page: PageContext) -> str:
    """Publications indexed by DBLP. A hit count of ``0`` suppresses the section."""
    dblp = page.record.get_group("dblp")
    hits = page.get("dblp hits")
    if dblp is None or hits == "0":
        return ""
    table = table_from_group(page.record.get_group("dblp publications"), TableShape.PIPE)
    if table is None:
        return ""
    table = with_column(table, "titleLink", _publication_link)
    body = to_delimited(table, "|", ["title", "titleLink", "year"])
    heading = (
        f"## {hits or len(table)} publications about {page.title} on "
        f'<a href="{dblp.content}">DBLP</a>'
    )
    return f"{heading}\n{table_block('pipeTable', body)}\n"


def hacker_news_section(page: PageContext) -> str:
    table = table_from_group(
        page.record.get_group("hackerNewsDiscussions"), TableShape.PIPE
    )
    if table is None:
        return ""
    table = with_column(
        table, "titleLink", link_from("https://news.ycombinator.com/item?id={}", "id")
    )
    table = with_column(table, "date", lambda row: format_date(row.get("time")))
    body = to_delimited(table, "|", ["title", "titleLink", "date", "score", "comments"])
    return f"## HackerNews discussions of {page.title}\n\n{table_block('pipeTable', body)}"


def rank_feature_rows(table: pd.DataFrame) -> pd.DataFrame:
    """Order feature rows for display.

    Rows with an example come first; within each group supported rows come
    before unsupported ones. Ties keep their record order.
    """
    has_example = table["Example"].str.strip() != ""
    supported = table["Supported"] == SUPPORTED_MARK
    order = has_example.astype(int) * 2 + supported.astype(int)
    return (
        table.assign(_order=order)
        .sort_values("_order", ascending=False, kind="mergesort")
        .drop(columns="_order")
        .reset_index(drop=True)
    )


def features_section(page: PageContext) -> str:
    features = page.record.get_group("features")
    if features is None:
        return ""
    rows = []
    for node in features.children:
        feature = page.features.get(node.key)
        if feature is None:
            logger.warning(
                "we need a features page for feature '%s' found in '%s'",
                node.key,
                page.record_id,
            )
            continue
        supported = node.content == "true"
        token = ""
        if supported and feature.token_path:
            token = page.get(feature.token_path) or ""
        rows.append(
            {
                "Feature": feature.name,
                "FeatureLink": feature.link,
                "Supported": SUPPORTED_MARK if supported else UNSUPPORTED_MARK,
                "Example": node.children_to_string(),
                "Token": token,
            }
        )
    if not rows:
        return ""
    table = rank_feature_rows(pd.DataFrame(rows, columns=FEATURE_COLUMNS))
    body = to_tree_table(table, FEATURE_COLUMNS, block_columns=["Example"])
    heading = '## Language <a href="../lists/features.html">features</a>'
    return f"{heading}\n\n{table_block('treeTable', body)}"

