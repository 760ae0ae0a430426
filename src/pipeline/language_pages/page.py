"""Assemble a complete language page from a ``PageContext``.

The page template fixes the order of every block; this module computes the
value of each placeholder, validates the title and normalizes blank lines.
Rendering does no I/O apart from reading the default template once per
process, so rendering the same context twice gives identical text.
"""

from __future__ import annotations

import functools

from src.config import PAGE_TEMPLATE_PATH, VIEW_SOURCE_URL_FORMAT
from src.exceptions import InvalidTitleError

from . import blocks, sections
from .formatting import upper_first
from .models import PageContext
from .templating import collapse_blank_lines, load_template, render_template

ENCODED_SPACE = "%20"


@functools.lru_cache(maxsize=1)
def default_page_template() -> str:
    return load_template(PAGE_TEMPLATE_PATH)


def validate_title(page: PageContext) -> str:
    """Return the page title, rejecting titles that carry an encoded space.

    Raises
    ------
    InvalidTitleError
        If the title contains ``%20``.
    """
    title = page.title
    if ENCODED_SPACE in title:
        raise InvalidTitleError(
            f"bad space in title: {title}", context={"record_id": page.record_id}
        )
    return title


def build_page_context(page: PageContext) -> dict[str, str]:
    """Compute the value of every page template placeholder."""
    return {
        "Title": validate_title(page),
        "TypeName": upper_first(page.type_name),
        "PrevPage": page.previous_permalink,
        "NextPage": page.next_permalink,
        "ViewSourceUrl": VIEW_SOURCE_URL_FORMAT.format(id=page.record_id),
        "QuickLinks": blocks.quick_links(page),
        "OneLiner": blocks.one_liner(page),
        "KpiBar": blocks.kpi_bar(page),
        "TryNow": blocks.try_now_repls(page),
        "MonacoEditor": blocks.monaco_editor(page),
        "Image": blocks.hero_image(page),
        "Description": blocks.description(page),
        "Facts": blocks.facts_list(page),
        "Examples": blocks.code_examples(page),
        "FunFacts": blocks.fun_facts(page),
        "Keywords": blocks.keywords(page),
        "Features": sections.features_section(page),
        "TrendingRepos": sections.trending_repos_section(page),
        "Goodreads": sections.goodreads_section(page),
        "Isbndb": sections.isbndb_section(page),
        "SemanticScholar": sections.semantic_scholar_section(page),
        "Publications": sections.dblp_section(page),
        "HackerNews": sections.hacker_news_section(page),
    }


def render_language_page(page: PageContext, template_content: str | None = None) -> str:
    """Render the scroll document for one record.

    Parameters
    ----------
    page : PageContext
        The record and its surroundings.
    template_content : str | None, optional
        Page template text. Defaults to the bundled ``language_page.scroll``.

    Returns
    -------
    str
        The page, with runs of blank lines collapsed to a single blank line.

    Raises
    ------
    InvalidTitleError
        If the title contains an encoded space.
    UnresolvedReferenceError
        If a cross-reference id has no record in the link index.
    """
    template = default_page_template() if template_content is None else template_content
    return collapse_blank_lines(render_template(template, build_page_context(page)))
