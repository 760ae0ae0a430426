"""Blocks of the main page column: summary, KPIs, media, description and code.

Each builder returns scroll markup for one block, or ``""`` when the record
has nothing for it.
"""

from __future__ import annotations

import logging

from src.config import (
    ABBREVIATE_USERS_FROM,
    DESCRIPTION_SENTENCES,
    MIN_USERS_TO_SHOW,
    SITE_ROOT_URL,
)

from .facts import collect_facts
from .formatting import (
    abbreviate,
    camel_case,
    clean_and_right_shift,
    escape_html,
    format_count,
    indefinite_article,
)
from .models import PageContext

logger = logging.getLogger(__name__)

QUICK_LINK_PATHS: list[tuple[str, str]] = [
    ("home", "website"),
    ("github", "githubRepo"),
    ("wikipedia", "wikipedia"),
    ("reddit", "subreddit"),
    ("twitter", "twitter"),
    ("email", "emailList"),
]


def quick_links(page: PageContext) -> str:
    anchors = []
    for icon, path in QUICK_LINK_PATHS:
        url = page.get(path)
        if url:
            anchors.append(f'<a href="{url}">{page.icons.get(icon, icon)}</a>')
    return " ".join(anchors)


def type_link(page: PageContext) -> str:
    return (
        f'<a href="../lists/languages.html?filter={page.type_id}">{page.type_name}</a>'
    )


def one_liner(page: PageContext) -> str:
    """Summary sentence: title, alias, type, year and creators, plus their links."""
    stands_for = page.get("standsFor")
    aka = f", aka {stands_for}," if stands_for else ""
    appeared = page.appeared
    created = f" created in {appeared}" if appeared else ""
    creators = page.creators
    by = f" by {' and '.join(creators)}" if creators else ""
    lines = [
        f"* {page.title}{aka} is {indefinite_article(page.type_name)} "
        f"{type_link(page)}{created}{by}."
    ]
    if appeared:
        lines.append(f" link ../lists/languages.html?filter={appeared} {appeared}")
    lines.extend(
        f" link ../lists/creators.html#{camel_case(name)} {name}" for name in creators
    )
    return "\n".join(lines)


def _users_estimate(users: int) -> str:
    if users <= MIN_USERS_TO_SHOW:
        return ""
    if users < ABBREVIATE_USERS_FROM:
        return format_count(users)
    return abbreviate(users, decimals=1)


def kpi_bar(page: PageContext) -> str:
    ranking = page.ranking
    title = page.title
    if ranking.is_language:
        rank = (
            f'#{ranking.language_rank + 1} <span title="{ranking.rank_debug}">'
            "on PLDB</span>"
        )
    else:
        rank = f"#{ranking.rank + 1} on PLDB"
    lines = [rank]
    if page.appeared:
        lines.append(f"{page.current_year - page.appeared} Years Old")
    users = _users_estimate(ranking.number_of_users)
    if users:
        lines.append(
            f'{users} <span title="Crude user estimate from a linear model.">'
            "Users</span>"
        )
    if ranking.is_language:
        lines.append(
            f'{ranking.book_count} <span title="Books about or leveraging {title}">'
            "Books</span>"
        )
        lines.append(
            f'{ranking.paper_count} <span title="Academic publications about or '
            f'leveraging {title}">Papers</span>'
        )
    if ranking.fact_sponsors:
        lines.append(
            f"{len(ranking.fact_sponsors)} <span title=\"Number of people who have "
            'sponsored research on this file for $10 per fact.">Sponsors</span>'
        )
    if ranking.number_of_repos:
        lines.append(
            f'{abbreviate(ranking.number_of_repos)} <span title="{title} repos on '
            'GitHub.">Repos</span>'
        )
    return "kpiTable\n " + "\n ".join(lines)


def try_now_repls(page: PageContext) -> str:
    repls = []
    web_repl = page.get("webRepl")
    if web_repl:
        repls.append(f'<a href="{web_repl}">Web</a>')
    riju = page.get("rijuRepl")
    if riju:
        repls.append(f'<a href="{riju}">Riju</a>')
    tio = page.get("tryItOnline")
    if tio:
        repls.append(f'<a href="https://tio.run/#{tio}">TIO</a>')
    replit = page.get("replit")
    if replit:
        repls.append(f'<a href="https://repl.it/languages/{replit}">Replit</a>')
    if not repls:
        return ""
    return "* Try now: " + " · ".join(repls)


def monaco_editor(page: PageContext) -> str:
    """Embedded editor seeded with the first code example.

    The editor widget cannot display backticks yet; a sample containing one
    is logged and embedded anyway.
    """
    language = page.get("monaco")
    if not language:
        return ""
    examples = page.examples
    code = clean_and_right_shift(examples[0].code) if examples else ""
    if "`" in code:
        logger.warning(
            "backtick detected in the monaco example for '%s'; not supported yet",
            page.record_id,
        )
    return f"monacoEditor {language}\n {code}"


def hero_image(page: PageContext) -> str:
    title = page.title
    image = page.get("screenshot")
    caption = (
        f"A screenshot of the visual language {title}.\n"
        "  link ../lists/languages.html?filter=visual visual language"
    )
    if not image:
        image = page.get("photo")
        caption = f"A photo of {title}."
    if not image:
        return ""
    return (
        f"openGraphImage image\nimage {image.replace(SITE_ROOT_URL, '../')}\n"
        f" caption {caption}"
    )


def description(page: PageContext) -> str:
    """Wikipedia summary (first sentences), else curated, else GitHub description."""
    summary = page.get("wikipedia summary")
    if summary:
        sentences = ". ".join(summary.split(". ")[:DESCRIPTION_SENTENCES])
        text = f"{sentences.rstrip('.')}. Read more on Wikipedia..."
        wikipedia = page.get("wikipedia")
        if wikipedia:
            text += f"\n {wikipedia} Read more on Wikipedia..."
    else:
        text = page.get("description") or page.get("githubRepo description") or ""
    return f"* {text}" if text else ""


def facts_list(page: PageContext) -> str:
    return "\n".join(f"- {fact}" for fact in collect_facts(page))


def _code_block(header: str, code: str) -> str:
    return f"exampleCodeHeader {header}:\ncode\n {clean_and_right_shift(escape_html(code))}"


def code_examples(page: PageContext) -> str:
    blocks = []
    for example in page.examples:
        source = example.source
        if example.link:
            source = f"<a href='{example.link}'>{example.source}</a>"
        blocks.append(_code_block(f"Example from {source}", example.code))
    return "\n\n".join(blocks)


def fun_facts(page: PageContext) -> str:
    return "\n\n".join(
        _code_block(f"<a href='{node.content}'>Fun fact</a>", node.children_to_string())
        for node in page.record.get_groups("funFact")
    )


def keywords(page: PageContext) -> str:
    words = page.get("keywords")
    if not words:
        return ""
    return (
        f'## <a href="../lists/keywords.html?filter={page.record_id}">Keywords</a> '
        f"in {page.title}\n* {words}"
    )
