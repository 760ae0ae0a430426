"""Fact resolvers for the language page facts list.

Each resolver inspects one attribute group of the record and returns the
facts it contributes, usually zero or one string. A fact may carry a second
line of the form ``"\\n <url>"`` that the site compiler turns into a link on
the fact text.

``FACT_RESOLVERS`` fixes the order in which facts appear on the page. The
order is editorial, so new resolvers are inserted by hand rather than sorted.

Resolvers never raise on absent data. The one exception is a cross-reference
to a record id that is not in the link index, which raises
``UnresolvedReferenceError`` because the page would otherwise promise a link
that does not exist.
"""

from __future__ import annotations

from collections.abc import Callable

from src.config import (
    EDIT_URL_FORMAT,
    MIN_JOBS_TO_SHOW,
    PAGE_GENERATOR_NAME,
    PAGE_GENERATOR_URL,
    STACK_OVERFLOW_SURVEY_YEAR,
    UBUNTU_RELEASE,
)

from .formatting import (
    abbreviate,
    camel_case,
    format_count,
    format_currency,
    format_percent,
    link_many_aftertext,
    make_pretty_url_link,
    to_comma_list,
)
from .models import PageContext

FactResolver = Callable[[PageContext], list[str]]


def _url_fact(path: str, label: str) -> FactResolver:
    """Build a resolver for ``<label>\\n <url>`` facts backed by one scalar."""

    def resolve(page: PageContext) -> list[str]:
        url = page.get(path)
        if not url:
            return []
        return [f"{label.format(title=page.title)}\n {url}"]

    resolve.__name__ = f"fact_{path}"
    return resolve


def _first_url_fact(path: str, label: str) -> FactResolver:
    """Like ``_url_fact`` for multi-valued fields; only the first value is shown."""

    def resolve(page: PageContext) -> list[str]:
        urls = page.record.get_all_values(path)
        if not urls:
            return []
        return [f"{label.format(title=page.title)}\n {urls[0]}"]

    resolve.__name__ = f"fact_{path}"
    return resolve


def _counted_links_fact(path: str, singular: str, plural: str) -> FactResolver:
    """One link reads inline; two or more read as a counted list."""

    def resolve(page: PageContext) -> list[str]:
        links = page.record.get_all_values(path)
        if len(links) == 1:
            return [f"{page.title} {singular}\n {links[0]}"]
        if len(links) > 1:
            pretty = ", ".join(make_pretty_url_link(link) for link in links)
            return [f"PLDB has {len(links)} {plural} for {page.title}: {pretty}"]
        return []

    resolve.__name__ = f"fact_{path}"
    return resolve


def _sentence_fact(path: str, sentence: str) -> FactResolver:
    """Build a resolver for a fixed sentence that depends on one scalar.

    ``sentence`` may reference ``{title}`` and ``{value}``.
    """

    def resolve(page: PageContext) -> list[str]:
        value = page.get(path)
        if not value:
            return []
        return [sentence.format(title=page.title, value=value)]

    resolve.__name__ = f"fact_{path}"
    return resolve


def fact_github_repo(page: PageContext) -> list[str]:
    repo = page.record.get_group("githubRepo")
    if repo is None or not repo.content:
        return []
    stars = page.get("githubRepo stars")
    star_message = f" and has {format_count(stars)} stars" if stars else ""
    return [
        f'{page.title} is developed on <a href="{repo.get_word(1)}">GitHub</a>'
        f"{star_message}"
    ]


def fact_github_language_repos(page: PageContext) -> list[str]:
    repo_count = page.get("githubLanguage repos")
    if not repo_count:
        return []
    url = f"https://github.com/search?q=language:{page.get('githubLanguage') or ''}"
    return [
        f"There are at least {format_count(repo_count)} {page.title} repos on "
        f'<a href="{url}">GitHub</a>'
    ]


def fact_superset(page: PageContext) -> list[str]:
    superset_of = page.get("supersetOf")
    if not superset_of:
        return []
    links = " and ".join(page.link_to(record_id) for record_id in superset_of.split())
    return [f"{page.title} is a superset of {links}"]


def fact_origin_community(page: PageContext) -> list[str]:
    communities = page.origin_communities
    if not communities:
        return []
    links = " and ".join(
        f'<a href="../lists/originCommunities.html#{camel_case(name)}">{name}</a>'
        for name in communities
    )
    return [f"{page.title} first developed in {links}"]


def fact_job_estimate(page: PageContext) -> list[str]:
    jobs = page.ranking.number_of_jobs
    if jobs <= MIN_JOBS_TO_SHOW:
        return []
    return [
        f"PLDB estimates there are currently {abbreviate(jobs)} job openings for "
        f"{page.title} programmers."
    ]


def fact_extensions(page: PageContext) -> list[str]:
    extensions = page.extensions
    if not extensions:
        return []
    return [
        f"file extensions for {page.title} include "
        f"{to_comma_list(extensions.split())}"
    ]


def fact_compiles_to(page: PageContext) -> list[str]:
    targets = page.get("compilesTo")
    if not targets:
        return []
    links = " or ".join(page.link_to(record_id) for record_id in targets.split())
    return [f"{page.title} compiles to {links}"]


def fact_written_in(page: PageContext) -> list[str]:
    languages = page.get("writtenIn")
    if not languages:
        return []
    links = " & ".join(page.link_to(record_id) for record_id in languages.split())
    return [f"{page.title} is written in {links}"]


def fact_conferences(page: PageContext) -> list[str]:
    conferences = page.record.get_groups("conference")
    if not conferences:
        return []
    # A conference without a name is labelled by its URL.
    links = ", ".join(
        f'<a href="{node.get_word(1)}">'
        f"{node.get_words_from(2) or node.get_word(1)}</a>"
        for node in conferences
    )
    return [f"Recurring conference about {page.title}: {links}"]


def fact_github_bigquery(page: PageContext) -> list[str]:
    """GitHub snapshot usage from the BigQuery public dataset."""
    snapshot = page.record.get_group("githubBigQuery")
    if snapshot is None:
        return []
    users = page.get("githubBigQuery users")
    repos = page.get("githubBigQuery repos")
    if not users or not repos:
        return []
    url = (
        "https://api.github.com/search/repositories?q=language:"
        f"{snapshot.content}"
    )
    return [
        "The Google BigQuery Public Dataset GitHub snapshot shows "
        f"{abbreviate(users)} users using {page.title} in {abbreviate(repos)} "
        f'repos on <a href="{url}">GitHub</a>'
    ]


def fact_meetup(page: PageContext) -> list[str]:
    meetup = page.get("meetup")
    if not meetup:
        return []
    group_count = page.get("meetup groupCount")
    count = f"{format_count(group_count)} " if group_count else ""
    return [
        f'Check out the {count}<a href="{meetup}/">{page.title} meetup groups</a> '
        "on Meetup.com."
    ]


def fact_first_announcement(page: PageContext) -> list[str]:
    announcement = page.get("firstAnnouncement")
    if not announcement:
        return []
    method = page.get("announcementMethod")
    via = f" via {method}" if method else ""
    return [f'<a href="{announcement}">First announcement of</a> {page.title}{via}']


def fact_subreddit(page: PageContext) -> list[str]:
    subreddit = page.get("subreddit")
    if not subreddit:
        return []
    members = format_count(page.record.get_most_recent_int("subreddit memberCount"))
    return [
        f'There are {members} members in the <a href="{subreddit}">'
        f"{page.title} subreddit</a>"
    ]


def fact_project_euler(page: PageContext) -> list[str]:
    language = page.get("projectEuler")
    if not language:
        return []
    members = page.record.get_most_recent_int("projectEuler memberCount")
    count = f"{format_count(members)} " if members else ""
    return [
        f'There are {count}<a href="https://projecteuler.net/language={language}">'
        f"Project Euler</a> users using {page.title}"
    ]


def fact_stack_overflow_survey(page: PageContext) -> list[str]:
    """Salary, usage share and user/fan counts from the developer survey.

    Each sentence depends on its own survey field, so a partially filled
    survey group still yields the sentences it can support.
    """
    path = f"stackOverflowSurvey {STACK_OVERFLOW_SURVEY_YEAR}"
    if page.record.get_group(path) is None:
        return []
    title = page.title
    salary = page.get(f"{path} medianSalary")
    using = page.get(f"{path} percentageUsing")
    users = page.get(f"{path} users")
    fans = page.get(f"{path} fans")

    sentences = []
    if salary:
        sentences.append(
            f"{title} programmers reported a median salary of "
            f"{format_currency(salary)}. "
        )
    if using:
        sentences.append(
            f"{format_percent(using)}% of respondents reported using {title}. "
        )
    if users:
        sentence = f"{format_count(users)} programmers reported using {title}"
        if fans:
            sentence += f", and {format_count(fans)} said they wanted to use it"
        sentences.append(sentence)
    if not sentences:
        return []
    intro = (
        f"In the {STACK_OVERFLOW_SURVEY_YEAR} StackOverflow "
        '<a href="https://insights.stackoverflow.com/survey">developer survey</a> '
    )
    return [(intro + "".join(sentences)).rstrip()]


def fact_tiobe(page: PageContext) -> list[str]:
    index = '<a href="https://www.tiobe.com/tiobe-index/">TIOBE Index</a>'
    rank = page.get("tiobe currentRank")
    if rank:
        return [f"{page.title} ranks #{rank} in the {index}"]
    if page.get("tiobe"):
        return [f"{page.title} appears in the {index}"]
    return []


def fact_ubuntu_package(page: PageContext) -> list[str]:
    package = page.get("ubuntuPackage")
    if not package:
        return []
    return [
        f"{page.title} Ubuntu package\n "
        f"https://packages.ubuntu.com/{UBUNTU_RELEASE}/{package}"
    ]


def fact_pygments(page: PageContext) -> list[str]:
    if not page.get("pygmentsHighlighter"):
        return []
    filename = page.get("pygmentsHighlighter filename")
    highlighting = "syntax highlighting"
    if filename:
        url = (
            "https://github.com/pygments/pygments/blob/master/pygments/lexers/"
            f"{filename}"
        )
        highlighting = f'<a href="{url}">{highlighting}</a>'
    return [
        '<a href="languages/pygments.html">Pygments</a> supports '
        f"{highlighting} for {page.title}"
    ]


def fact_jupyter_kernels(page: PageContext) -> list[str]:
    kernels = page.record.get_all_values("jupyterKernel")
    jupyter = '<a href="jupyter-notebook.html">Jupyter</a>'
    if len(kernels) == 1:
        return [
            f'There is 1 {jupyter} <a href="{kernels[0]}">Kernel</a> for {page.title}'
        ]
    if len(kernels) > 1:
        links = ", ".join(make_pretty_url_link(kernel) for kernel in kernels)
        return [f"PLDB has {len(kernels)} {jupyter} Kernels for {page.title}: {links}"]
    return []


def fact_package_repositories(page: PageContext) -> list[str]:
    repositories = page.record.get_all_values("packageRepository")
    if len(repositories) == 1:
        return [
            f'There is a <a href="{repositories[0]}">central package repository</a> '
            f"for {page.title}"
        ]
    if len(repositories) > 1:
        return [
            f"There are {len(repositories)} central package repositories for "
            f"{page.title}: {link_many_aftertext(repositories)}"
        ]
    return []


def fact_indeed_jobs(page: PageContext) -> list[str]:
    query = page.get("indeedJobs")
    if not query:
        return []
    job_count = format_count(page.record.get_most_recent_int("indeedJobs"))
    return [
        f'Indeed.com has {job_count} matches for <a href="https://www.indeed.com/jobs?'
        f'q={query}">"{query}"</a>.'
    ]


def fact_domain_registration(page: PageContext) -> list[str]:
    registered = page.get("domainName registered")
    domain = page.get("domainName")
    if not registered or not domain:
        return []
    name = f'<a href="{page.website}">{domain}</a>' if page.website else domain
    return [f"{name} was registered in {registered}"]


def fact_see_also(page: PageContext) -> list[str]:
    """Related records from Wikipedia's related list followed by curated ones."""
    related_ids = (page.get("wikipedia related") or "").split()
    related_ids += (page.get("related") or "").split()
    if not related_ids:
        return []
    links = ", ".join(page.link_to(record_id) for record_id in related_ids)
    return [f"See also: ({len(related_ids)} related languages) {links}"]


def fact_other_references(page: PageContext) -> list[str]:
    references = page.other_references
    scholar = [link for link in references if "semanticscholar" in link]
    web = [link for link in references if "semanticscholar" not in link]
    facts = []
    if scholar:
        facts.append(
            f"Read more about {page.title} on Semantic Scholar: "
            f"{link_many_aftertext(scholar)}"
        )
    if web:
        facts.append(
            f"Read more about {page.title} on the web: {link_many_aftertext(web)}"
        )
    return facts


def fact_page_source(page: PageContext) -> list[str]:
    return [
        f'HTML of this page generated by <a href="{PAGE_GENERATOR_URL}">'
        f"{PAGE_GENERATOR_NAME}</a>"
    ]


def fact_edit_link(page: PageContext) -> list[str]:
    url = EDIT_URL_FORMAT.format(id=page.record_id)
    return [f'<a href="{url}">Improve our {page.title} file</a>']


FACT_RESOLVERS: tuple[FactResolver, ...] = (
    _url_fact("website", "{title} website"),
    _url_fact("downloadPageUrl", "{title} downloads page"),
    _url_fact("wikipedia", "{title} Wikipedia page"),
    fact_github_repo,
    _url_fact("gitlabRepo", "{title} on GitLab"),
    _counted_links_fact("documentation", "docs", "documentation sites"),
    _counted_links_fact("spec", "specs", "specification sites"),
    _counted_links_fact("emailList", "mailing list", "mailing list sites"),
    _url_fact("demoVideo", "Video demo of {title}"),
    fact_github_language_repos,
    fact_superset,
    fact_origin_community,
    fact_job_estimate,
    fact_extensions,
    fact_compiles_to,
    fact_written_in,
    _url_fact("twitter", "{title} on Twitter"),
    fact_conferences,
    fact_github_bigquery,
    fact_meetup,
    fact_first_announcement,
    fact_subreddit,
    fact_project_euler,
    fact_stack_overflow_survey,
    _sentence_fact(
        "rosettaCode",
        'Explore {title} snippets on <a href="http://www.rosettacode.org/wiki/'
        'Category:{value}">Rosetta Code</a>',
    ),
    _sentence_fact(
        "nativeLanguage", "{title} is written with the native language of {value}"
    ),
    _sentence_fact(
        "gdbSupport",
        '{title} is supported by the <a href="https://www.sourceware.org/gdb/">GDB</a>',
    ),
    _url_fact("hopl", "{title} on HOPL"),
    fact_tiobe,
    _url_fact("esolang", "{title} on Esolang"),
    fact_ubuntu_package,
    _sentence_fact(
        "antlr",
        '<a href="antlr.html">ANTLR</a> <a href="{value}">grammar</a> for {title}',
    ),
    # TODO: list every LSP implementation once records carry more than one.
    _sentence_fact(
        "languageServerProtocolProject",
        '{title} <a href="language-server-protocol.html">LSP</a> '
        '<a href="{value}">implementation</a>',
    ),
    _sentence_fact(
        "codeMirror",
        '<a href="codemirror.html">CodeMirror</a> <a href="https://github.com/'
        'codemirror/codemirror5/tree/master/mode/{value}">package</a> for syntax '
        "highlighting {title}",
    ),
    _sentence_fact(
        "monaco",
        '<a href="monaco.html">Monaco</a> <a href="https://github.com/microsoft/'
        'monaco-editor/tree/main/src/basic-languages/{value}">package</a> for '
        "syntax highlighting {title}",
    ),
    fact_pygments,
    _sentence_fact(
        "linguistGrammarRepo",
        'GitHub supports <a href="{value}" title="The package used for syntax '
        'highlighting by GitHub Linguist.">syntax highlighting</a> for {title}',
    ),
    _sentence_fact(
        "quineRelay",
        '{title} appears in the <a href="https://github.com/mame/quine-relay">'
        "Quine Relay</a> project",
    ),
    fact_jupyter_kernels,
    fact_package_repositories,
    _first_url_fact("annualReportsUrl", "Annual Reports for {title}"),
    _first_url_fact("releaseNotesUrl", "Release Notes for {title}"),
    _first_url_fact("officialBlogUrl", "Official Blog page for {title}"),
    _first_url_fact("eventsPageUrl", "Events page for {title}"),
    _first_url_fact("faqPageUrl", "Frequently Asked Questions for {title}"),
    _url_fact("cheatSheetUrl", "{title} cheat sheet"),
    fact_indeed_jobs,
    fact_domain_registration,
    fact_see_also,
    fact_other_references,
    fact_page_source,
    fact_edit_link,
)


def collect_facts(page: PageContext) -> list[str]:
    """Run every resolver in registration order and flatten the results."""
    facts: list[str] = []
    for resolve in FACT_RESOLVERS:
        facts.extend(resolve(page))
    return facts
