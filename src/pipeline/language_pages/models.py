"""Value types threaded through a single page render.

``PageContext`` bundles the record with everything the knowledge base knows
about it from the outside (rank estimates, neighbours, the feature catalog and
the cross-reference index) so that rendering is a pure function of one object.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from src.config import CURRENT_YEAR, PERMALINK_FORMAT, QUICK_LINK_ICONS, TYPE_NAMES
from src.exceptions import UnresolvedReferenceError

from .record import Record


@dataclass(frozen=True)
class Feature:
    """Feature catalog entry.

    ``token_path`` is the record path holding the language's spelling of the
    feature (for example ``booleanTokens``), when the feature has one.
    """

    id: str
    name: str
    link: str
    token_path: str | None = None


@dataclass(frozen=True)
class RecordLink:
    title: str
    permalink: str

    @property
    def anchor(self) -> str:
        return f'<a href="{self.permalink}">{self.title}</a>'


@dataclass(frozen=True)
class Ranking:
    """Knowledge-base wide estimates for one record. All values are optional."""

    rank: int = 0
    language_rank: int = 0
    is_language: bool = False
    rank_debug: str = ""
    number_of_users: int = 0
    number_of_jobs: int = 0
    number_of_repos: int = 0
    book_count: int = 0
    paper_count: int = 0
    fact_sponsors: tuple[str, ...] | None = None


@dataclass(frozen=True)
class Example:
    code: str
    source: str
    link: str = ""


# (record path, display source, fixed URL or record path holding the link)
_EXAMPLE_SOURCES: list[tuple[str, str, str]] = [
    ("example", "the web", ""),
    ("compilerExplorer example", "Compiler Explorer", "https://godbolt.org/"),
    ("rijuRepl example", "Riju", "rijuRepl"),
    ("leachim6 example", "hello-world", "https://github.com/leachim6/hello-world"),
    ("wikipedia example", "Wikipedia", "wikipedia"),
]


@dataclass(frozen=True)
class PageContext:
    """All inputs of one page render.

    Parameters
    ----------
    record_id : str
        Identifier of the record (its file stem).
    record : Record
        The record being documented.
    previous_permalink, next_permalink : str
        Neighbours by global rank, used for the navigation anchors.
    ranking : Ranking
        Rank and usage estimates computed by the knowledge base.
    features : Mapping[str, Feature]
        Feature catalog keyed by feature id.
    record_links : Mapping[str, RecordLink]
        Cross-reference index used to link other records by id.
    current_year : int
        Calendar year used for age computations.
    icons : Mapping[str, str]
        Quick-link icon markup keyed by link kind.
    """

    record_id: str
    record: Record
    previous_permalink: str = ""
    next_permalink: str = ""
    ranking: Ranking = field(default_factory=Ranking)
    features: Mapping[str, Feature] = field(default_factory=dict)
    record_links: Mapping[str, RecordLink] = field(default_factory=dict)
    current_year: int = CURRENT_YEAR
    icons: Mapping[str, str] = field(default_factory=lambda: dict(QUICK_LINK_ICONS))

    def get(self, path: str) -> str | None:
        return self.record.get_scalar(path)

    @property
    def title(self) -> str:
        return self.get("title") or self.record_id

    @property
    def permalink(self) -> str:
        return PERMALINK_FORMAT.format(id=self.record_id)

    @property
    def type_id(self) -> str:
        return self.get("type") or ""

    @property
    def type_name(self) -> str:
        return TYPE_NAMES.get(self.type_id, self.type_id)

    @property
    def appeared(self) -> int | None:
        value = self.get("appeared")
        if value is None or not value.strip().isdigit():
            return None
        return int(value)

    @property
    def website(self) -> str | None:
        return self.get("website")

    @property
    def creators(self) -> list[str]:
        value = self.get("creators")
        return [name.strip() for name in value.split(" and ")] if value else []

    @property
    def origin_communities(self) -> list[str]:
        value = self.get("originCommunity")
        return [name.strip() for name in value.split(" && ")] if value else []

    @property
    def extensions(self) -> str | None:
        return self.get("extensions")

    @property
    def other_references(self) -> list[str]:
        return self.record.get_all_values("reference")

    @property
    def examples(self) -> list[Example]:
        """Code examples from every known source, in source order."""
        examples = []
        for path, source, link_source in _EXAMPLE_SOURCES:
            if not link_source or link_source.startswith("http"):
                link = link_source
            else:
                link = self.get(link_source) or ""
            for node in self.record.get_groups(path):
                code = node.children_to_string()
                if code.strip():
                    examples.append(Example(code=code, source=source, link=link))
        return examples

    def link_to(self, record_id: str) -> str:
        """Return an anchor for another record.

        Raises
        ------
        UnresolvedReferenceError
            If ``record_id`` is not in the cross-reference index.
        """
        target = self.record_links.get(record_id)
        if target is None:
            raise UnresolvedReferenceError(
                f"'{self.record_id}' references unknown record '{record_id}'",
                context={"record_id": self.record_id, "reference": record_id},
            )
        return target.anchor
