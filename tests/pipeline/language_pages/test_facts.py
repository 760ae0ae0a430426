"""Tests for the ordered fact resolvers."""

import pytest

from src.exceptions import UnresolvedReferenceError
from src.pipeline.language_pages import facts
from src.pipeline.language_pages.models import PageContext, Ranking, RecordLink
from src.pipeline.language_pages.record import TreeNode

LINKS = {
    "c": RecordLink("C", "c.html"),
    "javascript": RecordLink("JavaScript", "javascript.html"),
    "ruby": RecordLink("Ruby", "ruby.html"),
}


def _page(text: str, **kwargs) -> PageContext:
    kwargs.setdefault("record_links", LINKS)
    return PageContext(record_id="foo", record=TreeNode.parse(text), **kwargs)


def test_empty_record_only_gets_trailer_facts():
    page = _page("title Foo")
    for resolve in facts.FACT_RESOLVERS[:-2]:
        assert resolve(page) == [], resolve.__name__
    collected = facts.collect_facts(page)
    assert len(collected) == 2
    assert collected[0].startswith("HTML of this page generated by")
    assert collected[1] == '<a href="https://build.pldb.com/edit/foo">Improve our Foo file</a>'


def test_documentation_singular_at_one_link():
    page = _page("title Foo\ndocumentation https://docs.foo.org")
    assert facts.collect_facts(page)[0] == "Foo docs\n https://docs.foo.org"


def test_documentation_plural_from_two_links():
    page = _page(
        "title Foo\ndocumentation https://docs.foo.org\ndocumentation https://www.foo.dev/"
    )
    assert facts.collect_facts(page)[0] == (
        "PLDB has 2 documentation sites for Foo: "
        '<a href="https://docs.foo.org">docs.foo.org</a>, '
        '<a href="https://www.foo.dev/">foo.dev</a>'
    )


def test_spec_and_mailing_list_branches():
    page = _page(
        "title Foo\nspec https://spec.foo.org\n"
        "emailList https://a.foo.org\nemailList https://b.foo.org"
    )
    collected = facts.collect_facts(page)
    assert collected[0] == "Foo specs\n https://spec.foo.org"
    assert collected[1].startswith("PLDB has 2 mailing list sites for Foo: ")


def test_facts_follow_registration_order():
    page = _page(
        "title Foo\n"
        "twitter https://twitter.com/foo\n"
        "wikipedia https://en.wikipedia.org/wiki/Foo\n"
        "website https://foo.org\n"
        "downloadPageUrl https://foo.org/download\n"
        "githubRepo https://github.com/foo/foo\n"
        " stars 12345\n"
    )
    assert facts.collect_facts(page)[:5] == [
        "Foo website\n https://foo.org",
        "Foo downloads page\n https://foo.org/download",
        "Foo Wikipedia page\n https://en.wikipedia.org/wiki/Foo",
        'Foo is developed on <a href="https://github.com/foo/foo">GitHub</a> '
        "and has 12,345 stars",
        "Foo on Twitter\n https://twitter.com/foo",
    ]


def test_github_repo_without_stars():
    page = _page("title Foo\ngithubRepo https://github.com/foo/foo")
    assert facts.fact_github_repo(page) == [
        'Foo is developed on <a href="https://github.com/foo/foo">GitHub</a>'
    ]


def test_cross_references_link_through_the_index():
    page = _page("title Foo\ncompilesTo c javascript\nwrittenIn c ruby\nsupersetOf javascript")
    assert facts.fact_compiles_to(page) == [
        'Foo compiles to <a href="c.html">C</a> or <a href="javascript.html">JavaScript</a>'
    ]
    assert facts.fact_written_in(page) == [
        'Foo is written in <a href="c.html">C</a> & <a href="ruby.html">Ruby</a>'
    ]
    assert facts.fact_superset(page) == [
        'Foo is a superset of <a href="javascript.html">JavaScript</a>'
    ]


@pytest.mark.parametrize("field", ["compilesTo", "writtenIn", "supersetOf", "related"])
def test_unresolved_cross_reference_raises(field):
    page = _page(f"title Foo\n{field} c nosuchlang")
    with pytest.raises(UnresolvedReferenceError) as excinfo:
        facts.collect_facts(page)
    assert excinfo.value.context["reference"] == "nosuchlang"


def test_see_also_merges_both_sources():
    page = _page("title Foo\nwikipedia https://wp\n related c\nrelated ruby")
    assert facts.fact_see_also(page) == [
        'See also: (2 related languages) <a href="c.html">C</a>, <a href="ruby.html">Ruby</a>'
    ]


def test_stack_overflow_survey_three_sentences():
    page = _page(
        "title Foo\nstackOverflowSurvey\n 2021\n  users 1234\n  medianSalary 85000\n"
        "  fans 5678\n  percentageUsing 0.48237"
    )
    assert facts.fact_stack_overflow_survey(page) == [
        'In the 2021 StackOverflow <a href="https://insights.stackoverflow.com/survey">'
        "developer survey</a> Foo programmers reported a median salary of $85,000. "
        "48.24% of respondents reported using Foo. "
        "1,234 programmers reported using Foo, and 5,678 said they wanted to use it"
    ]


def test_stack_overflow_survey_degrades_per_field():
    page = _page("title Foo\nstackOverflowSurvey\n 2021\n  percentageUsing 0.5")
    (fact,) = facts.fact_stack_overflow_survey(page)
    assert fact.endswith("developer survey</a> 50% of respondents reported using Foo.")
    empty = _page("title Foo\nstackOverflowSurvey\n 2021")
    assert facts.fact_stack_overflow_survey(empty) == []


def test_tiobe_rank_or_presence():
    ranked = _page("title Foo\ntiobe Foo\n currentRank 3")
    listed = _page("title Foo\ntiobe Foo")
    assert facts.fact_tiobe(ranked)[0].startswith("Foo ranks #3 in the ")
    assert facts.fact_tiobe(listed)[0].startswith("Foo appears in the ")


def test_job_estimate_threshold():
    assert facts.fact_job_estimate(_page("title Foo", ranking=Ranking(number_of_jobs=10))) == []
    assert facts.fact_job_estimate(
        _page("title Foo", ranking=Ranking(number_of_jobs=2400))
    ) == ["PLDB estimates there are currently 2k job openings for Foo programmers."]


def test_counts_use_most_recent_rows():
    page = _page(
        "title Foo\nsubreddit https://reddit.com/r/foo\n memberCount\n  2020 10\n  2022 2500\n"
        "indeedJobs foo developer\n 2021 40\n 2022 1200"
    )
    assert facts.fact_subreddit(page) == [
        'There are 2,500 members in the <a href="https://reddit.com/r/foo">Foo subreddit</a>'
    ]
    assert facts.fact_indeed_jobs(page) == [
        'Indeed.com has 1,200 matches for <a href="https://www.indeed.com/jobs?'
        'q=foo developer">"foo developer"</a>.'
    ]


def test_jupyter_and_package_repository_branches():
    one = _page("title Foo\njupyterKernel https://k1\npackageRepository https://pkgs")
    two = _page(
        "title Foo\njupyterKernel https://k1\njupyterKernel https://k2\n"
        "packageRepository https://p1\npackageRepository https://p2"
    )
    assert facts.fact_jupyter_kernels(one)[0].startswith("There is 1 ")
    assert facts.fact_jupyter_kernels(two)[0].startswith("PLDB has 2 ")
    assert facts.fact_package_repositories(one) == [
        'There is a <a href="https://pkgs">central package repository</a> for Foo'
    ]
    assert facts.fact_package_repositories(two) == [
        "There are 2 central package repositories for Foo: 1. 2.\n"
        " link https://p1 1.\n link https://p2 2."
    ]


def test_other_references_split_into_two_buckets():
    page = _page(
        "title Foo\nreference https://www.semanticscholar.org/paper/1\n"
        "reference https://blog.example.com/foo"
    )
    assert facts.fact_other_references(page) == [
        "Read more about Foo on Semantic Scholar: 1.\n"
        " link https://www.semanticscholar.org/paper/1 1.",
        "Read more about Foo on the web: 1.\n link https://blog.example.com/foo 1.",
    ]


def test_url_fields_use_first_value():
    page = _page(
        "title Foo\nreleaseNotesUrl https://foo.org/r1\nreleaseNotesUrl https://foo.org/r2\n"
        "faqPageUrl https://foo.org/faq"
    )
    collected = facts.collect_facts(page)
    assert "Release Notes for Foo\n https://foo.org/r1" in collected
    assert "Frequently Asked Questions for Foo\n https://foo.org/faq" in collected
    assert all("r2" not in fact for fact in collected)


def test_extensions_and_origin_community():
    page = _page("title Foo\nextensions foo fooi\noriginCommunity Bell Labs && MIT")
    assert facts.fact_extensions(page) == ["file extensions for Foo include foo and fooi"]
    assert facts.fact_origin_community(page) == [
        'Foo first developed in <a href="../lists/originCommunities.html#bellLabs">'
        'Bell Labs</a> and <a href="../lists/originCommunities.html#mit">MIT</a>'
    ]


def test_github_bigquery_needs_users_and_repos():
    full = _page("title Foo\ngithubBigQuery Foo\n users 2500\n repos 1200")
    assert facts.fact_github_bigquery(full) == [
        "The Google BigQuery Public Dataset GitHub snapshot shows 3k users using Foo "
        'in 1k repos on <a href="https://api.github.com/search/repositories?'
        'q=language:Foo">GitHub</a>'
    ]
    assert facts.fact_github_bigquery(_page("title Foo\ngithubBigQuery Foo\n users 2500")) == []


def test_meetup_group_count_is_optional():
    counted = _page("title Foo\nmeetup https://www.meetup.com/topics/foo\n groupCount 1234")
    bare = _page("title Foo\nmeetup https://www.meetup.com/topics/foo")
    assert facts.fact_meetup(counted) == [
        'Check out the 1,234 <a href="https://www.meetup.com/topics/foo/">'
        "Foo meetup groups</a> on Meetup.com."
    ]
    assert facts.fact_meetup(bare) == [
        'Check out the <a href="https://www.meetup.com/topics/foo/">'
        "Foo meetup groups</a> on Meetup.com."
    ]


def test_first_announcement_method_is_optional():
    full = _page("title Foo\nfirstAnnouncement https://a\nannouncementMethod Usenet")
    bare = _page("title Foo\nfirstAnnouncement https://a")
    assert facts.fact_first_announcement(full) == [
        '<a href="https://a">First announcement of</a> Foo via Usenet'
    ]
    assert facts.fact_first_announcement(bare) == [
        '<a href="https://a">First announcement of</a> Foo'
    ]


def test_project_euler_member_count_is_optional():
    counted = _page("title Foo\nprojectEuler FOO\n memberCount\n  2019 10\n  2022 1500")
    bare = _page("title Foo\nprojectEuler FOO")
    assert facts.fact_project_euler(counted) == [
        'There are 1,500 <a href="https://projecteuler.net/language=FOO">'
        "Project Euler</a> users using Foo"
    ]
    assert facts.fact_project_euler(bare) == [
        'There are <a href="https://projecteuler.net/language=FOO">'
        "Project Euler</a> users using Foo"
    ]


def test_conferences_fall_back_to_url_label():
    page = _page(
        "title Foo\nconference https://foocon.org FooCon\nconference https://fooconf.eu"
    )
    assert facts.fact_conferences(page) == [
        'Recurring conference about Foo: <a href="https://foocon.org">FooCon</a>, '
        '<a href="https://fooconf.eu">https://fooconf.eu</a>'
    ]
    assert facts.fact_conferences(_page("title Foo")) == []


def test_domain_registration_links_only_with_website():
    linked = _page(
        "title Foo\nwebsite https://foo.org\ndomainName foo.org\n registered 2005"
    )
    plain = _page("title Foo\ndomainName foo.org\n registered 2005")
    unregistered = _page("title Foo\ndomainName foo.org")
    assert facts.fact_domain_registration(linked) == [
        '<a href="https://foo.org">foo.org</a> was registered in 2005'
    ]
    assert facts.fact_domain_registration(plain) == ["foo.org was registered in 2005"]
    assert facts.fact_domain_registration(unregistered) == []


def test_pygments_links_lexer_file_when_known():
    full = _page("title Foo\npygmentsHighlighter Foo\n filename foo.py")
    bare = _page("title Foo\npygmentsHighlighter Foo")
    assert facts.fact_pygments(full) == [
        '<a href="languages/pygments.html">Pygments</a> supports <a href="https://'
        'github.com/pygments/pygments/blob/master/pygments/lexers/foo.py">'
        "syntax highlighting</a> for Foo"
    ]
    assert facts.fact_pygments(bare) == [
        '<a href="languages/pygments.html">Pygments</a> supports syntax highlighting'
        " for Foo"
    ]


def test_ubuntu_package_link():
    page = _page("title Foo\nubuntuPackage foo-lang")
    assert facts.fact_ubuntu_package(page) == [
        "Foo Ubuntu package\n https://packages.ubuntu.com/jammy/foo-lang"
    ]
    assert facts.fact_ubuntu_package(_page("title Foo")) == []
