"""Tests for the batch page runner."""

from pathlib import Path

import pytest

from src.exceptions import ConfigurationError
from src.pipeline.language_pages import runner
from src.pipeline.language_pages.record import TreeNode


def _write_records(directory: Path, records: dict[str, str]) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    for record_id, text in records.items():
        (directory / f"{record_id}.pldb").write_text(text, encoding="utf-8")
    return directory


RECORDS = {
    "python": "title Python\ntype pl\nrank 0\nwrittenIn c\n",
    "c": "title C\ntype pl\nrank 1\n",
    "vim": "title Vim\ntype editor\nrank 2\n",
}


def test_render_pages_writes_one_page_per_record(tmp_path):
    input_dir = _write_records(tmp_path / "records", RECORDS)
    output_dir = tmp_path / "out"
    summary = runner.render_pages(input_dir, output_dir)
    assert sorted(path.name for path in summary.written) == [
        "c.scroll",
        "python.scroll",
        "vim.scroll",
    ]
    assert summary.failed == {}
    python = (output_dir / "python.scroll").read_text(encoding="utf-8")
    assert '- Python is written in <a href="c.html">C</a>' in python
    assert "keyboardNav vim.html c.html" in python


def test_bad_records_are_skipped_and_the_rest_written(tmp_path):
    records = dict(RECORDS)
    records["broken"] = "title Broken\nwrittenIn nosuchlang\n"
    records["spaced"] = "title Bad%20Title\n"
    input_dir = _write_records(tmp_path / "records", records)
    summary = runner.render_pages(input_dir, tmp_path / "out")
    assert set(summary.failed) == {"broken", "spaced"}
    assert "nosuchlang" in summary.failed["broken"]
    assert len(summary.written) == 3
    assert not (tmp_path / "out" / "broken.scroll").exists()


def test_rank_records_orders_ranked_then_unranked_by_id():
    records = {
        "zed": TreeNode.parse("title Zed"),
        "b": TreeNode.parse("rank 1"),
        "a": TreeNode.parse("title A"),
        "c": TreeNode.parse("rank 0"),
    }
    assert runner.rank_records(records) == ["c", "b", "a", "zed"]


def test_page_contexts_wrap_around_and_rank_languages():
    records = {key: TreeNode.parse(text) for key, text in RECORDS.items()}
    contexts = {
        page.record_id: page
        for page in runner.build_page_contexts(records, {}, current_year=2024)
    }
    assert contexts["python"].previous_permalink == "vim.html"
    assert contexts["python"].next_permalink == "c.html"
    assert contexts["vim"].next_permalink == "python.html"
    assert contexts["c"].ranking.is_language
    assert contexts["c"].ranking.language_rank == 1
    assert not contexts["vim"].ranking.is_language
    assert contexts["vim"].ranking.rank == 2
    assert contexts["vim"].current_year == 2024


def test_estimate_ranking_reads_record_counts():
    record = TreeNode.parse(
        "estimatedUsers 1,500\nindeedJobs foo\n 2020 5\n 2022 40\n"
        "githubLanguage Foo\n repos 321\n"
        "isbndb 2\n title|year\n A|1\n B|2\n"
        "semanticScholar 0\nfactSponsor ann\nfactSponsor bob"
    )
    ranking = runner.estimate_ranking(record, rank=3, language_rank=None)
    assert ranking.rank == 3
    assert not ranking.is_language
    assert ranking.number_of_users == 1500
    assert ranking.number_of_jobs == 40
    assert ranking.number_of_repos == 321
    assert ranking.book_count == 2
    assert ranking.paper_count == 0
    assert ranking.fact_sponsors == ("ann", "bob")


def test_feature_catalog_feeds_the_features_table(tmp_path):
    catalog = tmp_path / "features.pldb"
    catalog.write_text(
        "hasComments\n name Comments\n link ../features/has-comments.html\n"
        "hasBooleans\n name Booleans\n token booleanTokens\n",
        encoding="utf-8",
    )
    features = runner.load_feature_catalog(catalog)
    assert features["hasBooleans"].token_path == "booleanTokens"
    assert features["hasBooleans"].link == "../features/hasBooleans.html"
    input_dir = _write_records(
        tmp_path / "records",
        {"foo": "title Foo\nbooleanTokens true false\nfeatures\n hasBooleans true"},
    )
    runner.render_pages(input_dir, tmp_path / "out", features_path=catalog)
    page = (tmp_path / "out" / "foo.scroll").read_text(encoding="utf-8")
    assert "  Feature Booleans" in page
    assert "  Token true false" in page


def test_missing_feature_catalog_is_empty(tmp_path):
    assert runner.load_feature_catalog(tmp_path / "nope.pldb") == {}
    assert runner.load_feature_catalog(None) == {}


def test_missing_records_directory_is_a_configuration_error(tmp_path):
    with pytest.raises(ConfigurationError):
        runner.render_pages(tmp_path / "missing", tmp_path / "out")


def test_run_from_config_reports_failure(tmp_path):
    assert runner.run_from_config(tmp_path / "missing", tmp_path / "out") is False
    input_dir = _write_records(tmp_path / "records", {"c": RECORDS["c"]})
    assert runner.run_from_config(input_dir, tmp_path / "out", tmp_path / "none") is True
    assert (tmp_path / "out" / "c.scroll").exists()


def test_quote_in_table_cell_does_not_stop_the_batch(tmp_path):
    input_dir = _write_records(
        tmp_path / "records",
        {
            "good": "title Good\n",
            "quoted": "title Quoted\nisbndb 1\n title|authors|isbn13|year|publisher\n"
            ' "Quoted Guide|Ann|978|2020|Pub\n',
        },
    )
    summary = runner.render_pages(input_dir, tmp_path / "out")
    assert summary.failed == {}
    assert sorted(path.name for path in summary.written) == ["good.scroll", "quoted.scroll"]
    page = (tmp_path / "out" / "quoted.scroll").read_text(encoding="utf-8")
    assert ' "Quoted Guide|https://isbndb.com/book/978|Ann|2020|Pub' in page
