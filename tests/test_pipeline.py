from pathlib import Path

import pytest

from wikirag.crawler import (
    CrawlConfig,
    MarkdownConverter,
    Pipeline,
    UnexpectedStatusError,
)


def _files(path):
    return sorted(p.name for p in Path(path).iterdir() if p.is_file())


def test_not_found_page_is_visited_but_not_written(config, fake_wiki, make_page):
    wiki = fake_wiki(
        {
            "start": make_page("Start", "a:b"),
            "a:b": make_page("B", "a:c", "x:y"),
            "a:c": None,
            "x:y": make_page("Y"),
        }
    )
    pipeline = Pipeline(config, session=wiki)

    result = pipeline.run("s3cret")

    assert wiki.logged_in_with == "s3cret"
    assert wiki.fetched == ["start", "a:b", "a:c", "x:y"]
    assert _files(config.output_dir) == ["a_b.md", "summary_a.md", "summary_x.md", "x_y.md"]
    assert result["stats"]["fetched_not_found"] == 1
    assert result["stats"]["stored_docs"] == 2
    assert result["frontier"]["visited"] == 4


def test_each_identifier_fetched_once(config, fake_wiki, make_page):
    wiki = fake_wiki(
        {
            "start": make_page("Start", "a:b", "x:y"),
            "a:b": make_page("B", "x:y", "start", "a:b"),
            "x:y": make_page("Y", "a:b", "start"),
        }
    )
    Pipeline(config, session=wiki).run()

    assert wiki.fetched == ["start", "a:b", "x:y"]
    assert wiki.logged_in_with is None


def test_entry_page_is_never_written(config, fake_wiki, make_page):
    wiki = fake_wiki(
        {
            "start": make_page("Start", "a:b"),
            "a:b": make_page("B", "start"),
        }
    )
    Pipeline(config, session=wiki).run()

    out = Path(config.output_dir)
    assert not (out / "start.md").exists()
    assert not (out / "summary_start.md").exists()
    summary = (out / "summary_a.md").read_text(encoding="utf-8")
    assert "Start" not in summary


def test_summary_matches_document_contents(config, fake_wiki, make_page):
    wiki = fake_wiki(
        {
            "start": make_page("Start", "a:one", "archive:old", "a:two"),
            "a:one": make_page("One"),
            "archive:old": make_page("Old"),
            "a:two": make_page("Two"),
        }
    )
    Pipeline(config, session=wiki).run()

    out = Path(config.output_dir)
    one = (out / "a_one.md").read_text(encoding="utf-8")
    two = (out / "a_two.md").read_text(encoding="utf-8")
    assert (out / "summary_a.md").read_text(encoding="utf-8") == one + "\n\n" + two
    assert (out / "archive_old.md").exists()
    assert not (out / "summary_archive.md").exists()


class _FailingConverter(MarkdownConverter):
    def build_document(self, raw_html):
        if "EXPLODE" in raw_html:
            raise ValueError("cannot convert")
        return super().build_document(raw_html)


def test_conversion_failure_skips_page_and_continues(config, fake_wiki, make_page):
    wiki = fake_wiki(
        {
            "start": make_page("Start", "a:bad", "a:good"),
            "a:bad": make_page("Bad", "a:orphan", body="EXPLODE"),
            "a:good": make_page("Good"),
            "a:orphan": make_page("Orphan"),
        }
    )
    pipeline = Pipeline(config, session=wiki, converter=_FailingConverter())

    result = pipeline.run()

    assert wiki.fetched == ["start", "a:bad", "a:good"]
    assert _files(config.output_dir) == ["a_good.md", "summary_a.md"]
    assert result["stats"]["converted_error"] == 1
    assert result["stats"]["failed_ids"] == ["a:bad"]


def test_session_error_propagates_and_keeps_written_files(config, fake_wiki, make_page):
    class BrokenWiki(fake_wiki):
        def fetch(self, identifier):
            if identifier == "x:y":
                raise UnexpectedStatusError(identifier, 503)
            return super().fetch(identifier)

    wiki = BrokenWiki(
        {
            "start": make_page("Start", "a:b", "x:y"),
            "a:b": make_page("B"),
        }
    )

    with pytest.raises(UnexpectedStatusError):
        Pipeline(config, session=wiki).run()

    assert (Path(config.output_dir) / "a_b.md").exists()


def test_runs_are_reproducible(tmp_path, fake_wiki, make_page):
    pages = {
        "start": make_page("Start", "b:one", "a:one", "c"),
        "a:one": make_page("A one", "a:two", "b:one"),
        "a:two": make_page("A two", "c"),
        "b:one": make_page("B one", "a:two"),
        "c": make_page("C"),
    }

    outputs = []
    for run in ("first", "second"):
        config = CrawlConfig(base_url="https://wiki.example.org/", output_dir=str(tmp_path / run))
        Pipeline(config, session=fake_wiki(pages)).run()
        out = Path(config.output_dir)
        outputs.append({name: (out / name).read_text(encoding="utf-8") for name in _files(out)})

    assert outputs[0] == outputs[1]
    assert sorted(outputs[0]) == [
        "a_one.md",
        "a_two.md",
        "b_one.md",
        "c.md",
        "summary_a.md",
        "summary_b.md",
        "summary_c.md",
    ]


def test_identifiers_with_slashes_get_flat_summaries(config, fake_wiki, make_page):
    wiki = fake_wiki(
        {
            "start": make_page("Start", "a:b", "wiki/syntax", "ns/sub:page"),
            "a:b": make_page("B"),
            "wiki/syntax": make_page("Syntax"),
            "ns/sub:page": make_page("Sub page"),
        }
    )

    result = Pipeline(config, session=wiki).run()

    assert _files(config.output_dir) == [
        "a_b.md",
        "ns_sub_page.md",
        "summary_a.md",
        "summary_ns_sub.md",
        "summary_wiki_syntax.md",
        "wiki_syntax.md",
    ]
    assert [Path(path).name for path in result["summaries"]] == [
        "summary_a.md",
        "summary_wiki_syntax.md",
        "summary_ns_sub.md",
    ]
    summary = (Path(config.output_dir) / "summary_wiki_syntax.md").read_text(encoding="utf-8")
    assert summary.startswith("# Syntax")


def test_empty_links_are_not_crawled(config, fake_wiki):
    wiki = fake_wiki(
        {
            "start": '<html><body><a href="/doku.php?id=">Home</a>'
            '<a href="/doku.php?id=&amp;do=index">Index</a>'
            '<a href="/doku.php?id=a:b">B</a></body></html>',
            "a:b": "<html><body><h1>B</h1></body></html>",
        }
    )
    Pipeline(config, session=wiki).run()

    assert wiki.fetched == ["start", "a:b"]
    assert _files(config.output_dir) == ["a_b.md", "summary_a.md"]


def test_fetch_time_is_accumulated(config, fake_wiki, make_page):
    wiki = fake_wiki({"start": make_page("Start", "a:b", "a:c"), "a:b": make_page("B"), "a:c": None})
    result = Pipeline(config, session=wiki).run()

    # FakeWiki reports 5 ms per found page; missing pages add nothing.
    assert result["stats"]["fetch_elapsed_ms_total"] == 10
