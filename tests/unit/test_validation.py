"""Tests for snapshot validation."""

import copy
import logging

from uncanon.services.snapshots import Phase
from uncanon.services.validation import (
    validate_search_snapshot,
    validate_snapshot,
    validate_summary_snapshot,
    validate_title_snapshot,
)


# ---------------------------------------------------------------------------
# Sample fixture data
# ---------------------------------------------------------------------------


def make_title(**overrides) -> dict:
    title = {
        "id": "tt0079944",
        "title": "Stalker",
        "originalTitle": "Сталкер",
        "image": "https://imdb-api.com/images/original/stalker.jpg",
        "plot": "A guide leads two men through an area known as the Zone.",
        "directors": "Andrei Tarkovsky",
        "writers": "Arkadiy Strugatskiy, Boris Strugatskiy",
        "stars": "Alisa Freyndlikh, Aleksandr Kaydanovskiy",
        "wikipedia": {
            "url": "https://en.wikipedia.org/wiki/Stalker_(1979_film)",
            "plotShort": {"plainText": "Short plot.", "html": "<p>Short plot.</p>"},
            "plotFull": {"plainText": "Full plot.", "html": "<p>Full plot.</p>"},
        },
        "errorMessage": "",
    }
    title.update(overrides)
    return title


def make_summary(**overrides) -> dict:
    summary = {
        "title": "Andrei Tarkovsky",
        "extract": "Andrei Arsenyevich Tarkovsky was a Russian filmmaker.",
        "extract_html": "<p><b>Andrei Arsenyevich Tarkovsky</b> was a Russian filmmaker.</p>",
        "thumbnail": {"source": "https://upload.wikimedia.org/tarkovsky.jpg"},
        "content_urls": {
            "desktop": {"page": "https://en.wikipedia.org/wiki/Andrei_Tarkovsky"},
            "mobile": {"page": "https://en.m.wikipedia.org/wiki/Andrei_Tarkovsky"},
        },
    }
    summary.update(overrides)
    return summary


# ---------------------------------------------------------------------------
# Search snapshot
# ---------------------------------------------------------------------------


class TestValidateSearchSnapshot:
    def test_single_result_is_clean(self) -> None:
        assert validate_search_snapshot({1: {"results": [{"id": "tt1"}]}}) == []

    def test_flags_zero_results(self) -> None:
        issues = validate_search_snapshot({2: {"results": []}})
        assert [(i.entity_id, i.message) for i in issues] == [(2, "expected 1 search result, got 0")]

    def test_flags_multiple_results(self) -> None:
        issues = validate_search_snapshot({3: {"results": [{"id": "tt1"}, {"id": "tt2"}]}})
        assert [i.message for i in issues] == ["expected 1 search result, got 2"]

    def test_only_flags_offending_entries(self) -> None:
        snapshot = {
            1: {"results": [{"id": "tt1"}]},
            2: {"results": []},
            3: {"results": [{"id": "tt3"}, {"id": "tt4"}]},
        }
        issues = validate_search_snapshot(snapshot)
        assert {i.entity_id for i in issues} == {2, 3}

    def test_does_not_alter_snapshot(self) -> None:
        snapshot = {1: {"results": [{"id": "tt1"}]}, 2: {"results": []}}
        before = copy.deepcopy(snapshot)
        validate_search_snapshot(snapshot)
        assert snapshot == before

    def test_flags_missing_results_list(self) -> None:
        issues = validate_search_snapshot({4: {"errorMessage": "Invalid API Key"}})
        messages = [i.message for i in issues]
        assert any(m.startswith("malformed results") for m in messages)
        assert "provider error: Invalid API Key" in messages

    def test_flags_non_object_entry(self) -> None:
        issues = validate_search_snapshot({5: "oops"})
        assert issues
        assert issues[0].message.startswith("malformed response")

    def test_flags_candidate_with_non_string_id(self) -> None:
        issues = validate_search_snapshot({6: {"results": [{"id": 42}]}})
        assert any("results.0.id" in i.message for i in issues)

    def test_flags_unlike_top_title(self) -> None:
        snapshot = {1: {"results": [{"id": "tt9", "title": "The Avengers"}]}}
        issues = validate_search_snapshot(snapshot, titles={1: "Stalker"})
        assert len(issues) == 1
        assert "looks unlike" in issues[0].message

    def test_accepts_matching_top_title(self) -> None:
        snapshot = {1: {"results": [{"id": "tt0079944", "title": "Stalker"}]}}
        assert validate_search_snapshot(snapshot, titles={1: "Stalker"}) == []


# ---------------------------------------------------------------------------
# Title snapshot
# ---------------------------------------------------------------------------


class TestValidateTitleSnapshot:
    def test_complete_title_is_clean(self) -> None:
        assert validate_title_snapshot({1: make_title()}) == []

    def test_flags_missing_field(self) -> None:
        title = make_title()
        del title["plot"]
        issues = validate_title_snapshot({1: title})
        assert [i.message for i in issues] == ["malformed plot: Field required"]

    def test_flags_mistyped_field(self) -> None:
        issues = validate_title_snapshot({1: make_title(stars=["A", "B"])})
        assert len(issues) == 1
        assert issues[0].message.startswith("malformed stars")

    def test_flags_nested_plot_field(self) -> None:
        title = make_title()
        title["wikipedia"]["plotShort"]["html"] = None
        issues = validate_title_snapshot({1: title})
        assert [i.message.split(":")[0] for i in issues] == ["malformed wikipedia.plotShort.html"]

    def test_flags_provider_error(self) -> None:
        issues = validate_title_snapshot({1: make_title(errorMessage="Maximum usage")})
        assert [i.message for i in issues] == ["provider error: Maximum usage"]


# ---------------------------------------------------------------------------
# Summary snapshot
# ---------------------------------------------------------------------------


class TestValidateSummarySnapshot:
    def test_complete_summary_is_clean(self) -> None:
        assert validate_summary_snapshot({1: make_summary()}) == []

    def test_thumbnail_is_optional(self) -> None:
        summary = make_summary()
        del summary["thumbnail"]
        assert validate_summary_snapshot({1: summary}) == []

    def test_flags_mistyped_thumbnail_source(self) -> None:
        issues = validate_summary_snapshot({1: make_summary(thumbnail={"source": 3})})
        assert [i.message.split(":")[0] for i in issues] == ["malformed thumbnail.source"]

    def test_flags_missing_mobile_page(self) -> None:
        summary = make_summary()
        del summary["content_urls"]["mobile"]
        issues = validate_summary_snapshot({1: summary})
        assert [i.message.split(":")[0] for i in issues] == ["malformed content_urls.mobile"]


# ---------------------------------------------------------------------------
# validate_snapshot
# ---------------------------------------------------------------------------


class TestValidateSnapshot:
    def test_logs_each_issue_as_warning(self, caplog) -> None:
        caplog.set_level(logging.WARNING, logger="uncanon.services.validation")
        snapshot = {1: {"results": [{"id": "tt1"}]}, 2: {"results": []}}

        issues = validate_snapshot(Phase.IMDB_SEARCH, snapshot)

        assert len(issues) == 1
        warnings = [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]
        assert warnings == ["[imdb_search] 2: expected 1 search result, got 0"]

    def test_dispatches_by_phase(self) -> None:
        title = make_title()
        del title["image"]
        issues = validate_snapshot(Phase.IMDB_TITLE, {7: title})
        assert [(i.phase, i.entity_id) for i in issues] == [(Phase.IMDB_TITLE, 7)]
