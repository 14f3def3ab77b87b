"""Advisory checks of snapshot entries before they are applied.

Nothing here rejects data. Every problem becomes a ValidationIssue that is
logged as a warning; the merge step still applies whatever fields are
well-formed.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ValidationError
from rapidfuzz import fuzz

from uncanon.schemas.imdb import SearchMovieData, TitleData
from uncanon.schemas.wikipedia import PageSummary
from uncanon.services.snapshots import Phase

logger = logging.getLogger(__name__)

TITLE_MATCH_THRESHOLD = 60  # Minimum similarity between stored title and top candidate


@dataclass(frozen=True)
class ValidationIssue:
    phase: Phase
    entity_id: int
    message: str

    def __str__(self) -> str:
        return f"[{self.phase.value}] {self.entity_id}: {self.message}"


def _schema_issues(
    phase: Phase, entity_id: int, model: type[BaseModel], raw: Any
) -> list[ValidationIssue]:
    try:
        model.model_validate(raw)
    except ValidationError as e:
        issues = []
        for error in e.errors():
            location = ".".join(str(part) for part in error["loc"]) or "response"
            issues.append(ValidationIssue(phase, entity_id, f"malformed {location}: {error['msg']}"))
        return issues
    return []


def _provider_error(phase: Phase, entity_id: int, raw: Any) -> list[ValidationIssue]:
    message = raw.get("errorMessage") if isinstance(raw, dict) else None
    if message:
        return [ValidationIssue(phase, entity_id, f"provider error: {message}")]
    return []


def validate_search_snapshot(
    snapshot: Mapping[int, Any],
    titles: Mapping[int, str] | None = None,
) -> list[ValidationIssue]:
    """
    Check IMDb search entries.

    Each search is expected to resolve to exactly one candidate. When
    *titles* is given, the top candidate is also compared with the stored
    film title.

    Args:
        snapshot: Raw search responses keyed by film ID
        titles: Stored film titles keyed by film ID

    Returns:
        Issues found, in snapshot order
    """
    phase = Phase.IMDB_SEARCH
    issues: list[ValidationIssue] = []
    for entity_id, raw in snapshot.items():
        issues.extend(_schema_issues(phase, entity_id, SearchMovieData, raw))
        issues.extend(_provider_error(phase, entity_id, raw))

        results = raw.get("results") if isinstance(raw, dict) else None
        if not isinstance(results, list):
            continue
        if len(results) != 1:
            issues.append(
                ValidationIssue(phase, entity_id, f"expected 1 search result, got {len(results)}")
            )

        expected = (titles or {}).get(entity_id)
        candidate = results[0].get("title") if results and isinstance(results[0], dict) else None
        if expected and isinstance(candidate, str):
            score = fuzz.ratio(expected.lower(), candidate.lower())
            if score < TITLE_MATCH_THRESHOLD:
                issues.append(
                    ValidationIssue(
                        phase,
                        entity_id,
                        f"top result {candidate!r} looks unlike {expected!r} ({score:.0f}%)",
                    )
                )
    return issues


def validate_title_snapshot(snapshot: Mapping[int, Any]) -> list[ValidationIssue]:
    """Check IMDb title entries, including the nested Wikipedia plot section."""
    phase = Phase.IMDB_TITLE
    issues: list[ValidationIssue] = []
    for entity_id, raw in snapshot.items():
        issues.extend(_schema_issues(phase, entity_id, TitleData, raw))
        issues.extend(_provider_error(phase, entity_id, raw))
    return issues


def validate_summary_snapshot(snapshot: Mapping[int, Any]) -> list[ValidationIssue]:
    """Check Wikipedia summary entries."""
    phase = Phase.WIKIPEDIA_SUMMARY
    issues: list[ValidationIssue] = []
    for entity_id, raw in snapshot.items():
        issues.extend(_schema_issues(phase, entity_id, PageSummary, raw))
    return issues


def validate_snapshot(
    phase: Phase,
    snapshot: Mapping[int, Any],
    titles: Mapping[int, str] | None = None,
) -> list[ValidationIssue]:
    """
    Run the checks for *phase* and log every issue found.

    Returns:
        Issues found; the snapshot itself is left untouched
    """
    if phase is Phase.IMDB_SEARCH:
        issues = validate_search_snapshot(snapshot, titles)
    elif phase is Phase.IMDB_TITLE:
        issues = validate_title_snapshot(snapshot)
    else:
        issues = validate_summary_snapshot(snapshot)

    for issue in issues:
        logger.warning(str(issue))
    flagged = len({issue.entity_id for issue in issues})
    logger.info(f"Validated {len(snapshot)} {phase.value} entries: {flagged} flagged")
    return issues
