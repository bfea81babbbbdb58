"""Mentor-side student discovery: score, rank and filter candidate profiles.

Scores carry random jitter, so each profile is scored exactly once when the
list is built; filtering reuses those stored scores.
"""

from typing import Any, Iterable, Mapping, Optional

from gradmatch.models.candidate import CandidateProfile, ScoredCandidate
from gradmatch.utils.logger import get_logger
from gradmatch.utils.match_scorer import MatchScorer

ALL_FIELDS = "all-fields"
ALL_LEVELS = "all-levels"
ALL_LOCATIONS = "all-locations"


def rank_candidates(
    records: Iterable[Mapping[str, Any] | CandidateProfile],
    exclude_ids: Iterable[str] = (),
    scorer: Optional[MatchScorer] = None,
) -> list[ScoredCandidate]:
    """Score candidate profiles once and sort them by match score, best first.

    Args:
        records: Profile rows from the store (or CandidateProfile instances)
        exclude_ids: user_ids already connected to the mentor
        scorer: MatchScorer to use (defaults to MatchScorer())

    Returns:
        ScoredCandidate list sorted by descending score; ties keep input order
    """
    logger = get_logger(
        correlation_id="candidate-discovery",
        phase="student_discovery",
        component="candidate_discovery",
    )
    scorer = scorer or MatchScorer()
    excluded = set(exclude_ids)

    scored: list[ScoredCandidate] = []
    for record in records:
        profile = (
            record
            if isinstance(record, CandidateProfile)
            else CandidateProfile.from_record(record)
        )
        if profile.user_id is not None and profile.user_id in excluded:
            continue
        scored.append(ScoredCandidate(profile=profile, match_score=scorer.score(profile)))

    scored.sort(key=lambda candidate: candidate.match_score, reverse=True)

    logger.info(
        "Candidates ranked",
        ranked_count=len(scored),
        excluded_count=len(excluded),
    )
    return scored


def _matches_search(profile: CandidateProfile, term: str) -> bool:
    term = term.lower()
    for text in (profile.display_name, profile.field_of_study, profile.current_institution):
        if text and term in text.lower():
            return True
    return any(term in interest.lower() for interest in profile.research_interests)


def filter_candidates(
    candidates: Iterable[ScoredCandidate],
    search_term: str = "",
    field: Optional[str] = None,
    level: Optional[str] = None,
    location: Optional[str] = None,
) -> list[ScoredCandidate]:
    """Filter ranked candidates without rescoring them.

    Args:
        candidates: Output of rank_candidates()
        search_term: Case-insensitive match on name, field, institution or interests
        field: Exact field_of_study, or None / "all-fields"
        level: Exact academic_level, or None / "all-levels"
        location: Substring of location, or None / "all-locations"

    Returns:
        Candidates passing every active filter, order preserved
    """
    filtered = list(candidates)

    if search_term:
        filtered = [c for c in filtered if _matches_search(c.profile, search_term)]

    if field and field != ALL_FIELDS:
        filtered = [c for c in filtered if c.profile.field_of_study == field]

    if level and level != ALL_LEVELS:
        filtered = [c for c in filtered if c.profile.academic_level == level]

    if location and location != ALL_LOCATIONS:
        filtered = [
            c for c in filtered if c.profile.location and location in c.profile.location
        ]

    return filtered
