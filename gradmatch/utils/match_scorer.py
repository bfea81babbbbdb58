"""
Match Scorer Module

Heuristic 0-100 compatibility score for candidate profiles, used for sort
order and a display badge. Profile completeness drives the base score; a
random jitter is added on top, so repeated calls with the same profile can
differ. Score once per load and keep the value if a stable order matters.

Example Usage:
    from gradmatch.utils.match_scorer import compute_match_score

    score = compute_match_score({"bio": "ML researcher", "gpa": 3.8})

    # Deterministic in tests
    score = compute_match_score(profile, rng=lambda: 0.5)
"""

import math
import random
from typing import Any, Callable, Mapping, Optional, Union

from gradmatch.models.candidate import CandidateProfile
from gradmatch.models.config import ScoringConfig

RandomSource = Callable[[], float]

ProfileInput = Union[CandidateProfile, Mapping[str, Any]]


def _as_profile(profile: ProfileInput) -> CandidateProfile:
    if isinstance(profile, CandidateProfile):
        return profile
    return CandidateProfile.from_record(profile)


class MatchScorer:
    """Scores candidate profiles with configurable weights and an injected rng."""

    def __init__(
        self,
        config: Optional[ScoringConfig] = None,
        rng: Optional[RandomSource] = None,
    ) -> None:
        """
        Args:
            config: Scoring weights (defaults to ScoringConfig())
            rng: Zero-argument callable returning a float in [0, 1)
                (defaults to random.random)
        """
        self.config = config or ScoringConfig()
        self.rng = rng or random.random

    def base_score(self, profile: ProfileInput) -> int:
        """Deterministic part of the score, before jitter and clamping."""
        profile = _as_profile(profile)
        cfg = self.config

        score = cfg.base_score
        if profile.bio and profile.bio.strip():
            score += cfg.bio_weight
        if profile.research_interests:
            score += cfg.research_interests_weight
        if profile.skills:
            score += cfg.skills_weight
        if profile.gpa is not None and profile.gpa > cfg.gpa_threshold:
            score += cfg.gpa_weight
        if profile.current_institution and profile.current_institution.strip():
            score += cfg.institution_weight

        return score

    def jitter(self) -> int:
        """Random perturbation in [-offset, span - offset - 1], i.e. [-10, +9] by default."""
        return math.floor(self.rng() * self.config.jitter_span) - self.config.jitter_offset

    def clamp(self, score: int) -> int:
        return min(max(score, self.config.min_score), self.config.max_score)

    def score(self, profile: ProfileInput) -> int:
        """Full match score: base + jitter, clamped into [min_score, max_score]."""
        return self.clamp(self.base_score(profile) + self.jitter())


def compute_match_score(
    profile: ProfileInput,
    rng: Optional[RandomSource] = None,
    config: Optional[ScoringConfig] = None,
) -> int:
    """Compute a bounded compatibility score for a candidate profile.

    Args:
        profile: CandidateProfile or raw profile record
        rng: Optional random source for the jitter term
        config: Optional scoring weights

    Returns:
        Integer score in [0, 100] with the default config
    """
    return MatchScorer(config=config, rng=rng).score(profile)
