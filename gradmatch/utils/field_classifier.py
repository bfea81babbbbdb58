"""Field-of-study classification and summary analytics for recommendation sets."""

from collections import Counter
from typing import Iterable

from gradmatch.models.config import NormalizerConfig
from gradmatch.models.recommendation import AnalysisSummary, RecommendationEntry

DEFAULT_CONFIG = NormalizerConfig()


def extract_field_from_program(
    program: str, config: NormalizerConfig = DEFAULT_CONFIG
) -> str:
    """Classify a program name by case-insensitive keyword substring match.

    Args:
        program: Program name, e.g. "MS in Computer Science"
        config: Ordered field keyword table

    Returns:
        First field whose keywords occur in the program name, else the default field

    Example:
        >>> extract_field_from_program("PhD in Chemical Engineering")
        'Engineering'
    """
    lower = str(program).lower()
    for field_name, keywords in config.field_keywords:
        if any(keyword in lower for keyword in keywords):
            return field_name
    return config.default_field


def extract_primary_field(
    programs: Iterable[str], config: NormalizerConfig = DEFAULT_CONFIG
) -> str:
    """Return the most common field across program names.

    Ties go to the field seen first, since Counter keeps insertion order and
    max() returns the first maximal key.
    """
    counts = Counter(extract_field_from_program(program, config) for program in programs)
    if not counts:
        return config.default_field
    return max(counts, key=lambda field_name: counts[field_name])


def generate_analysis(
    entries: list[RecommendationEntry], config: NormalizerConfig = DEFAULT_CONFIG
) -> AnalysisSummary:
    """Derive summary analytics from normalized entries.

    Confidence is higher when the list covers reach, target and safety schools.
    """
    reach_schools = sum(1 for entry in entries if entry.category == "reach")
    target_schools = sum(1 for entry in entries if entry.category == "target")
    safety_schools = sum(1 for entry in entries if entry.category == "safety")

    balanced = reach_schools > 0 and target_schools > 0 and safety_schools > 0

    return AnalysisSummary(
        total_matches=len(entries),
        reach_schools=reach_schools,
        target_schools=target_schools,
        safety_schools=safety_schools,
        primary_field=extract_primary_field((entry.program for entry in entries), config),
        confidence_score=(
            config.balanced_confidence if balanced else config.unbalanced_confidence
        ),
    )


def extract_program_level(entries: Iterable[RecommendationEntry]) -> str:
    """Infer the degree level (PhD / MS / MBA / Graduate) from program names."""
    programs = [entry.program.lower() for entry in entries]

    if any("phd" in p or "ph.d" in p for p in programs):
        return "PhD"
    if any("masters" in p or "ms" in p or "m.s" in p for p in programs):
        return "MS"
    if any("mba" in p for p in programs):
        return "MBA"

    return "Graduate"
