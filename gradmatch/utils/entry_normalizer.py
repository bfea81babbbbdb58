"""Normalization of individual AI-model recommendation entries.

Every field is repaired independently: a bad score or an unknown category is
replaced by its default, the entry itself is never rejected.
"""

import math
import re
from typing import Any, Iterable, Mapping, Optional

import structlog

from gradmatch.models.config import NormalizerConfig
from gradmatch.models.recommendation import (
    AdmissionRequirements,
    Category,
    RecommendationEntry,
)
from gradmatch.utils.field_lookup import first_present, first_text, is_present

logger = structlog.get_logger(__name__)

DEFAULT_CONFIG = NormalizerConfig()

# Leading numeric prefix, so "85%" or "0.9 (strong)" still parse
_LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward positive infinity."""
    return math.floor(value + 0.5)


def parse_score_value(value: Any) -> Optional[float]:
    """Parse a raw score into a float, or None when it is not numeric.

    Args:
        value: int, float or string; anything else is rejected

    Returns:
        Parsed float (NaN is rejected), or None
    """
    if isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            number = math.inf if value > 0 else -math.inf
    elif isinstance(value, str):
        match = _LEADING_NUMBER.match(value)
        if not match:
            return None
        number = float(match.group(1))
    else:
        return None

    if math.isnan(number):
        return None
    return number


def normalize_match_score(
    value: Any, default: int = 75, low: int = 0, high: int = 100
) -> int:
    """Normalize a raw match score to an integer percentage.

    Values <= 1 are read as fractions (0.85 -> 85); larger values as
    percentages. The result is always clamped into [low, high].

    Args:
        value: Raw score from the model
        default: Score used when the value is missing or not numeric
        low: Lower clamp bound
        high: Upper clamp bound

    Returns:
        Integer score in [low, high]
    """
    number = parse_score_value(value)
    if number is None:
        logger.debug("Non-numeric match score, using default", raw_value=str(value)[:50])
        return default

    if math.isinf(number):
        return high if number > 0 else low

    if number <= 1:
        score = round_half_up(number * 100)
    else:
        score = round_half_up(number)

    return min(max(score, low), high)


def normalize_category(value: Any, config: NormalizerConfig = DEFAULT_CONFIG) -> Category:
    """Map free-text competitiveness labels onto reach / target / safety.

    Reach keywords are checked before safety keywords; anything unmatched is
    "target".
    """
    label = str(value).lower()
    if any(keyword in label for keyword in config.reach_keywords):
        return "reach"
    if any(keyword in label for keyword in config.safety_keywords):
        return "safety"
    return "target"


def _keep_item(item: Any) -> bool:
    return bool(item) and is_present(item)


def _coerce_text_list(
    record: Mapping[str, Any],
    primary_key: str,
    synonym_keys: Iterable[str],
    default: Optional[str] = None,
) -> list[str]:
    """Build a list of reasons from a list field, its synonyms, or a bare string."""
    value = record.get(primary_key)

    if isinstance(value, list):
        items = value
    else:
        synonym = first_present(record, synonym_keys)
        if synonym is not None:
            items = synonym if isinstance(synonym, list) else [synonym]
        else:
            items = [value if is_present(value) else default]

    return [item if isinstance(item, str) else str(item) for item in items if _keep_item(item)]


def _list_or_empty(value: Any) -> list[Any]:
    return list(value) if isinstance(value, list) else []


def _normalize_requirements(
    record: Mapping[str, Any], config: NormalizerConfig
) -> AdmissionRequirements:
    nested = record.get("admission_requirements")
    if not isinstance(nested, Mapping):
        nested = {}

    values: dict[str, Optional[str]] = {}
    for key in config.requirement_keys:
        value = first_present(nested, (key,))
        if value is None:
            value = first_present(record, (key,))
        values[key] = None if value is None else str(value)

    return AdmissionRequirements(**values)


def normalize_entry(
    raw: Any, config: NormalizerConfig = DEFAULT_CONFIG
) -> RecommendationEntry:
    """Convert one loosely shaped AI recommendation into a RecommendationEntry.

    Args:
        raw: Entry from the model; non-mapping values are treated as empty
        config: Synonym tables and defaults

    Returns:
        Fully populated RecommendationEntry
    """
    if not isinstance(raw, Mapping):
        logger.warning("Recommendation entry is not an object", entry_type=type(raw).__name__)
        raw = {}

    score_value = first_present(raw, config.match_score_keys)
    category_value = first_present(raw, config.category_keys)

    return RecommendationEntry(
        name=first_text(raw, config.name_keys, config.unknown_name),
        program=first_text(raw, config.program_keys, config.unknown_program),
        location=first_text(raw, config.location_keys, config.unknown_location),
        match_score=normalize_match_score(
            score_value if score_value is not None else config.default_match_score,
            default=config.default_match_score,
        ),
        category=normalize_category(
            category_value if category_value is not None else config.default_category,
            config,
        ),
        ranking=first_text(raw, config.ranking_keys),
        why_recommended=_coerce_text_list(
            raw, "why_recommended", config.reason_keys, config.default_reason
        ),
        concerns=_coerce_text_list(raw, "concerns", config.concern_keys),
        logo_url=first_text(raw, config.logo_url_keys),
        website_url=first_text(raw, config.website_url_keys),
        application_deadline=first_text(raw, config.deadline_keys),
        tuition_fee=first_text(raw, config.tuition_keys),
        admission_requirements=_normalize_requirements(raw, config),
        research_areas=_list_or_empty(raw.get("research_areas")),
        faculty_highlights=_list_or_empty(raw.get("faculty_highlights")),
    )
