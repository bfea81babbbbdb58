"""
Response Parser Module

Converts untrusted AI-model replies into canonical RecommendationSet and
CVAnalysisResult records. Parsing never raises: unusable input is logged and
mapped to None so callers can fall back to an empty state or a mock payload.

Example Usage:
    from gradmatch.utils.response_parser import parse_recommendations

    result = parse_recommendations(model_reply)
    if result is None:
        ...  # show fallback
    else:
        for entry in result.universities:
            print(entry.name, entry.match_score, entry.category)
"""

import json
from collections.abc import Mapping
from typing import Any, Iterable, Optional

import structlog
from pydantic import ValidationError

from gradmatch.models.config import NormalizerConfig
from gradmatch.models.recommendation import (
    CVAnalysisResult,
    RecommendationEntry,
    RecommendationSet,
)
from gradmatch.utils.entry_normalizer import normalize_entry
from gradmatch.utils.field_classifier import (
    extract_primary_field,
    extract_program_level,
    generate_analysis,
)
from gradmatch.utils.json_extraction import load_json_payload
from gradmatch.utils.logger import get_logger
from gradmatch.utils.validator import SchemaValidator

logger = structlog.get_logger(__name__)

DEFAULT_CONFIG = NormalizerConfig()

_validator = SchemaValidator()


def _locate_entries(data: Any, config: NormalizerConfig) -> Optional[list[Any]]:
    """Find the entry list: named envelope keys, a bare list, then the fallback key."""
    if isinstance(data, Mapping):
        for key in config.entries_keys:
            if isinstance(data.get(key), list):
                return data[key]

    if isinstance(data, list):
        return data

    if isinstance(data, Mapping) and isinstance(
        data.get(config.fallback_entries_key), list
    ):
        return data[config.fallback_entries_key]

    return None


def normalize_recommendation_data(
    data: Any, config: NormalizerConfig = DEFAULT_CONFIG
) -> Optional[RecommendationSet]:
    """Normalize an already-decoded payload into a RecommendationSet.

    Args:
        data: Decoded JSON tree
        config: Normalizer configuration

    Returns:
        RecommendationSet, or None when no entry list can be found
    """
    raw_entries = _locate_entries(data, config)
    if raw_entries is None:
        logger.warning("No universities array found in response")
        return None

    entries = [normalize_entry(raw, config) for raw in raw_entries]

    provided = data.get("analysis") if isinstance(data, Mapping) else None
    if isinstance(provided, Mapping):
        # Kept verbatim even if it disagrees with the entries
        return RecommendationSet(
            universities=entries, analysis=dict(provided), analysis_provided=True
        )

    analysis = generate_analysis(entries, config)
    return RecommendationSet(universities=entries, analysis=analysis.model_dump())


def parse_recommendations(
    response: Any,
    config: NormalizerConfig = DEFAULT_CONFIG,
    correlation_id: Optional[str] = None,
) -> Optional[RecommendationSet]:
    """Parse an AI response into a RecommendationSet.

    Args:
        response: Model text (fenced or bare JSON) or an already-decoded object
        config: Normalizer configuration
        correlation_id: Correlation ID bound to the parser's log lines

    Returns:
        RecommendationSet, or None if the response cannot be parsed
    """
    log = get_logger(
        correlation_id=correlation_id,
        phase="university_search",
        component="response_parser",
    )
    log.debug("Parsing university response", response_type=type(response).__name__)

    try:
        data = load_json_payload(response)
        return normalize_recommendation_data(data, config)
    except json.JSONDecodeError as e:
        log.error("Failed to parse JSON from university response", error=str(e))
        return None
    except RecursionError as e:
        log.error("University response nested too deeply", error=str(e))
        return None
    except (TypeError, ValueError, ValidationError) as e:
        log.error("Error normalizing university response", error=str(e))
        return None


def parse_cv_analysis(
    response: Any, correlation_id: Optional[str] = None
) -> Optional[CVAnalysisResult]:
    """Parse an AI CV analysis response.

    Only the presence of `user_profile` and `recommendations` is checked; the
    payload is otherwise passed through as parsed.

    Args:
        response: Model text (fenced or bare JSON) or an already-decoded object
        correlation_id: Correlation ID bound to the parser's log lines

    Returns:
        CVAnalysisResult, or None if parsing fails or a required key is missing
    """
    log = get_logger(
        correlation_id=correlation_id,
        phase="cv_analysis",
        component="response_parser",
    )
    log.debug("Parsing CV analysis response", response_type=type(response).__name__)

    try:
        data = load_json_payload(response)
    except json.JSONDecodeError as e:
        log.error("Failed to parse JSON from CV analysis response", error=str(e))
        return None
    except RecursionError as e:
        log.error("CV analysis response nested too deeply", error=str(e))
        return None

    if not isinstance(data, Mapping):
        log.warning("Invalid CV analysis structure", payload_type=type(data).__name__)
        return None

    if data.get("user_profile") is None or data.get("recommendations") is None:
        log.warning(
            "Invalid CV analysis structure",
            has_user_profile="user_profile" in data,
            has_recommendations="recommendations" in data,
        )
        return None

    try:
        return CVAnalysisResult(**{str(key): value for key, value in data.items()})
    except ValidationError as e:
        log.error("Error building CV analysis result", error=str(e))
        return None


def to_storage_record(
    entries: Iterable[RecommendationEntry], conversation_id: str, message_id: str
) -> dict[str, Any]:
    """Build the row persisted for a chat message that carries recommendations.

    Args:
        entries: Normalized recommendation entries
        conversation_id: Chat conversation identifier
        message_id: Chat message identifier

    Returns:
        Dict with conversation/message ids, entries in wire shape and the
        inferred field and level filters
    """
    entries = list(entries)
    return {
        "conversation_id": conversation_id,
        "message_id": message_id,
        "country": "Multiple",
        "universities": [entry.to_dict() for entry in entries],
        "filters_applied": {
            "field": extract_primary_field(entry.program for entry in entries),
            "level": extract_program_level(entries),
        },
        "recommendation_type": "ai_generated",
    }


def validate_response(data: Any) -> bool:
    """Strict structural check of a canonical recommendation payload.

    Unlike parse_recommendations(), nothing is repaired: every entry must
    carry name, program, location and a numeric match_score.
    """
    return _validator.is_valid_response(data)
