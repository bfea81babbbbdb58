"""
JSON Extraction Helpers

Pulls JSON payloads out of AI-model text replies. Models often wrap JSON in a
markdown fence surrounded by prose, e.g.:

    Here are your matches:
    ```json
    {"universities": [...]}
    ```
    Good luck!
"""

import json
import re
from typing import Any

import structlog

logger = structlog.get_logger(__name__)

# First fenced block (optionally tagged json) whose body is a JSON object
FENCED_JSON_PATTERN = re.compile(r"```(?:json)?\s*(\{.*?\})\s*```", re.DOTALL)


def extract_fenced_json(response_text: str) -> str | None:
    """Return the JSON object text inside the first markdown fence, if any.

    Args:
        response_text: Raw text response from the model

    Returns:
        The captured object text, or None when no fenced object is found
    """
    match = FENCED_JSON_PATTERN.search(response_text)
    if match:
        return match.group(1)
    return None


def load_json_payload(response: Any) -> Any:
    """Decode an AI response into an untyped JSON tree.

    Strings are searched for a fenced JSON object first; when none is found
    the whole string is decoded. Non-string input is returned unchanged.

    Args:
        response: Raw model text, or an already-decoded object

    Returns:
        Decoded JSON value

    Raises:
        json.JSONDecodeError: If the text holds no decodable JSON
    """
    if not isinstance(response, str):
        return response

    fenced = extract_fenced_json(response)
    if fenced is not None:
        logger.debug("Fenced JSON block found", block_length=len(fenced))
        return json.loads(fenced)

    return json.loads(response)
