"""Ordered synonym-key lookup over loosely shaped AI records."""

from typing import Any, Iterable, Mapping, Optional


def is_present(value: Any) -> bool:
    """Return True if a value counts as supplied.

    None, empty/blank strings and False are treated as missing. Zero and empty
    containers are kept: a score of 0 is a real score.
    """
    if value is None or value is False:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True


def first_present(record: Mapping[str, Any], keys: Iterable[str]) -> Optional[Any]:
    """Return the first present value among `keys`, in priority order.

    Args:
        record: Source mapping
        keys: Candidate field names, highest priority first

    Returns:
        The first value passing is_present(), or None if no key matches

    Example:
        >>> first_present({"university_name": "MIT"}, ("name", "university_name"))
        'MIT'
    """
    for key in keys:
        value = record.get(key)
        if is_present(value):
            return value
    return None


def first_text(
    record: Mapping[str, Any], keys: Iterable[str], default: Optional[str] = None
) -> Optional[str]:
    """Like first_present(), but coerces the value to str and applies a default."""
    value = first_present(record, keys)
    if value is None:
        return default
    return value if isinstance(value, str) else str(value)
