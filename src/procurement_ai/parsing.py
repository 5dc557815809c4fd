"""
Helpers for reading language model output.

normalize_response() turns a raw completion into a parsed JSON value,
tolerating markdown fences and commentary around the object.
find_missing_fields() checks dot-separated field paths on the result.
"""

import json
import re
from typing import Any, Iterable

from pydantic import ValidationError

from .errors import InvalidInput, MalformedResponse
from .logging import get_logger

logger = get_logger(__name__)

_FENCE = '```'
_OBJECT_PATTERN = re.compile(r'\{[\s\S]*\}')
_RAW_PREVIEW_CHARS = 500


def _strip_code_fence(text: str) -> str:
    """Keep only the lines between the opening fence and the last fence line."""
    lines = text.split('\n')[1:]
    closing = [i for i, line in enumerate(lines) if line.strip().startswith(_FENCE)]
    if closing:
        lines = lines[: closing[-1]]
    return '\n'.join(lines).strip()


def normalize_response(raw: str) -> Any:
    """
    Parse a raw model completion into a structured value.

    Args:
        raw: Text returned by the model

    Returns:
        The parsed JSON value

    Raises:
        InvalidInput: raw is empty or not a string
        MalformedResponse: no JSON value could be recovered
    """
    if not isinstance(raw, str) or not raw:
        raise InvalidInput('Invalid input: expected a non-empty string')

    cleaned = raw.strip()
    if cleaned.startswith(_FENCE):
        cleaned = _strip_code_fence(cleaned)

    first_brace = cleaned.find('{')
    last_brace = cleaned.rfind('}')
    if first_brace != -1 and last_brace > first_brace:
        cleaned = cleaned[first_brace : last_brace + 1]

    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as exc:
        first_error = exc

    logger.debug('normalize_response.recovering', error=str(first_error))

    match = _OBJECT_PATTERN.search(cleaned)
    if match:
        try:
            return json.loads(match.group(0))
        except json.JSONDecodeError as exc:
            raise MalformedResponse(
                f"Failed to parse JSON after recovery attempts: {exc}",
                context={'raw_response': raw[:_RAW_PREVIEW_CHARS]},
            ) from exc

    raise MalformedResponse(
        f"Failed to parse JSON: {first_error}",
        context={'raw_response': raw[:_RAW_PREVIEW_CHARS]},
    ) from first_error


def get_nested_value(data: Any, path: str) -> Any:
    """
    Resolve a dot-separated path against nested dicts and lists.

    Numeric segments index into lists. Returns None when any segment
    cannot be resolved.
    """
    current = data
    for key in path.split('.'):
        if current is None:
            return None
        if isinstance(current, list):
            if not key.isdigit():
                return None
            index = int(key)
            if index >= len(current):
                return None
            current = current[index]
        elif isinstance(current, dict):
            current = current.get(key)
        else:
            return None
    return current


def find_missing_fields(data: Any, required_fields: Iterable[str]) -> list[str]:
    """
    Return the required field paths that are absent or null in data.

    An empty list means every required field is present.
    """
    return [path for path in required_fields if get_nested_value(data, path) is None]


def validation_error_fields(exc: ValidationError) -> list[str]:
    """Dot paths of the fields a pydantic ValidationError complains about."""
    fields = []
    for error in exc.errors():
        path = '.'.join(str(part) for part in error['loc']) or '<root>'
        if path not in fields:
            fields.append(path)
    return fields
