from typing import Any, Dict, Union
import json
import logging
import re

from src.errors import MalformedResponse
from src.models.variants import Analysis, Variant, get_variant

logger = logging.getLogger(__name__)


# Primary decoder: the assistant text as a JSON object
def decode_json(text: str) -> Dict[str, Any]:
    text = text or ""
    try:
        data = json.loads(text)
    except ValueError:
        # Fallback: extract JSON substring (code fences, chatty preamble)
        match = re.search(r"\{[\s\S]*\}", text)
        if not match:
            raise MalformedResponse("No JSON object in response")
        try:
            data = json.loads(match.group(0))
        except ValueError as e:
            raise MalformedResponse(f"Invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise MalformedResponse(f"Expected a JSON object, got {type(data).__name__}")

    return data


def _line_regex(label_pattern: str) -> "re.Pattern[str]":
    # "Title: X", "- **Title:** X", "## Title - X" are all accepted
    return re.compile(
        rf"^[ \t>*#\-]*(?:{label_pattern})[ \t*]*[:\-][ \t*]*(.*?)[ \t*]*$",
        re.IGNORECASE | re.MULTILINE,
    )


# Secondary decoder: salvage "Label: value" lines into the same payload shape
def decode_lines(text: str, variant: Union[str, Variant]) -> Dict[str, Any]:
    variant = get_variant(variant)
    text = text or ""
    payload: Dict[str, Any] = {}

    for path, label_pattern in variant.line_fields:
        match = _line_regex(label_pattern).search(text)
        if not match or not match.group(1).strip():
            continue

        target = payload
        for key in path[:-1]:
            target = target.setdefault(key, {})
        target[path[-1]] = match.group(1).strip()

    return payload


def validate(raw_text: str, variant: Union[str, Variant]) -> Analysis:
    """Turn assistant text into a variant analysis; never raises.

    Missing fields get sentinel text and taxonomy fields are repaired against
    the allowed terms, whichever decoder produced the payload.
    """
    variant = get_variant(variant)

    try:
        payload = decode_json(raw_text)
    except MalformedResponse as e:
        logger.warning("Response is not JSON (%s); falling back to line parsing", e)
        payload = decode_lines(raw_text, variant)

    return variant.from_payload(payload)
