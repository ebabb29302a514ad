"""Sanitize and parse untrusted model output into a JSON object.

Model text is treated as adversarial: it may be wrapped in markdown fences,
contain raw control characters, be empty, truncated or plain prose. Parsing
is strict JSON: the NaN and Infinity literals Python would accept are
rejected. Nothing here raises; every outcome is reported through
``RadarParseResult``.
"""

import json
import math
import re
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field
import structlog

from tech_radar.core.logging import truncate_for_log

logger = structlog.get_logger(__name__)

# All C0 controls except line feed
CONTROL_CHARS = re.compile(r"[\x00-\x09\x0b-\x1f]")
LEADING_FENCE = re.compile(r"^```(?:json)?", re.IGNORECASE)
TRAILING_FENCE = re.compile(r"```$")

EMPTY_RESPONSE_MESSAGE = "Model returned empty response"


def reject_constant(name: str) -> Any:
    """Refuse the non-standard NaN, Infinity and -Infinity literals."""
    raise ValueError(f"Unexpected token {name} in JSON")


def parse_finite_float(literal: str) -> float:
    """Parse a JSON number, refusing values that overflow to infinity."""
    value = float(literal)
    if math.isinf(value):
        raise ValueError(f"Number out of range in JSON: {literal}")
    return value


class RadarParseResult(BaseModel):
    """Result of parsing one model response."""

    success: bool = Field(..., description="Whether a JSON object was recovered")
    payload: Optional[Dict[str, Any]] = Field(None, description="Parsed radar object")
    error_message: Optional[str] = Field(None, description="Reason parsing failed")

    @classmethod
    def ok(cls, payload: Dict[str, Any]) -> "RadarParseResult":
        return cls(success=True, payload=payload)

    @classmethod
    def fail(cls, error_message: str) -> "RadarParseResult":
        return cls(success=False, error_message=error_message)


def strip_control_chars(text: str) -> str:
    """Remove control characters that strict JSON parsing rejects."""
    return CONTROL_CHARS.sub("", text)


def strip_code_fences(text: str) -> str:
    """Remove markdown code fences wrapped around the text.

    Fences are peeled repeatedly so nested wrappers do not survive a single
    pass, which keeps sanitizing idempotent.
    """
    text = text.strip()
    while text.startswith("```"):
        text = LEADING_FENCE.sub("", text, count=1)
        text = TRAILING_FENCE.sub("", text, count=1)
        text = text.strip()
    return text


def sanitize_response(raw: Optional[str]) -> str:
    """Normalize raw model output into text that should be bare JSON.

    Args:
        raw: Text returned by the model, possibly None

    Returns:
        Text with control characters and surrounding fences removed
    """
    return strip_code_fences(strip_control_chars(raw or ""))


def parse_radar_response(raw: Optional[str]) -> RadarParseResult:
    """Sanitize model output and parse it as a JSON object.

    Args:
        raw: Text returned by the model

    Returns:
        RadarParseResult carrying the payload or the failure reason
    """
    text = sanitize_response(raw)

    if not text:
        return RadarParseResult.fail(EMPTY_RESPONSE_MESSAGE)

    try:
        payload = json.loads(
            text, parse_constant=reject_constant, parse_float=parse_finite_float
        )
    except (ValueError, RecursionError) as e:
        # JSONDecodeError is a ValueError; RecursionError comes from deep nesting
        logger.error(
            "Failed to parse model JSON",
            error=str(e),
            response_length=len(text),
            response_excerpt=truncate_for_log(text)
        )
        return RadarParseResult.fail(f"JSON Parse Error: {e}")

    if not isinstance(payload, dict):
        logger.error(
            "Model JSON is not an object",
            payload_type=type(payload).__name__,
            response_excerpt=truncate_for_log(text)
        )
        return RadarParseResult.fail(
            f"JSON Parse Error: expected an object, got {type(payload).__name__}"
        )

    return RadarParseResult.ok(payload)
