"""AI collaborator, prompt construction and response parsing."""

from .client import TextGenerator, GeminiTextGenerator
from .prompts import build_radar_prompt
from .sanitizer import RadarParseResult, sanitize_response, parse_radar_response

__all__ = [
    "TextGenerator",
    "GeminiTextGenerator",
    "build_radar_prompt",
    "RadarParseResult",
    "sanitize_response",
    "parse_radar_response"
]
