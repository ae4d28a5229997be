"""
Feasibility analysis prompt and response handling.

The model is asked for strict JSON, but replies often arrive wrapped in a
markdown fence or surrounded by prose, so parsing tries several
extraction strategies before giving up.
"""

import json
import logging
import math
import re
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

PREVIEW_LIMIT = 1000

FEASIBILITY_PROMPT = """You are a project feasibility analyzer. Based on the following project requirements document, you must provide a feasibility analysis. Return your response in strict JSON format with this exact structure:
{{
  "feasibilityPercentage": number, // An integer between 0 and 100
  "explanation": string // A markdown-formatted analysis including risks and recommendations
}}

Do not include any other text, only output valid JSON.

Document to analyze:
{document}"""

_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")


@dataclass(frozen=True)
class FeasibilityResult:
    """Feasibility score (0-100) with a markdown explanation."""

    feasibility_percentage: float
    explanation: str


class InvalidModelResponseError(ValueError):
    """Raised when the model reply does not contain a usable result."""

    def __init__(self, message: str, response_text: str = ""):
        super().__init__(message)
        self.preview = preview(response_text)


def preview(text: str) -> str:
    """Truncate a model reply for error messages."""
    if len(text) > PREVIEW_LIMIT:
        return text[:PREVIEW_LIMIT] + "... (truncated)"
    return text


def build_feasibility_prompt(document_text: str) -> str:
    return FEASIBILITY_PROMPT.format(document=document_text)


def _try_parse(candidate: str) -> Optional[dict]:
    if not candidate or not candidate.strip():
        return None
    try:
        obj = json.loads(candidate)
    except json.JSONDecodeError as e:
        logger.debug(f"JSON parse error: {e}")
        return None

    if not isinstance(obj, dict):
        return None

    percentage = obj.get("feasibilityPercentage")
    # bool is an int subclass
    if isinstance(percentage, bool) or not isinstance(percentage, (int, float)):
        return None
    # json accepts NaN and Infinity literals
    if isinstance(percentage, float) and not math.isfinite(percentage):
        return None
    if not isinstance(obj.get("explanation"), str):
        return None

    return obj


def _strip_fence(text: str) -> str:
    lines = text.split("\n")
    return "\n".join(lines[1:-1]).strip()


def parse_feasibility_response(text: str) -> FeasibilityResult:
    """
    Parse a model reply into a FeasibilityResult.

    Tries, in order: the whole reply, the body of a markdown code fence,
    and the outermost {...} block.

    Raises:
        InvalidModelResponseError: If no strategy yields a valid object, or
            the percentage is outside 0-100
    """
    cleaned = str(text or "").replace("\r\n", "\n").strip()

    parsed = _try_parse(cleaned)

    if parsed is None and cleaned.startswith("```"):
        parsed = _try_parse(_strip_fence(cleaned))

    if parsed is None:
        match = _JSON_OBJECT.search(cleaned)
        if match:
            parsed = _try_parse(match.group(0))

    if parsed is None:
        raise InvalidModelResponseError("Model did not return valid JSON", cleaned)

    percentage = parsed["feasibilityPercentage"]
    if percentage < 0 or percentage > 100:
        raise InvalidModelResponseError(
            f"Feasibility percentage out of range: {percentage}", cleaned
        )

    return FeasibilityResult(
        feasibility_percentage=percentage,
        explanation=parsed["explanation"],
    )
