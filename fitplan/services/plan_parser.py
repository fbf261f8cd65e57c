"""
Tolerant parsing of raw generator output into a validated FitnessPlan.

The generator is asked for bare JSON but may wrap it in a code fence, stop
mid-structure, or leave members out. Nearly-correct output is recovered;
everything else is rejected with a classified PlanGenerationError.
"""
import json
import re
from datetime import datetime, timezone
from typing import Optional

from fitplan.core.errors import ErrorKind, PlanGenerationError
from fitplan.core.logger import logger
from fitplan.models.plan import FitnessPlan, validate_plan_structure


MIN_RESPONSE_LENGTH = 100
RAW_PREVIEW_CHARS = 500

REQUIRED_MEMBERS = ("workoutPlan", "dietPlan", "tips", "motivation")

# Leading fence, optionally tagged (```json), and trailing fence.
_LEADING_FENCE = re.compile(r"^```[\w+-]*[ \t]*\r?\n?")
_TRAILING_FENCE = re.compile(r"\r?\n?```\s*$")


def clean_response_text(text: str) -> str:
    """
    Strip surrounding whitespace and a code-fence wrapper.

    Each delimiter is removed on its own, so a leading fence without a
    matching trailing one still leaves the inner text.
    """
    cleaned = (text or "").strip()
    cleaned = _LEADING_FENCE.sub("", cleaned, count=1)
    cleaned = _TRAILING_FENCE.sub("", cleaned, count=1)
    return cleaned.strip()


def _diagnostics(raw_text: str) -> dict:
    return {
        "raw_length": len(raw_text or ""),
        "preview": (raw_text or "")[:RAW_PREVIEW_CHARS],
    }


def _timestamp(now: Optional[datetime] = None) -> str:
    moment = now or datetime.now(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_plan_response(raw_text: str, now: Optional[datetime] = None) -> FitnessPlan:
    """
    Turn raw model output into a FitnessPlan stamped with its creation time.

    Args:
        raw_text: Text returned by the generative model
        now: Override for the creation timestamp

    Returns:
        Validated plan with createdAt set

    Raises:
        PlanGenerationError: INCOMPLETE_RESPONSE, INVALID_FORMAT or
            INVALID_STRUCTURE
    """
    cleaned = clean_response_text(raw_text)

    if len(cleaned) < MIN_RESPONSE_LENGTH:
        logger.error(f"Response too short: {len(cleaned)} chars after cleaning")
        raise PlanGenerationError(
            ErrorKind.INCOMPLETE_RESPONSE,
            "Incomplete response from AI",
            _diagnostics(raw_text),
        )

    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError as e:
        detail = _diagnostics(raw_text)
        logger.error(f"Response is not valid JSON ({e.msg}); raw length: {detail['raw_length']}")
        logger.error(f"Text preview: {detail['preview']}")
        raise PlanGenerationError(
            ErrorKind.INVALID_FORMAT,
            "Failed to parse AI response. The response may be incomplete or invalid.",
            detail,
        ) from e

    if not isinstance(parsed, dict):
        raise PlanGenerationError(
            ErrorKind.INVALID_STRUCTURE,
            "Invalid response structure from AI",
            {"missing": list(REQUIRED_MEMBERS)},
        )

    # null, absent and empty-string members are all missing; an empty tips list is not
    missing = [key for key in REQUIRED_MEMBERS if parsed.get(key) is None or parsed.get(key) == ""]
    if missing:
        logger.error(f"Missing required fields in response: {', '.join(missing)}")
        raise PlanGenerationError(
            ErrorKind.INVALID_STRUCTURE,
            "Invalid response structure from AI",
            {"missing": missing},
        )

    result = validate_plan_structure({**parsed, "createdAt": _timestamp(now)})
    if not result.success:
        logger.error(f"Response failed shape validation: {len(result.errors)} violation(s)")
        raise PlanGenerationError(
            ErrorKind.INVALID_STRUCTURE,
            "Invalid response structure from AI",
            {"violations": [v.model_dump() for v in result.errors[:20]]},
        )

    logger.info(f"Parsed plan with {len(result.value.workoutPlan.days)} workout days")
    return result.value
