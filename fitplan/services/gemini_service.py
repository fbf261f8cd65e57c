"""
Gemini API service for plan and tagline generation.
"""
import google.generativeai as genai

from fitplan.core.config import Settings
from fitplan.core.errors import ErrorKind, PlanGenerationError
from fitplan.core.logger import logger, log_ai_call, log_error
from fitplan.models.plan import FitnessPlan
from fitplan.models.user import UserProfile
from fitplan.services.plan_parser import parse_plan_response
from fitplan.services.prompt_builder import TAGLINE_PROMPT, build_fitness_plan_prompt


FALLBACK_TAGLINE = "Your only limit is you. Push yourself and see what you can achieve!"

# genai.configure is process-wide; re-run it only when the key changes
_configured_key: str | None = None


def _ensure_configured(api_key: str) -> None:
    global _configured_key
    if api_key != _configured_key:
        genai.configure(api_key=api_key)
        _configured_key = api_key


async def call_gemini(
    prompt: str,
    config: Settings,
    model_name: str,
    temperature: float | None = None,
    json_output: bool = False
) -> str:
    """
    Call the Gemini API once and return the response text.

    The API key comes from the supplied configuration; the SDK is only
    reconfigured when that key differs from the one last applied, so calls
    sharing a key never reset each other's client. There is no retry: a
    failed call propagates to the caller.

    Args:
        prompt: Instruction text
        config: Settings holding the API key
        model_name: Gemini model to invoke
        temperature: Sampling temperature, model default if None
        json_output: Request application/json output

    Returns:
        Raw response text
    """
    log_ai_call("Generate Content", model_name, temperature)

    _ensure_configured(config.GOOGLE_GEMINI_API_KEY)

    generation_config = None
    if temperature is not None or json_output:
        generation_config = genai.GenerationConfig(
            temperature=temperature,
            response_mime_type="application/json" if json_output else None,
        )

    model = genai.GenerativeModel(model_name, generation_config=generation_config)
    response = await model.generate_content_async(prompt)

    text = response.text
    logger.info(f"Received response, length: {len(text) if text else 0}")
    return text


async def generate_fitness_plan(profile: UserProfile, config: Settings) -> FitnessPlan:
    """
    Generate a 7-day workout and diet plan for a validated profile.

    Args:
        profile: Validated user profile
        config: Settings with the Gemini credential and model

    Returns:
        Parsed plan stamped with createdAt

    Raises:
        PlanGenerationError: classified by kind (configuration, upstream,
            incomplete response, invalid format, invalid structure)
    """
    if not config.GOOGLE_GEMINI_API_KEY:
        raise PlanGenerationError(ErrorKind.CONFIGURATION, "Gemini API key not configured")

    prompt = build_fitness_plan_prompt(profile)

    logger.info("Generating fitness plan...")
    try:
        raw_text = await call_gemini(
            prompt,
            config,
            config.GEMINI_MODEL,
            temperature=config.TEMPERATURE_PLAN,
            json_output=True
        )
    except Exception as e:
        log_error("Fitness plan generation", e)
        raise PlanGenerationError(
            ErrorKind.UPSTREAM,
            "Failed to generate fitness plan",
            {"upstream": f"{type(e).__name__}: {str(e)[:500]}"},
        ) from e

    return parse_plan_response(raw_text)


async def generate_tagline(config: Settings) -> str:
    """
    Generate one short motivational sentence.

    Decorative: any failure yields FALLBACK_TAGLINE instead of an error.
    """
    if not config.GOOGLE_GEMINI_API_KEY:
        logger.warning("Gemini API key not configured, using fallback tagline")
        return FALLBACK_TAGLINE

    try:
        text = await call_gemini(TAGLINE_PROMPT, config, config.TAGLINE_MODEL)
    except Exception as e:
        log_error("Tagline generation", e)
        return FALLBACK_TAGLINE

    tagline = (text or "").strip()
    return tagline or FALLBACK_TAGLINE
