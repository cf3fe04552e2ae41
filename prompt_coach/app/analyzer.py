"""
Core orchestration / pipeline.

Flow:
1. Validate inputs (prompt, API key, model id); first failure wins
2. Build the two-part message: fixed system instruction + labeled user prompt
3. Single provider call for the chosen model (bounded by a timeout)
4. Extract the JSON payload from the reply (fenced block or raw text)
5. Return the parsed feedback, or raise a classified FeedbackError
"""

import asyncio
import json
import logging
import os
import re
from typing import Any, Callable, Dict, List, Union

from .errors import ConfigurationError, InvalidInput, ProviderResponseError
from .llm_client import GeminiProvider, Provider
from .models import default_model_id, is_valid_model_id
from .schemas import AnalysisRequest, FeedbackResult

# Configure module logger
logger = logging.getLogger(__name__)

# Configuration from environment
PROVIDER_TIMEOUT_SECONDS = float(os.getenv("PROVIDER_TIMEOUT_SECONDS", "30"))
STRICT_FEEDBACK_SHAPE = os.getenv("STRICT_FEEDBACK_SHAPE", "false").strip().lower() in ("1", "true", "yes")

# Prompt file paths
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
FEEDBACK_PROMPT_PATH = os.path.join(BASE_DIR, "prompts", "feedback_system.txt")

USER_PROMPT_LABEL = "Prompt to analyze:\n"

MISSING_PROMPT = "Missing prompt"
MISSING_API_KEY = "Missing Gemini API key"
ANALYSIS_FAILED = "Error analyzing prompt"

# First fenced block, optionally tagged json; non-greedy up to the next fence.
_FENCE_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)```")

ProviderFactory = Callable[[str], Provider]


def _read_prompt(path: str) -> str:
    """Read a prompt text file."""
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


# Loaded once at import; a missing file fails at startup, not per request.
SYSTEM_PROMPT = _read_prompt(FEEDBACK_PROMPT_PATH).strip()


def get_api_key() -> str:
    return os.getenv("GEMINI_API_KEY") or os.getenv("LLM_API_KEY") or ""


def build_segments(prompt: str) -> List[str]:
    """System instruction first, then the user's prompt under a label."""
    return [SYSTEM_PROMPT, f"{USER_PROMPT_LABEL}{prompt}"]


def extract_json_payload(text: str) -> Any:
    """
    Parse the JSON the model was asked to return.

    If the reply contains a ``` fence (optionally ```json), only the first
    fenced block is parsed; otherwise the whole reply is. Anything that
    doesn't parse is a ProviderResponseError.
    """
    if not isinstance(text, str):
        raise ProviderResponseError(ANALYSIS_FAILED)

    json_text = text
    match = _FENCE_RE.search(text)
    if match:
        json_text = match.group(1)

    try:
        return json.loads(json_text.strip())
    except (ValueError, RecursionError) as e:
        # JSONDecodeError, int digit limit, pathological nesting
        logger.error("analyze.parse_failed err=%s", e)
        logger.debug("Raw response was: %s", text[:1000])
        raise ProviderResponseError(ANALYSIS_FAILED) from e


def _count(value: Any) -> int:
    return len(value) if isinstance(value, list) else 0


def _resolve_model(model: Any) -> str:
    if model is None:
        return default_model_id()
    if not is_valid_model_id(model):
        raise InvalidInput(f"Invalid model id: {model}")
    return model


async def analyze(
    request: Union[AnalysisRequest, Dict[str, Any]],
    *,
    provider_factory: ProviderFactory = GeminiProvider,
) -> Any:
    """
    Run one prompt analysis.

    Args:
        request: AnalysisRequest (or the raw JSON body as a dict)
        provider_factory: Builds the provider from the API key. Tests pass a stub.

    Returns:
        The parsed feedback object ({pros, cons, improvedPrompt} when the model
        follows instructions). With STRICT_FEEDBACK_SHAPE it is normalized to
        exactly those three fields.

    Raises:
        InvalidInput, ConfigurationError, ProviderResponseError
    """
    if isinstance(request, dict):
        request = AnalysisRequest.from_payload(request)

    prompt = request.prompt
    if not isinstance(prompt, str) or not prompt:
        raise InvalidInput(MISSING_PROMPT)

    # Re-read on every call; the key is never cached.
    api_key = get_api_key()
    if not api_key:
        logger.error("analyze.config_error GEMINI_API_KEY / LLM_API_KEY not set")
        raise ConfigurationError(MISSING_API_KEY)

    model_id = _resolve_model(request.model)
    segments = build_segments(prompt)
    logger.info("analyze.request model=%s prompt_chars=%d", model_id, len(prompt))

    try:
        provider = provider_factory(api_key)
        text = await asyncio.wait_for(
            provider.generate(model_id, segments),
            timeout=PROVIDER_TIMEOUT_SECONDS,
        )
    except asyncio.TimeoutError as e:
        logger.error("analyze.provider_timeout model=%s timeout=%.1fs", model_id, PROVIDER_TIMEOUT_SECONDS)
        raise ProviderResponseError(ANALYSIS_FAILED) from e
    except Exception as e:
        logger.error("analyze.provider_failed model=%s err=%s", model_id, str(e)[:200], exc_info=True)
        raise ProviderResponseError(ANALYSIS_FAILED) from e

    logger.debug("LLM raw response: %s", text)
    feedback = extract_json_payload(text)

    if STRICT_FEEDBACK_SHAPE:
        feedback = FeedbackResult.from_provider(feedback).to_response()

    if isinstance(feedback, dict):
        logger.info(
            "analyze.response model=%s pros=%d cons=%d improved=%s",
            model_id,
            _count(feedback.get("pros")),
            _count(feedback.get("cons")),
            bool(feedback.get("improvedPrompt")),
        )
    else:
        logger.warning("analyze.response model=%s non_object_payload type=%s", model_id, type(feedback).__name__)

    return feedback
