"""Generic LLM call helpers."""

import json
import logging
import re
from functools import lru_cache
from typing import Any

from anthropic import NOT_GIVEN, AnthropicError, AsyncAnthropic
from dotenv import load_dotenv

from spacebio.config import get_settings
from spacebio.constants import LLM_MAX_TOKENS
from spacebio.exceptions import ExternalServiceError

load_dotenv()

logger = logging.getLogger(__name__)

_SERVICE = "llm"


@lru_cache
def get_client() -> AsyncAnthropic:
    """Create the shared Anthropic client on first use."""
    api_key = get_settings().anthropic_api_key
    if not api_key:
        raise ExternalServiceError(_SERVICE, "ANTHROPIC_API_KEY is not configured")
    return AsyncAnthropic(api_key=api_key)


def parse_llm_json(response: str) -> dict[str, Any]:
    """Extract the outermost JSON object from a model response.

    Raises ExternalServiceError when no object can be decoded.
    """
    match = re.search(r"\{.*\}", response, re.DOTALL)
    if not match:
        raise ExternalServiceError(_SERVICE, "Response contained no JSON object")
    try:
        parsed = json.loads(match.group())
    except json.JSONDecodeError as e:
        raise ExternalServiceError(_SERVICE, f"Malformed JSON in response: {e}")
    if not isinstance(parsed, dict):
        raise ExternalServiceError(_SERVICE, "Response JSON is not an object")
    return parsed


async def _complete(model: str, prompt: str, system: str) -> str:
    try:
        response = await get_client().messages.create(
            model=model,
            max_tokens=LLM_MAX_TOKENS,
            system=system or NOT_GIVEN,
            messages=[{"role": "user", "content": prompt}],
        )
    except AnthropicError as e:
        logger.error("LLM call failed model=%s: %s", model, e)
        raise ExternalServiceError(_SERVICE, str(e)) from e

    if not response.content:
        raise ExternalServiceError(_SERVICE, "Empty response")
    block = response.content[0]
    text = getattr(block, "text", None)
    if not isinstance(text, str):
        block_type = getattr(block, "type", None)
        raise ExternalServiceError(_SERVICE, f"Expected a text block, got {block_type!r}")
    return text


async def query_llm(prompt: str, system: str = "") -> str:
    return await _complete(get_settings().llm_model, prompt, system)


async def query_small_llm(prompt: str, system: str = "") -> str:
    return await _complete(get_settings().small_llm_model, prompt, system)
