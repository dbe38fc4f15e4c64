"""
LLM client for rationale analysis, using LiteLLM.

Provides async multi-provider support behind one call. Anthropic is the default
provider; OpenAI and Gemini work the same way when their keys are configured.

Usage:
    from discovery.analysis.client import request_analysis

    parsed = await request_analysis(
        provider="anthropic",
        text="I love the warm wood and open space",
        api_key=key,
        timeout=5.0,
    )
"""

import json
import os
import re
from typing import Any, Dict, List, Optional

import litellm
from litellm import acompletion

from ..errors import ProviderFailure

# Suppress LiteLLM's verbose logging
litellm.suppress_debug_info = True
litellm.drop_params = True


# ============================================================================
# Model Configuration
# ============================================================================

SUPPORTED_MODELS: Dict[str, str] = {
    "anthropic": "claude-3-haiku-20240307",
    "openai": "gpt-4o-mini",
    "gemini": "gemini/gemini-2.0-flash",
}

API_KEY_ENV_VARS: Dict[str, str] = {
    "anthropic": "ANTHROPIC_API_KEY",
    "openai": "OPENAI_API_KEY",
    "gemini": "GEMINI_API_KEY",
}

ANALYSIS_PROMPT = """Analyze this interior design preference explanation and extract:
1. Design-related keywords (colors, styles, materials, feelings)
2. Emotional responses (what emotions does the user express?)
3. Style indicators (modern, traditional, minimalist, etc.)

User explanation: "{text}"

Respond in JSON format:
{{
  "keywords": ["keyword1", "keyword2", ...],
  "emotions": ["emotion1", "emotion2", ...],
  "style_indicators": ["indicator1", "indicator2", ...]
}}"""


# ============================================================================
# Provider Availability
# ============================================================================

def get_available_providers() -> List[str]:
    """Providers with an API key set in the environment."""
    return [p for p, env_var in API_KEY_ENV_VARS.items() if os.getenv(env_var)]


def get_model_for_provider(provider: str) -> str:
    """
    Get the LiteLLM model identifier for a provider.

    Raises:
        ValueError: If provider is not supported
    """
    model = SUPPORTED_MODELS.get(provider)
    if not model:
        raise ValueError(f"Unsupported provider: {provider}. "
                         f"Supported: {list(SUPPORTED_MODELS.keys())}")
    return model


def resolve_api_key(provider: str, api_key: Optional[str] = None) -> Optional[str]:
    """Explicit key if non-blank, else the provider's environment variable."""
    if api_key and api_key.strip():
        return api_key.strip()
    env_var = API_KEY_ENV_VARS.get(provider)
    value = os.getenv(env_var) if env_var else None
    return value.strip() if value and value.strip() else None


# ============================================================================
# JSON Parsing
# ============================================================================

def parse_json_response(content: str) -> Dict[str, Any]:
    """
    Parse a JSON object from an LLM reply.

    Accepts a bare object, one wrapped in a markdown code block, or one
    embedded in surrounding text.

    Raises:
        ProviderFailure: If no JSON object can be found
    """
    content = (content or "").strip()
    candidates = [content]
    fenced = re.search(r"```(?:json)?\s*(\{[\s\S]*?\})\s*```", content)
    if fenced:
        candidates.append(fenced.group(1))
    braces = re.search(r"\{[\s\S]*\}", content)
    if braces:
        candidates.append(braces.group())

    for candidate in candidates:
        try:
            parsed = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if isinstance(parsed, dict):
            return parsed
    raise ProviderFailure(f"Could not parse JSON from response: {content[:200]}...")


def _string_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [str(v).strip() for v in value if str(v).strip()]


def normalize_analysis(parsed: Dict[str, Any]) -> Dict[str, List[str]]:
    """Keep the three expected lists; anything malformed becomes an empty list."""
    return {
        "keywords": [kw.lower() for kw in _string_list(parsed.get("keywords"))],
        "emotions": _string_list(parsed.get("emotions")),
        "style_indicators": _string_list(parsed.get("style_indicators")),
    }


# ============================================================================
# LLM API Calls
# ============================================================================

async def request_analysis(
    provider: str,
    text: str,
    api_key: str,
    timeout: float,
    max_tokens: int = 500,
) -> Dict[str, List[str]]:
    """
    Ask the provider to analyze text.

    Returns:
        {"keywords": [...], "emotions": [...], "style_indicators": [...]}

    Raises:
        ProviderFailure: On any transport or parse failure
    """
    model = get_model_for_provider(provider)
    try:
        response = await acompletion(
            model=model,
            messages=[{"role": "user", "content": ANALYSIS_PROMPT.format(text=text)}],
            api_key=api_key,
            max_tokens=max_tokens,
            timeout=timeout,
        )
        content = response.choices[0].message.content
    except Exception as e:
        raise ProviderFailure(f"{provider} request failed: {e}") from e
    return normalize_analysis(parse_json_response(content))


__all__ = [
    "API_KEY_ENV_VARS",
    "SUPPORTED_MODELS",
    "get_available_providers",
    "get_model_for_provider",
    "normalize_analysis",
    "parse_json_response",
    "request_analysis",
    "resolve_api_key",
]
