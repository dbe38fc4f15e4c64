"""Rationale analysis: LiteLLM client and the fallback-guarded provider."""

from .client import SUPPORTED_MODELS, get_available_providers, parse_json_response
from .provider import TextAnalysisProvider, fallback_analysis

__all__ = [
    "SUPPORTED_MODELS",
    "TextAnalysisProvider",
    "fallback_analysis",
    "get_available_providers",
    "parse_json_response",
]
