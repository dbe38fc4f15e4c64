"""
Text analysis provider: one deadline-bound LLM attempt with a mandatory
keyword-extraction fallback.

analyze() always returns an AnalysisResult. Transport errors, timeouts, and
unparseable replies are logged as warnings and replaced by the fallback; they
never reach the caller and are never retried.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Dict, List, Optional

from ..errors import ProviderFailure
from ..models.analysis import LLM_SOURCE, AnalysisResult
from ..stages.keywords import extract_keywords
from .client import request_analysis, resolve_api_key

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 5.0

AnalysisCall = Callable[[str, str, str, float], Awaitable[Dict[str, List[str]]]]


def fallback_analysis(text: str) -> AnalysisResult:
    """Deterministic local analysis: design keywords only."""
    return AnalysisResult.fallback(extract_keywords(text or ""))


class TextAnalysisProvider:
    """
    Optional LLM upgrade over keyword extraction.

    Args:
        provider: LiteLLM provider name ("anthropic", "openai", "gemini").
        api_key: Default credential; per-call keys take precedence.
        timeout: Default deadline in seconds.
        call: Coroutine performing the request; defaults to request_analysis.
    """

    def __init__(
        self,
        provider: str = "anthropic",
        api_key: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        call: Optional[AnalysisCall] = None,
    ):
        self.provider = provider
        self.api_key = api_key
        self.timeout = timeout
        self._call = call or request_analysis

    async def analyze(
        self,
        text: str,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> AnalysisResult:
        """Analyze text with the LLM when a credential is available, else fall back."""
        key = resolve_api_key(self.provider, api_key or self.api_key)
        if not key or not (text or "").strip():
            return fallback_analysis(text)

        deadline = timeout if timeout is not None else self.timeout
        try:
            parsed = await asyncio.wait_for(
                self._call(self.provider, text, key, deadline),
                timeout=deadline,
            )
        except asyncio.TimeoutError:
            logger.warning("LLM analysis timed out after %.1fs, falling back to keyword extraction", deadline)
            return fallback_analysis(text)
        except ProviderFailure as e:
            logger.warning("LLM analysis failed, falling back to keyword extraction: %s", e)
            return fallback_analysis(text)
        except Exception as e:
            logger.warning("LLM analysis raised %s, falling back to keyword extraction: %s", type(e).__name__, e)
            return fallback_analysis(text)

        return AnalysisResult(
            keywords=parsed.get("keywords", []),
            emotions=parsed.get("emotions", []),
            style_indicators=parsed.get("style_indicators", []),
            source=LLM_SOURCE,
        )
