"""
Text Analysis Provider Tests

The provider makes at most one LLM attempt within a deadline and always
returns an AnalysisResult. No network calls are made here: the LLM call is
replaced with a fake coroutine.

Scenarios:
----------
1. No credential: keyword-extraction fallback
2. Provider failure or unexpected error: fallback
3. Deadline exceeded: fallback
4. Success: tagged "llm" result
5. JSON reply parsing

Run:
----
    pytest tests/test_analysis_provider.py -v
"""

import asyncio

import pytest

from discovery.analysis.client import (
    get_model_for_provider,
    normalize_analysis,
    parse_json_response,
    resolve_api_key,
)
from discovery.analysis.provider import TextAnalysisProvider, fallback_analysis
from discovery.errors import ProviderFailure

RATIONALE = "I love the warm wood and open space"


def make_call(result=None, error=None, delay=0.0):
    calls = []

    async def _call(provider, text, api_key, timeout):
        calls.append((provider, text, api_key, timeout))
        if delay:
            await asyncio.sleep(delay)
        if error is not None:
            raise error
        return result

    _call.calls = calls
    return _call


class TestTextAnalysisProvider:

    @pytest.fixture(autouse=True)
    def no_env_keys(self, monkeypatch):
        for var in ("ANTHROPIC_API_KEY", "OPENAI_API_KEY", "GEMINI_API_KEY"):
            monkeypatch.delenv(var, raising=False)

    @pytest.mark.asyncio
    async def test_no_key_uses_fallback(self):
        call = make_call(result={"keywords": ["never"]})
        provider = TextAnalysisProvider(call=call)
        result = await provider.analyze(RATIONALE)
        assert result.source == "keyword_extraction"
        assert result.is_fallback
        assert result.keywords == ["warm", "wood", "open", "space"]
        assert result.emotions == []
        assert call.calls == []

    @pytest.mark.asyncio
    async def test_provider_failure_uses_fallback(self):
        provider = TextAnalysisProvider(api_key="k", call=make_call(error=ProviderFailure("503")))
        result = await provider.analyze(RATIONALE)
        assert result == fallback_analysis(RATIONALE)

    @pytest.mark.asyncio
    async def test_unexpected_error_uses_fallback(self):
        provider = TextAnalysisProvider(api_key="k", call=make_call(error=KeyError("choices")))
        result = await provider.analyze(RATIONALE)
        assert result.is_fallback

    @pytest.mark.asyncio
    async def test_timeout_uses_fallback(self):
        call = make_call(result={"keywords": ["late"]}, delay=1.0)
        provider = TextAnalysisProvider(api_key="k", call=call)
        result = await provider.analyze(RATIONALE, timeout=0.01)
        assert result.is_fallback
        assert result.keywords == ["warm", "wood", "open", "space"]

    @pytest.mark.asyncio
    async def test_success(self):
        call = make_call(
            result={
                "keywords": ["warm", "wood"],
                "emotions": ["calm"],
                "style_indicators": ["scandinavian"],
            }
        )
        provider = TextAnalysisProvider(api_key="default-key", timeout=2.0, call=call)
        result = await provider.analyze(RATIONALE)
        assert result.source == "llm"
        assert result.keywords == ["warm", "wood"]
        assert result.emotions == ["calm"]
        assert result.style_indicators == ["scandinavian"]
        assert call.calls == [("anthropic", RATIONALE, "default-key", 2.0)]

    @pytest.mark.asyncio
    async def test_per_call_key_takes_precedence(self):
        call = make_call(result={"keywords": []})
        provider = TextAnalysisProvider(api_key="default-key", call=call)
        await provider.analyze(RATIONALE, api_key="user-key")
        assert call.calls[0][2] == "user-key"

    @pytest.mark.asyncio
    async def test_env_key(self, monkeypatch):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "env-key")
        call = make_call(result={"keywords": ["cozy"]})
        result = await TextAnalysisProvider(call=call).analyze(RATIONALE)
        assert result.source == "llm"
        assert call.calls[0][2] == "env-key"

    @pytest.mark.asyncio
    async def test_blank_text_skips_llm(self):
        call = make_call(result={"keywords": ["x"]})
        result = await TextAnalysisProvider(api_key="k", call=call).analyze("   ")
        assert result.is_fallback
        assert call.calls == []


class TestClientHelpers:

    def test_parse_bare_json(self):
        assert parse_json_response('{"keywords": ["wood"]}') == {"keywords": ["wood"]}

    def test_parse_fenced_json(self):
        content = 'Here you go:\n```json\n{"emotions": ["calm"]}\n```'
        assert parse_json_response(content) == {"emotions": ["calm"]}

    def test_parse_embedded_json(self):
        content = 'Sure! {"style_indicators": ["modern"]} Hope that helps.'
        assert parse_json_response(content) == {"style_indicators": ["modern"]}

    def test_parse_garbage(self):
        with pytest.raises(ProviderFailure):
            parse_json_response("I cannot help with that")

    def test_normalize_analysis(self):
        parsed = {"keywords": ["Warm", " ", "Wood"], "emotions": "happy", "extra": 1}
        assert normalize_analysis(parsed) == {
            "keywords": ["warm", "wood"],
            "emotions": [],
            "style_indicators": [],
        }

    def test_resolve_api_key(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", " env-key ")
        assert resolve_api_key("openai", "  explicit ") == "explicit"
        assert resolve_api_key("openai", "   ") == "env-key"
        monkeypatch.delenv("OPENAI_API_KEY")
        assert resolve_api_key("openai") is None

    def test_unsupported_provider(self):
        assert get_model_for_provider("anthropic").startswith("claude")
        with pytest.raises(ValueError, match="Unsupported provider"):
            get_model_for_provider("nope")
