"""
Unit Tests for LLM Providers & LLMClient

Провайдеры проверяются целиком через openai SDK
с подменённым транспортом httpx (без сети).
"""

import json

import httpx
import pytest
from unittest.mock import AsyncMock, Mock

from conftest import chat_completion
from moodiary.domain.exceptions import (
    AuthError,
    ConfigurationError,
    ProviderError,
    RateLimitError,
    UpstreamUnavailableError,
)
from moodiary.services.llm.client import LLMClient
from moodiary.services.llm.providers import DeepSeekProvider, SiliconFlowProvider


def make_http_client(handler):
    """httpx клиент, отвечающий через handler(request) -> httpx.Response."""
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def ok_handler(content="分析结果", captured=None):
    def handler(request: httpx.Request) -> httpx.Response:
        if captured is not None:
            captured.append(request)
        return httpx.Response(200, json=chat_completion(content))
    return handler


def status_handler(status_code):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, json={"error": {"message": "error", "code": status_code}})
    return handler


# ============================================================================
# Tests for OpenAI-compatible providers
# ============================================================================

class TestSiliconFlowProvider:
    """Тесты для SiliconFlowProvider."""

    @pytest.mark.asyncio
    async def test_generate_text_request(self):
        """Запрос: POST /chat/completions, Bearer ключ, параметры поверх дефолтов."""
        captured = []
        provider = SiliconFlowProvider(http_client=make_http_client(ok_handler("  ответ  ", captured)))

        result = await provider.generate_text(
            "你好",
            api_key="sk-test",
            parameters={"max_tokens": 500, "temperature": 0.3},
        )

        assert result == "ответ"
        assert len(captured) == 1

        request = captured[0]
        assert request.method == "POST"
        assert str(request.url) == "https://api.siliconflow.cn/v1/chat/completions"
        assert request.headers["Authorization"] == "Bearer sk-test"

        body = json.loads(request.content)
        assert body["model"] == "Qwen/Qwen3-14B"
        assert body["messages"] == [{"role": "user", "content": "你好"}]
        assert body["max_tokens"] == 500
        assert body["temperature"] == 0.3
        assert body["stream"] is False

    @pytest.mark.asyncio
    async def test_default_parameters(self):
        captured = []
        provider = SiliconFlowProvider(http_client=make_http_client(ok_handler(captured=captured)))

        await provider.generate_text("x", model="deepseek-ai/DeepSeek-V3", api_key="sk-test")

        body = json.loads(captured[0].content)
        assert body["model"] == "deepseek-ai/DeepSeek-V3"
        assert body["max_tokens"] == 1000
        assert body["temperature"] == 0.7

    @pytest.mark.asyncio
    async def test_unknown_parameters_passed_in_body(self):
        captured = []
        provider = SiliconFlowProvider(http_client=make_http_client(ok_handler(captured=captured)))

        await provider.generate_text("x", api_key="sk-test", parameters={"top_k": 20})

        assert json.loads(captured[0].content)["top_k"] == 20

    @pytest.mark.asyncio
    @pytest.mark.parametrize("api_key", [None, "", "   "])
    async def test_missing_api_key(self, api_key):
        """Нет ключа → ConfigurationError, без запроса."""
        captured = []
        provider = SiliconFlowProvider(http_client=make_http_client(ok_handler(captured=captured)))

        with pytest.raises(ConfigurationError):
            await provider.generate_text("x", api_key=api_key)

        assert captured == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status_code,error_cls", [
        (401, AuthError),
        (429, RateLimitError),
        (500, UpstreamUnavailableError),
        (503, UpstreamUnavailableError),
        (400, ProviderError),
        (404, ProviderError),
    ])
    async def test_status_mapping(self, status_code, error_cls):
        provider = SiliconFlowProvider(http_client=make_http_client(status_handler(status_code)))

        with pytest.raises(error_cls) as exc_info:
            await provider.generate_text("x", api_key="sk-test")

        assert exc_info.value.status_code == status_code
        assert exc_info.value.provider_name == "siliconflow"

    @pytest.mark.asyncio
    async def test_status_message(self):
        provider = SiliconFlowProvider(http_client=make_http_client(status_handler(401)))

        with pytest.raises(AuthError) as exc_info:
            await provider.generate_text("x", api_key="sk-test")

        assert "invalid or expired" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_no_retry(self):
        """Ошибка 5xx не повторяется на этом уровне."""
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(503, json={"error": {"message": "overloaded"}})

        provider = SiliconFlowProvider(http_client=make_http_client(handler))

        with pytest.raises(UpstreamUnavailableError):
            await provider.generate_text("x", api_key="sk-test")

        assert len(calls) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("exc", [
        httpx.ReadTimeout("timed out"),
        httpx.ConnectError("connection refused"),
    ])
    async def test_transport_errors(self, exc):
        """Сеть / таймаут → ProviderError без HTTP статуса."""
        def handler(request):
            raise exc

        provider = SiliconFlowProvider(http_client=make_http_client(handler))

        with pytest.raises(ProviderError) as exc_info:
            await provider.generate_text("x", api_key="sk-test")

        assert type(exc_info.value) is ProviderError
        assert exc_info.value.status_code is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", ["", "   "])
    async def test_empty_content_is_error(self, content):
        provider = SiliconFlowProvider(http_client=make_http_client(ok_handler(content)))

        with pytest.raises(ProviderError) as exc_info:
            await provider.generate_text("x", api_key="sk-test")

        assert "Empty response" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_no_choices_is_error(self):
        def handler(request):
            body = chat_completion("x")
            body["choices"] = []
            return httpx.Response(200, json=body)

        provider = SiliconFlowProvider(http_client=make_http_client(handler))

        with pytest.raises(ProviderError):
            await provider.generate_text("x", api_key="sk-test")

    @pytest.mark.asyncio
    async def test_connection_ok(self):
        captured = []
        provider = SiliconFlowProvider(http_client=make_http_client(ok_handler("ok", captured)))

        assert await provider.test_connection(api_key="sk-test") is True

        body = json.loads(captured[0].content)
        assert body["max_tokens"] == 5
        assert body["messages"][0]["content"] == "测试"

    @pytest.mark.asyncio
    async def test_connection_failure_returns_false(self):
        provider = SiliconFlowProvider(http_client=make_http_client(status_handler(401)))

        assert await provider.test_connection(api_key="sk-bad") is False

    @pytest.mark.asyncio
    async def test_connection_without_key(self):
        provider = SiliconFlowProvider(http_client=make_http_client(ok_handler()))

        assert await provider.test_connection() is False

    @pytest.mark.asyncio
    async def test_available_models(self):
        models = await SiliconFlowProvider().get_available_models()

        assert [m.name for m in models] == ["Qwen/Qwen3-14B", "deepseek-ai/DeepSeek-V3"]
        assert models[0].max_context_length == 131072

    def test_estimate_cost_unknown(self):
        assert SiliconFlowProvider().estimate_cost(100, 50) is None

    def test_client_cached_per_key(self):
        provider = SiliconFlowProvider()

        assert provider._get_client("a") is provider._get_client("a")
        assert provider._get_client("a") is not provider._get_client("b")


class TestDeepSeekProvider:
    """Тесты для DeepSeekProvider."""

    @pytest.mark.asyncio
    async def test_endpoint_and_model(self):
        captured = []
        provider = DeepSeekProvider(http_client=make_http_client(ok_handler(captured=captured)))

        await provider.generate_text("x", api_key="sk-test")

        assert str(captured[0].url) == "https://api.deepseek.com/v1/chat/completions"
        assert json.loads(captured[0].content)["model"] == "deepseek-chat"

    @pytest.mark.asyncio
    async def test_status_message(self):
        provider = DeepSeekProvider(http_client=make_http_client(status_handler(503)))

        with pytest.raises(UpstreamUnavailableError) as exc_info:
            await provider.generate_text("x", api_key="sk-test")

        assert "DeepSeek" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_available_models(self):
        models = await DeepSeekProvider().get_available_models()

        assert len(models) == 1
        assert models[0].max_context_length == 32768


# ============================================================================
# Tests for LLMClient
# ============================================================================

class TestLLMClient:
    """Тесты для реестра провайдеров."""

    def test_default_providers(self):
        client = LLMClient()

        assert client.available_providers == ["siliconflow", "deepseek"]
        assert isinstance(client.get_provider("deepseek"), DeepSeekProvider)
        assert client.get_provider("unknown") is None

    @pytest.mark.asyncio
    async def test_generate_text(self):
        client = LLMClient(http_client=make_http_client(ok_handler("结果")))

        result = await client.generate_text("deepseek", "prompt", api_key="sk-test")

        assert result == "结果"

    @pytest.mark.asyncio
    async def test_unknown_provider(self):
        with pytest.raises(ConfigurationError) as exc_info:
            await LLMClient().generate_text("openrouter", "prompt", api_key="sk-test")

        assert "Unknown provider" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_missing_key(self):
        with pytest.raises(ConfigurationError):
            await LLMClient().generate_text("siliconflow", "prompt")

    @pytest.mark.asyncio
    async def test_provider_errors_propagate(self):
        client = LLMClient(http_client=make_http_client(status_handler(429)))

        with pytest.raises(RateLimitError):
            await client.generate_text("siliconflow", "prompt", api_key="sk-test")

    @pytest.mark.asyncio
    async def test_connection_never_raises(self):
        """Ошибки проверки связи → False."""
        broken = Mock()
        broken.test_connection = AsyncMock(side_effect=RuntimeError("boom"))
        client = LLMClient(providers={"broken": broken})

        assert await client.test_provider_connection("broken", api_key="k") is False
        assert await client.test_provider_connection("missing", api_key="k") is False

    def test_register_provider(self):
        client = LLMClient()
        custom = Mock()

        client.register_provider("custom", custom)

        assert client.get_provider("custom") is custom
        assert "custom" in client.available_providers

    def test_provider_info(self):
        info = LLMClient().get_provider_info("siliconflow")

        assert info["name"] == "siliconflow"
        assert info["baseUrl"] == "https://api.siliconflow.cn/v1"
        assert info["defaultModel"] == "Qwen/Qwen3-14B"
        assert info["requiresApiKey"] is True

    def test_all_providers_info(self):
        assert set(LLMClient().get_all_providers_info()) == {"siliconflow", "deepseek"}

    @pytest.mark.asyncio
    async def test_provider_models(self):
        models = await LLMClient().get_provider_models("deepseek")

        assert models[0].name == "deepseek-chat"

    def test_best_provider(self):
        client = LLMClient()

        assert client.get_best_provider() == "siliconflow"
        assert client.get_best_provider(exclude=["siliconflow"]) == "deepseek"
        assert client.get_best_provider(exclude=["siliconflow", "deepseek"]) is None

    def test_best_provider_falls_back_to_registered(self):
        client = LLMClient(providers={"custom": Mock()})

        assert client.get_best_provider() == "custom"

    @pytest.mark.asyncio
    async def test_aclose(self):
        client = LLMClient(http_client=make_http_client(ok_handler()))
        await client.generate_text("siliconflow", "prompt", api_key="sk-test")

        await client.aclose()

        assert client.get_provider("siliconflow")._clients == {}


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
