"""
Base LLM Provider

Единый интерфейс к удалённым моделям и общая реализация
для OpenAI-совместимых chat-completion сервисов.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import httpx
import openai
from openai import AsyncOpenAI

from moodiary.core.logging import get_logger
from moodiary.domain.exceptions import (
    AuthError,
    ConfigurationError,
    DomainError,
    ProviderError,
    RateLimitError,
    UpstreamUnavailableError,
)
from moodiary.schemas.llm import LLMModelInfo

logger = get_logger(__name__)

DEFAULT_TIMEOUT = 30.0
DEFAULT_PARAMETERS = {"max_tokens": 1000, "temperature": 0.7}

# Параметры, которые SDK принимает именованными аргументами;
# остальные уходят в тело запроса через extra_body
_SDK_PARAMETERS = frozenset({
    "max_tokens",
    "temperature",
    "top_p",
    "stop",
    "presence_penalty",
    "frequency_penalty",
    "seed",
    "n",
})


class BaseLLMProvider(ABC):
    """
    Интерфейс провайдера LLM.

    Атрибуты класса описывают провайдера (имя, URL, модели),
    методы выполняют запросы.
    """

    name: str = ""
    display_name: str = ""
    base_url: str = ""
    requires_api_key: bool = True
    default_model: str = ""
    supported_models: List[str] = []

    @abstractmethod
    async def generate_text(
        self,
        prompt: str,
        model: Optional[str] = None,
        api_key: Optional[str] = None,
        parameters: Optional[Dict[str, Any]] = None,
    ) -> str:
        """
        Генерация текста по промпту.

        Raises:
            ConfigurationError: Нет API ключа
            ProviderError: Сеть / таймаут / пустой ответ
            AuthError, RateLimitError, UpstreamUnavailableError: По HTTP статусу
        """

    @abstractmethod
    async def test_connection(self, api_key: Optional[str] = None) -> bool:
        """Минимальный реальный запрос. Никогда не бросает исключений."""

    @abstractmethod
    async def get_available_models(self, api_key: Optional[str] = None) -> List[LLMModelInfo]:
        """Статический каталог моделей."""

    def estimate_cost(
        self,
        input_tokens: int,
        output_tokens: int,
        model: Optional[str] = None,
    ) -> Optional[float]:
        """Оценка стоимости вызова. None = неизвестно."""
        return None

    async def aclose(self) -> None:
        """Освободить сетевые ресурсы."""

    def get_info(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "displayName": self.display_name,
            "baseUrl": self.base_url,
            "requiresApiKey": self.requires_api_key,
            "defaultModel": self.default_model,
            "supportedModels": list(self.supported_models),
        }


class OpenAICompatibleProvider(BaseLLMProvider):
    """
    Провайдер с OpenAI-совместимым API (POST {base_url}/chat/completions).

    Транспорт: openai.AsyncOpenAI, без автоматических ретраев.
    Наследники задают base_url, модели и сообщения для HTTP статусов.
    """

    # HTTP статус → сообщение об ошибке
    status_messages: Dict[int, str] = {}
    models: List[LLMModelInfo] = []

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Args:
            timeout: Таймаут одного запроса (сек)
            http_client: Свой httpx клиент (например, с MockTransport)
        """
        self.timeout = timeout
        self._http_client = http_client
        self._clients: Dict[str, AsyncOpenAI] = {}

    def _get_client(self, api_key: str) -> AsyncOpenAI:
        client = self._clients.get(api_key)
        if client is None:
            client = AsyncOpenAI(
                base_url=self.base_url,
                api_key=api_key,
                timeout=self.timeout,
                max_retries=0,
                http_client=self._http_client,
            )
            self._clients[api_key] = client
        return client

    async def generate_text(
        self,
        prompt: str,
        model: Optional[str] = None,
        api_key: Optional[str] = None,
        parameters: Optional[Dict[str, Any]] = None,
    ) -> str:
        if self.requires_api_key and not (api_key or "").strip():
            raise ConfigurationError(f"{self.display_name} API key is required")

        request_model = model or self.default_model

        merged = {**DEFAULT_PARAMETERS, **(parameters or {})}
        merged.pop("stream", None)
        sdk_kwargs = {k: v for k, v in merged.items() if k in _SDK_PARAMETERS}
        extra_body = {k: v for k, v in merged.items() if k not in _SDK_PARAMETERS}

        client = self._get_client(api_key)

        try:
            response = await client.chat.completions.create(
                model=request_model,
                messages=[{"role": "user", "content": prompt}],
                stream=False,
                extra_body=extra_body or None,
                **sdk_kwargs,
            )
        except openai.APITimeoutError as exc:
            raise ProviderError(
                f"{self.display_name} request timed out, check the network connection",
                provider_name=self.name,
            ) from exc
        except openai.APIConnectionError as exc:
            raise ProviderError(
                f"{self.display_name} connection failed: {exc}",
                provider_name=self.name,
            ) from exc
        except openai.APIStatusError as exc:
            raise self._map_status_error(exc.status_code) from exc
        except (openai.OpenAIError, httpx.HTTPError) as exc:
            raise ProviderError(
                f"Unexpected error calling {self.display_name}: {exc}",
                provider_name=self.name,
            ) from exc

        try:
            choices = response.choices or []
            content = choices[0].message.content if choices else None
        except (AttributeError, IndexError, TypeError) as exc:
            raise ProviderError(
                f"Malformed response from {self.display_name}",
                provider_name=self.name,
            ) from exc

        if not choices:
            raise ProviderError(
                f"No response choices returned from {self.display_name}",
                provider_name=self.name,
            )
        if not isinstance(content, str) or not content.strip():
            raise ProviderError(
                f"Empty response content from {self.display_name}",
                provider_name=self.name,
            )

        logger.debug("%s: model=%s, response_len=%d", self.name, request_model, len(content))
        return content.strip()

    def _map_status_error(self, status_code: int) -> ProviderError:
        message = self.status_messages.get(
            status_code,
            f"{self.display_name} request failed with status {status_code}",
        )

        if status_code == 401:
            error_cls = AuthError
        elif status_code == 429:
            error_cls = RateLimitError
        elif status_code >= 500:
            error_cls = UpstreamUnavailableError
        else:
            error_cls = ProviderError

        return error_cls(message, provider_name=self.name, status_code=status_code)

    async def test_connection(self, api_key: Optional[str] = None) -> bool:
        if not (api_key or "").strip():
            return False

        try:
            await self.generate_text("测试", api_key=api_key, parameters={"max_tokens": 5})
            return True
        except DomainError as e:
            logger.warning("%s connection test failed: %s", self.name, e)
            return False

    async def get_available_models(self, api_key: Optional[str] = None) -> List[LLMModelInfo]:
        return list(self.models)

    async def aclose(self) -> None:
        clients = list(self._clients.values())
        self._clients.clear()
        for client in clients:
            await client.close()
