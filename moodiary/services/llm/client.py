"""
LLM Client

Реестр провайдеров и единая точка вызова модели.
"""

from typing import Any, Dict, Iterable, List, Optional

import httpx

from moodiary.core.logging import get_logger
from moodiary.domain.exceptions import ConfigurationError, DomainError
from moodiary.schemas.llm import LLMModelInfo

from .providers import BaseLLMProvider, DeepSeekProvider, SiliconFlowProvider
from .providers.base import DEFAULT_TIMEOUT

logger = get_logger(__name__)

# Порядок выбора провайдера по умолчанию
PROVIDER_PRIORITY = ("siliconflow", "deepseek")


class LLMClient:
    """
    Управляет набором провайдеров LLM.

    Usage:
        client = LLMClient()
        text = await client.generate_text("siliconflow", prompt, api_key=key)
    """

    def __init__(
        self,
        providers: Optional[Dict[str, BaseLLMProvider]] = None,
        timeout: float = DEFAULT_TIMEOUT,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Args:
            providers: Свой набор провайдеров (по умолчанию siliconflow + deepseek)
            timeout: Таймаут запроса для провайдеров по умолчанию
            http_client: Общий httpx клиент для провайдеров по умолчанию
        """
        if providers is None:
            providers = {
                "siliconflow": SiliconFlowProvider(timeout=timeout, http_client=http_client),
                "deepseek": DeepSeekProvider(timeout=timeout, http_client=http_client),
            }
        self._providers: Dict[str, BaseLLMProvider] = dict(providers)

    @property
    def available_providers(self) -> List[str]:
        return list(self._providers)

    def get_provider(self, provider_name: str) -> Optional[BaseLLMProvider]:
        return self._providers.get(provider_name)

    def register_provider(self, name: str, provider: BaseLLMProvider) -> None:
        self._providers[name] = provider
        logger.info("Registered LLM provider: %s", name)

    def _require_provider(self, provider_name: str) -> BaseLLMProvider:
        provider = self._providers.get(provider_name)
        if provider is None:
            raise ConfigurationError(
                f"Unknown provider: {provider_name}",
                {"available": self.available_providers},
            )
        return provider

    async def generate_text(
        self,
        provider_name: str,
        prompt: str,
        model: Optional[str] = None,
        api_key: Optional[str] = None,
        parameters: Optional[Dict[str, Any]] = None,
    ) -> str:
        """
        Вызов модели через указанного провайдера.

        Raises:
            ConfigurationError: Неизвестный провайдер или нет API ключа
            ProviderError (и наследники): Ошибка вызова
        """
        provider = self._require_provider(provider_name)

        if provider.requires_api_key and not (api_key or "").strip():
            raise ConfigurationError(f"API key required for provider: {provider_name}")

        try:
            result = await provider.generate_text(
                prompt,
                model=model,
                api_key=api_key,
                parameters=parameters,
            )
        except DomainError as e:
            logger.warning("LLM call failed: %s - %s", provider_name, e)
            raise

        logger.info("LLM call successful: %s", provider_name)
        return result

    async def test_provider_connection(self, provider_name: str, api_key: Optional[str] = None) -> bool:
        """Проверка связи. Любая ошибка → False."""
        provider = self._providers.get(provider_name)
        if provider is None:
            return False

        try:
            return await provider.test_connection(api_key=api_key)
        except Exception as e:
            logger.warning("Provider connection test failed: %s - %s", provider_name, e)
            return False

    async def get_provider_models(self, provider_name: str, api_key: Optional[str] = None) -> List[LLMModelInfo]:
        provider = self._require_provider(provider_name)
        return await provider.get_available_models(api_key=api_key)

    def get_provider_info(self, provider_name: str) -> Dict[str, Any]:
        return self._require_provider(provider_name).get_info()

    def get_all_providers_info(self) -> Dict[str, Dict[str, Any]]:
        return {name: self.get_provider_info(name) for name in self._providers}

    def get_best_provider(self, exclude: Optional[Iterable[str]] = None) -> Optional[str]:
        """
        Рекомендуемый провайдер с учётом исключений.

        Приоритет: siliconflow → deepseek → первый зарегистрированный.
        """
        excluded = set(exclude or ())
        candidates = [name for name in self._providers if name not in excluded]

        if not candidates:
            return None

        for name in PROVIDER_PRIORITY:
            if name in candidates:
                return name

        return candidates[0]

    async def aclose(self) -> None:
        for provider in self._providers.values():
            await provider.aclose()
