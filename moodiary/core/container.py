"""
Dependency Injection Container

Простой DI контейнер: singleton/factory провайдеры с ленивым созданием.
"""

import logging
from typing import Any, Callable, Optional

from moodiary.core.config import Config, ConfigSettingsProvider
from moodiary.domain.services import EmotionScorer
from moodiary.domain.value_objects import AnalysisMethod
from moodiary.services.analysis import (
    AnalysisStrategySelector,
    LLMAnalysisStrategy,
    LocalAIStrategy,
    RuleBasedStrategy,
)
from moodiary.services.analytics import AnalyticsService
from moodiary.services.llm.client import LLMClient
from moodiary.services.search import SearchService
from moodiary.services.smart_tags import SmartTagExtractor
from moodiary.services.tags import TagUtils
from moodiary.services.use_cases import AnalyzeEntryUseCase


class Container:
    """
    DI Container для конвейера анализа.

    Реализует паттерн Service Locator с lazy initialization.
    """

    def __init__(self, config: Optional[Config] = None):
        """
        Args:
            config: Конфигурация (по умолчанию создается из окружения / .env)
        """
        self._config = config
        self._singletons = {}
        self._factories = {}

        self._register_providers()

    def _register_providers(self):
        """Регистрация всех провайдеров."""

        self._register_singleton('config', lambda: self._get_config())
        self._register_factory('logger', lambda name='moodiary': logging.getLogger(name))
        self._register_singleton('settings', lambda: ConfigSettingsProvider(self.get('config')))

        # Infrastructure
        self._register_singleton(
            'llm_client',
            lambda: LLMClient(timeout=self.get('config').llm_timeout)
        )
        self._register_singleton(
            'tag_utils',
            lambda: TagUtils(maxsize=self.get('config').tag_cache_maxsize)
        )
        self._register_singleton(
            'smart_tag_extractor',
            lambda: SmartTagExtractor(self.get('tag_utils'))
        )
        self._register_singleton('emotion_scorer', lambda: EmotionScorer())

        # Strategies
        self._register_singleton('rule_strategy', lambda: RuleBasedStrategy(self.get('emotion_scorer')))
        self._register_singleton(
            'llm_strategy',
            lambda: LLMAnalysisStrategy(self.get('llm_client'), self.get('settings'))
        )
        self._register_singleton('local_strategy', lambda: LocalAIStrategy())
        self._register_singleton(
            'strategy_selector',
            lambda: AnalysisStrategySelector(
                {
                    AnalysisMethod.RULE: self.get('rule_strategy'),
                    AnalysisMethod.LLM: self.get('llm_strategy'),
                    AnalysisMethod.LOCAL: self.get('local_strategy'),
                },
                self.get('settings'),
            )
        )

        # Services (stateless)
        self._register_singleton('search_service', lambda: SearchService())
        self._register_singleton('analytics_service', lambda: AnalyticsService())

        # Use Cases
        self._register_singleton(
            'analyze_entry_uc',
            lambda: AnalyzeEntryUseCase(
                selector=self.get('strategy_selector'),
                tag_utils=self.get('tag_utils'),
                llm_strategy=self.get('llm_strategy'),
            )
        )

    def _register_singleton(self, name: str, provider: Callable):
        """Регистрация singleton (создается один раз)."""
        self._factories[name] = ('singleton', provider)

    def _register_factory(self, name: str, provider: Callable):
        """Регистрация factory (создается каждый раз)."""
        self._factories[name] = ('factory', provider)

    def get(self, name: str, *args, **kwargs) -> Any:
        """
        Получить зависимость.

        Raises:
            KeyError: если зависимость не зарегистрирована
        """
        if name not in self._factories:
            raise KeyError(f"Dependency '{name}' not registered in container")

        scope, provider = self._factories[name]

        if scope == 'singleton':
            if name not in self._singletons:
                self._singletons[name] = provider()
            return self._singletons[name]

        return provider(*args, **kwargs)

    def _get_config(self) -> Config:
        if self._config is None:
            self._config = Config()
        return self._config

    async def aclose(self):
        """Закрыть сетевые клиенты (если были созданы)."""
        client = self._singletons.get('llm_client')
        if client is not None:
            await client.aclose()

    # Convenience methods

    @property
    def config(self) -> Config:
        return self.get('config')

    def logger(self, name: str = 'moodiary') -> logging.Logger:
        return self.get('logger', name)

    @property
    def settings(self) -> ConfigSettingsProvider:
        return self.get('settings')

    @property
    def llm_client(self) -> LLMClient:
        return self.get('llm_client')

    @property
    def tag_utils(self) -> TagUtils:
        return self.get('tag_utils')

    @property
    def smart_tag_extractor(self) -> SmartTagExtractor:
        return self.get('smart_tag_extractor')

    @property
    def strategy_selector(self) -> AnalysisStrategySelector:
        return self.get('strategy_selector')

    @property
    def llm_strategy(self) -> LLMAnalysisStrategy:
        return self.get('llm_strategy')

    @property
    def search_service(self) -> SearchService:
        return self.get('search_service')

    @property
    def analytics_service(self) -> AnalyticsService:
        return self.get('analytics_service')

    @property
    def analyze_entry_uc(self) -> AnalyzeEntryUseCase:
        return self.get('analyze_entry_uc')


# Глобальный контейнер (singleton)
_container: Optional[Container] = None


def get_container() -> Container:
    """Получить глобальный DI контейнер."""
    global _container
    if _container is None:
        _container = Container()
    return _container


def reset_container():
    """
    Сбросить глобальный контейнер.

    Полезно для тестов.
    """
    global _container
    _container = None
