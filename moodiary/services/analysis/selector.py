"""
Strategy Selector

Выбор стратегии по настройкам и фактической доступности.
"""

from typing import Dict, List, Union

from moodiary.core.config import SettingsProvider
from moodiary.core.logging import get_logger
from moodiary.domain.entities import AnalysisResult
from moodiary.domain.exceptions import AnalysisError
from moodiary.domain.value_objects import AnalysisMethod

from .base import AnalysisStrategy

logger = get_logger(__name__)


class AnalysisStrategySelector:
    """
    Выбирает стратегию анализа.

    Если запрошенная стратегия недоступна, используется
    стратегия по правилам (всегда доступна).
    """

    def __init__(
        self,
        strategies: Dict[AnalysisMethod, AnalysisStrategy],
        settings: SettingsProvider,
    ):
        """
        Args:
            strategies: Стратегии по способу анализа (RULE обязателен)
            settings: Источник текущих настроек
        """
        if AnalysisMethod.RULE not in strategies:
            raise ValueError("Rule-based strategy is required as fallback")

        self.strategies = dict(strategies)
        self.settings = settings

    @property
    def fallback(self) -> AnalysisStrategy:
        return self.strategies[AnalysisMethod.RULE]

    def _resolve_method(self, method: Union[AnalysisMethod, str, None]) -> AnalysisMethod:
        if isinstance(method, AnalysisMethod):
            return method
        if method is None:
            method = self.settings.current_settings.analysis_method
        return AnalysisMethod.from_value(method)

    async def select(self, method: Union[AnalysisMethod, str, None] = None) -> AnalysisStrategy:
        """
        Стратегия для указанного (или настроенного) способа.

        Returns:
            Запрошенная стратегия, если доступна, иначе по правилам
        """
        resolved = self._resolve_method(method)
        strategy = self.strategies.get(resolved)

        if strategy is None:
            logger.info("No strategy for method '%s', using rule-based", resolved.value)
            return self.fallback

        if strategy is self.fallback or await strategy.is_available():
            return strategy

        logger.info("Strategy '%s' unavailable, using rule-based", strategy.strategy_name)
        return self.fallback

    async def available_methods(self) -> List[AnalysisMethod]:
        """Способы анализа, доступные прямо сейчас."""
        methods = []
        for method, strategy in self.strategies.items():
            if await strategy.is_available():
                methods.append(method)
        return methods

    async def analyze(
        self,
        content: str,
        method: Union[AnalysisMethod, str, None] = None,
    ) -> AnalysisResult:
        """
        Выбор стратегии + анализ.

        При AnalysisError нестандартной стратегии результат
        даёт стратегия по правилам. InvalidInputError пробрасывается.
        """
        strategy = await self.select(method)

        try:
            return await strategy.analyze(content)
        except AnalysisError as e:
            if strategy is self.fallback:
                raise
            logger.warning(
                "Strategy '%s' failed, degrading to rule-based: %s",
                strategy.strategy_name, e,
            )
            return await self.fallback.analyze(content)
