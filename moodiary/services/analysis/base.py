"""
Analysis Strategy

Общий интерфейс всех способов анализа эмоций.
"""

from abc import ABC, abstractmethod
from typing import List

from moodiary.domain.entities import AnalysisResult


class AnalysisStrategy(ABC):
    """
    Стратегия анализа: текст → AnalysisResult.

    Стратегия сама сообщает о своей доступности (is_available)
    вместо того, чтобы падать при вызове. Метаданные (duration,
    confidence baseline) носят справочный характер.
    """

    strategy_name: str = ""
    description: str = ""
    requires_network: bool = False
    estimated_duration_ms: int = 0
    confidence_baseline: float = 0.0

    @property
    def required_configs(self) -> List[str]:
        """Ключи настроек, без которых стратегия не работает."""
        return []

    @abstractmethod
    async def analyze(self, content: str) -> AnalysisResult:
        """
        Анализ одной записи.

        Raises:
            InvalidInputError: Пустой текст (для стратегий, которым нужен текст)
        """

    @abstractmethod
    async def is_available(self) -> bool:
        """Можно ли сейчас пользоваться стратегией. Никогда не бросает."""

    @abstractmethod
    async def validate_config(self) -> bool:
        """Настроено ли всё необходимое. Никогда не бросает."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} name={self.strategy_name!r}>"
