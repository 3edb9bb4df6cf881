"""
Local AI Strategy (зарезервировано)

Место под анализ локальной моделью на устройстве.
"""

from typing import List

from moodiary.domain.entities import AnalysisResult

from .base import AnalysisStrategy


class LocalAIStrategy(AnalysisStrategy):
    """Всегда недоступна, пока локальная модель не подключена."""

    strategy_name = "local_ai"
    description = "使用本地AI模型分析，兼顾准确性和隐私"
    requires_network = False
    estimated_duration_ms = 1000
    confidence_baseline = 0.8

    @property
    def required_configs(self) -> List[str]:
        return ["model_path", "hardware_acceleration"]

    async def analyze(self, content: str) -> AnalysisResult:
        raise NotImplementedError("Local AI analysis is not available yet")

    async def is_available(self) -> bool:
        return False

    async def validate_config(self) -> bool:
        return False
