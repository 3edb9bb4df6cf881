"""
Rule-Based Strategy

Анализ по ключевым словам. Офлайн, детерминированный,
стратегия по умолчанию и запасной вариант.
"""

from typing import Optional

from moodiary.domain.entities import AnalysisResult
from moodiary.domain.services import EmotionScorer

from .base import AnalysisStrategy


class RuleBasedStrategy(AnalysisStrategy):
    """
    Обёртка над EmotionScorer.

    Пустой текст не ошибка: результат neutral / 50.
    """

    strategy_name = "rule_based"
    description = "使用关键词和规则进行快速分析，离线可用"
    requires_network = False
    estimated_duration_ms = 50
    confidence_baseline = 0.7

    def __init__(self, scorer: Optional[EmotionScorer] = None):
        self.scorer = scorer or EmotionScorer()

    async def analyze(self, content: str) -> AnalysisResult:
        score = self.scorer.score(content)

        return AnalysisResult.from_rule_analysis(
            mood_type=score.mood_type,
            emotion_score=score.score,
            confidence=self.confidence_baseline,
        )

    async def is_available(self) -> bool:
        return True

    async def validate_config(self) -> bool:
        return True
