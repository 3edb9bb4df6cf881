"""
Analysis Strategies

Стратегии анализа эмоций и их выбор.
"""

from .base import AnalysisStrategy
from .llm import LLMAnalysisStrategy
from .local_ai import LocalAIStrategy
from .rule_based import RuleBasedStrategy
from .selector import AnalysisStrategySelector

__all__ = [
    "AnalysisStrategy",
    "RuleBasedStrategy",
    "LLMAnalysisStrategy",
    "LocalAIStrategy",
    "AnalysisStrategySelector",
]
