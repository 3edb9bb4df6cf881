"""
Use Cases Layer

Сценарии приложения поверх стратегий анализа.
"""

from .analyze_entry import AnalyzeEntryUseCase, IMAGE_ONLY_SCORE

__all__ = [
    "AnalyzeEntryUseCase",
    "IMAGE_ONLY_SCORE",
]
