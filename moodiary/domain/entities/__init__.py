"""
Domain Entities

Основные бизнес-сущности системы.
"""

from .analysis import AnalysisResult
from .fragment import MoodFragment, MediaAttachment

__all__ = [
    "AnalysisResult",
    "MoodFragment",
    "MediaAttachment",
]
