"""
Domain Services

Бизнес-логика, которая не принадлежит конкретной entity.
"""

from .emotion_scorer import EmotionScorer, EmotionScore

__all__ = [
    "EmotionScorer",
    "EmotionScore",
]
