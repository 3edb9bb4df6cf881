"""
Schemas Layer (DTO)

Pydantic models для валидации и сериализации данных.
Граница между недоверенным ответом модели и типизированным доменом.
"""

from .base import BaseSchema, StrictSchema
from .llm import (
    RESPONSE_FIELDS,
    EmotionAnalysisSchema,
    BatchEmotionItemSchema,
    LLMModelInfo,
)
from .search import SearchCriteria

__all__ = [
    # Base
    "BaseSchema",
    "StrictSchema",
    # LLM
    "RESPONSE_FIELDS",
    "EmotionAnalysisSchema",
    "BatchEmotionItemSchema",
    "LLMModelInfo",
    # Search
    "SearchCriteria",
]
