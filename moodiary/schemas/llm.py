"""
LLM Schemas

Pydantic models для ответов модели и справочника моделей провайдеров.
"""

from typing import List, Literal

from pydantic import ConfigDict, Field

from .base import BaseSchema, StrictSchema


MoodTypeLiteral = Literal["positive", "negative", "neutral"]

# Поля, которые обязаны присутствовать в каждом ответе
RESPONSE_FIELDS = ("moodType", "emotionScore", "extractedTags", "reasoning", "confidence")


class EmotionAnalysisSchema(StrictSchema):
    """
    Schema ответа модели для одной записи.

    Соответствует JSON:
    {"moodType": ..., "emotionScore": ..., "extractedTags": [...],
     "reasoning": ..., "confidence": ...}
    """

    mood_type: MoodTypeLiteral = Field(..., alias="moodType")
    emotion_score: int = Field(..., alias="emotionScore", ge=0, le=100)
    extracted_tags: List[str] = Field(..., alias="extractedTags")
    reasoning: str = Field(..., alias="reasoning")
    confidence: float = Field(..., alias="confidence", ge=0.0, le=1.0)

    def to_response_dict(self) -> dict:
        """Ровно пять полей ответа, в исходных (camelCase) именах."""
        data = self.model_dump(by_alias=True)
        return {name: data[name] for name in RESPONSE_FIELDS}


class BatchEmotionItemSchema(EmotionAnalysisSchema):
    """
    Schema одного элемента пакетного ответа.

    index - номер входной записи, начиная с 1.
    """

    index: int = Field(..., alias="index")

    def to_response_dict(self) -> dict:
        data = super().to_response_dict()
        data["index"] = self.index
        return data


class LLMModelInfo(BaseSchema):
    """
    Справочная информация о модели провайдера.

    Статические данные, без проверки на стороне провайдера.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Имя модели в API")
    display_name: str = Field("", description="Отображаемое имя")
    description: str = Field("", description="Описание модели")
    max_context_length: int = Field(4096, ge=1, description="Длина контекста (токены)")
    supports_chinese: bool = Field(True, description="Поддержка китайского языка")
    is_available: bool = Field(True, description="Доступна ли модель")
