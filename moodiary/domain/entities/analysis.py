"""
Analysis Result Entity

Доменная модель результата анализа эмоций.
Общий формат для всех стратегий (правила, LLM, локальная модель).
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, Optional, Tuple

from moodiary.domain.value_objects import MoodType


@dataclass(frozen=True)
class AnalysisResult:
    """
    Результат анализа одной записи.

    Создаётся ровно один раз на вызов analyze() и больше не меняется.
    Владелец - сценарий создания записи, который прикрепляет результат к записи.
    """

    mood_type: MoodType
    emotion_score: int  # 0 - 100
    analysis_method: str
    extracted_tags: Tuple[str, ...] = ()
    reasoning: Optional[str] = None
    confidence: Optional[float] = None  # 0.0 - 1.0
    timestamp: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        """Валидация после инициализации."""
        if not isinstance(self.mood_type, MoodType):
            raise ValueError(f"Invalid mood type: {self.mood_type!r}")

        if isinstance(self.emotion_score, bool) or not isinstance(self.emotion_score, int):
            raise ValueError(f"emotion_score must be an integer, got: {type(self.emotion_score).__name__}")
        if not 0 <= self.emotion_score <= 100:
            raise ValueError(f"emotion_score must be between 0 and 100, got: {self.emotion_score}")

        if self.confidence is not None and not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"confidence must be between 0.0 and 1.0, got: {self.confidence}")

        # Теги уникальны, порядок первого появления сохраняется
        object.__setattr__(self, "extracted_tags", tuple(dict.fromkeys(self.extracted_tags)))

    @property
    def mood_description(self) -> str:
        """Короткое описание настроения для карточки записи."""
        if self.emotion_score > 70:
            intensity = "很"
        elif self.emotion_score > 30:
            intensity = "较"
        else:
            intensity = "有些"

        if self.mood_type is MoodType.POSITIVE:
            return f"{intensity}积极"
        if self.mood_type is MoodType.NEGATIVE:
            return f"{intensity}消极"
        return "比较平静"

    @property
    def is_valid(self) -> bool:
        return 0 <= self.emotion_score <= 100 and bool(self.analysis_method)

    @property
    def has_tags(self) -> bool:
        return bool(self.extracted_tags)

    def to_dict(self) -> dict:
        """Преобразует в словарь для сохранения рядом с записью."""
        return {
            "moodType": self.mood_type.value,
            "emotionScore": self.emotion_score,
            "extractedTags": list(self.extracted_tags),
            "reasoning": self.reasoning,
            "analysisMethod": self.analysis_method,
            "timestamp": self.timestamp.isoformat(),
            "confidence": self.confidence,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AnalysisResult":
        """Создаёт из сохранённого словаря."""
        confidence = data.get("confidence")
        return cls(
            mood_type=MoodType(data["moodType"]),
            emotion_score=int(data["emotionScore"]),
            extracted_tags=tuple(data.get("extractedTags") or ()),
            reasoning=data.get("reasoning"),
            analysis_method=data.get("analysisMethod", ""),
            timestamp=datetime.fromisoformat(data["timestamp"]),
            confidence=float(confidence) if confidence is not None else None,
        )

    @classmethod
    def from_rule_analysis(
        cls,
        mood_type: MoodType,
        emotion_score: int,
        confidence: float,
        extracted_tags: Iterable[str] = (),
        reasoning: Optional[str] = None,
    ) -> "AnalysisResult":
        """Результат анализа по правилам."""
        return cls(
            mood_type=mood_type,
            emotion_score=emotion_score,
            extracted_tags=tuple(extracted_tags),
            reasoning=reasoning,
            analysis_method="rule",
            confidence=confidence,
        )

    def __str__(self) -> str:
        return f"AnalysisResult({self.mood_type.value}, score={self.emotion_score}, method={self.analysis_method})"
