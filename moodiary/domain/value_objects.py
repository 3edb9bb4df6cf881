"""
Value Objects

Неизменяемые объекты и перечисления предметной области.
"""

from dataclasses import dataclass
from enum import Enum


class MoodType(str, Enum):
    """
    Тип настроения записи.

    Ровно три значения, других классификаций не бывает.
    """

    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"

    @property
    def display_name(self) -> str:
        return {
            MoodType.POSITIVE: "正面情绪",
            MoodType.NEGATIVE: "负面情绪",
            MoodType.NEUTRAL: "中性情绪",
        }[self]

    @property
    def emoji(self) -> str:
        return {
            MoodType.POSITIVE: "😊",
            MoodType.NEGATIVE: "😔",
            MoodType.NEUTRAL: "😐",
        }[self]

    @property
    def polarity(self) -> float:
        """Полярность от -1 до 1 (для статистики)."""
        return {
            MoodType.POSITIVE: 1.0,
            MoodType.NEGATIVE: -1.0,
            MoodType.NEUTRAL: 0.0,
        }[self]


class AnalysisMethod(str, Enum):
    """
    Способ анализа эмоций.

    Значение (value) сохраняется в настройках и в AnalysisResult.analysis_method.
    """

    RULE = "rule"
    LLM = "llm"
    LOCAL = "local"  # зарезервировано

    @classmethod
    def from_value(cls, value: str) -> "AnalysisMethod":
        """
        Создаёт AnalysisMethod из сохранённого значения.
        Неизвестные значения → RULE.
        """
        try:
            return cls(value)
        except ValueError:
            return cls.RULE

    @property
    def display_name(self) -> str:
        return {
            AnalysisMethod.RULE: "规则分析",
            AnalysisMethod.LLM: "AI分析",
            AnalysisMethod.LOCAL: "本地AI",
        }[self]

    @property
    def description(self) -> str:
        return {
            AnalysisMethod.RULE: "使用关键词和规则进行快速分析，离线可用",
            AnalysisMethod.LLM: "使用AI大模型进行智能分析，需要网络连接",
            AnalysisMethod.LOCAL: "使用本地AI模型分析，兼顾准确性和隐私",
        }[self]

    @property
    def requires_network(self) -> bool:
        return self is AnalysisMethod.LLM

    @property
    def is_available(self) -> bool:
        """Статическая доступность (локальная модель ещё не реализована)."""
        return self is not AnalysisMethod.LOCAL


class FragmentType(str, Enum):
    """Тип записи по составу медиа."""

    TEXT = "text"
    IMAGE = "image"
    MIXED = "mixed"


class MediaType(str, Enum):
    IMAGE = "image"


class TimeFilter(str, Enum):
    """Временное окно для поиска."""

    ALL = "all"
    TODAY = "today"
    WEEK = "week"
    MONTH = "month"


class MediaFilter(str, Enum):
    """Фильтр по типу медиа."""

    ALL = "all"
    TEXT_ONLY = "text_only"
    WITH_IMAGE = "with_image"
    IMAGE_ONLY = "image_only"
    MIXED = "mixed"

    def matches(self, fragment_type: FragmentType) -> bool:
        """Подходит ли тип записи под фильтр."""
        if self is MediaFilter.ALL:
            return True
        if self is MediaFilter.TEXT_ONLY:
            return fragment_type is FragmentType.TEXT
        if self is MediaFilter.WITH_IMAGE:
            return fragment_type in (FragmentType.IMAGE, FragmentType.MIXED)
        if self is MediaFilter.IMAGE_ONLY:
            return fragment_type is FragmentType.IMAGE
        return fragment_type is FragmentType.MIXED


@dataclass(frozen=True)
class ScoreRange:
    """
    Диапазон оценки эмоции (включительно с обеих сторон).

    Immutable: после создания изменить нельзя.
    """

    start: float = 0.0
    end: float = 100.0

    def __post_init__(self):
        if self.start > self.end:
            raise ValueError(f"ScoreRange start {self.start} is greater than end {self.end}")

    def contains(self, score: float) -> bool:
        return self.start <= score <= self.end

    @property
    def is_full(self) -> bool:
        """Покрывает весь диапазон 0-100 (фильтр ничего не отсекает)."""
        return self.start <= 0 and self.end >= 100
