"""
Search Schemas

Pydantic models для условий поиска по записям.
"""

from typing import Optional

from pydantic import Field

from moodiary.domain.value_objects import MediaFilter, MoodType, ScoreRange, TimeFilter

from .base import BaseSchema


class SearchCriteria(BaseSchema):
    """
    Условия фильтрации записей.

    Все условия необязательны: отсутствие условия = нет ограничения.
    Условия объединяются через AND.
    """

    text_query: Optional[str] = Field(
        None,
        description="Подстрока в тексте или тегах (без учёта регистра)"
    )
    mood_filter: Optional[MoodType] = Field(
        None,
        description="Тип настроения"
    )
    time_filter: TimeFilter = Field(
        TimeFilter.ALL,
        description="Временное окно (today / week / month / all)"
    )
    score_range: Optional[ScoreRange] = Field(
        None,
        description="Диапазон оценки эмоции (включительно)"
    )
    media_filter: MediaFilter = Field(
        MediaFilter.ALL,
        description="Тип медиа"
    )

    @property
    def has_active_filters(self) -> bool:
        """Есть ли хотя бы одно ограничивающее условие."""
        return (
            bool(self.text_query)
            or self.mood_filter is not None
            or self.time_filter is not TimeFilter.ALL
            or (self.score_range is not None and not self.score_range.is_full)
            or self.media_filter is not MediaFilter.ALL
        )
