"""
Search Service

Фильтрация записей по набору независимых условий (AND).
Чистая функция: порядок входа сохраняется, состояние не хранится.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable, List, Optional, Sequence

from moodiary.domain.entities import MoodFragment
from moodiary.domain.value_objects import TimeFilter
from moodiary.schemas.search import SearchCriteria


@dataclass(frozen=True)
class SearchStats:
    """Статистика результата фильтрации."""
    total_count: int
    filtered_count: int
    has_results: bool

    @property
    def filter_ratio(self) -> float:
        return self.filtered_count / self.total_count if self.total_count > 0 else 0.0


def window_start(time_filter: TimeFilter, now: datetime) -> Optional[datetime]:
    """
    Начало временного окна.

    today → полночь, week → понедельник 00:00, month → 1-е число 00:00,
    all → None (без ограничения).
    """
    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)

    if time_filter is TimeFilter.TODAY:
        return midnight
    if time_filter is TimeFilter.WEEK:
        return midnight - timedelta(days=midnight.weekday())
    if time_filter is TimeFilter.MONTH:
        return midnight.replace(day=1)
    return None


class SearchService:
    """
    Поиск по записям.

    Usage:
        service = SearchService()
        found = service.filter_fragments(fragments, SearchCriteria(text_query="工作"))
    """

    def filter_fragments(
        self,
        fragments: Iterable[MoodFragment],
        criteria: SearchCriteria,
        now: Optional[datetime] = None,
    ) -> List[MoodFragment]:
        """
        Применяет условия поиска.

        Args:
            fragments: Записи
            criteria: Условия (отсутствующее = без ограничения)
            now: Текущее время для временных окон (по умолчанию datetime.now())

        Returns:
            Подходящие записи в исходном порядке
        """
        query = (criteria.text_query or "").strip().lower()
        start = window_start(criteria.time_filter, now or datetime.now())

        def matches(fragment: MoodFragment) -> bool:
            if query:
                content_match = query in (fragment.text_content or "").lower()
                tag_match = any(query in tag.lower() for tag in fragment.topic_tags)
                if not (content_match or tag_match):
                    return False

            if criteria.mood_filter is not None and fragment.mood is not criteria.mood_filter:
                return False

            if start is not None and fragment.timestamp < start:
                return False

            if criteria.score_range is not None and not criteria.score_range.contains(fragment.emotion_score):
                return False

            return criteria.media_filter.matches(fragment.type)

        return [fragment for fragment in fragments if matches(fragment)]

    def get_search_stats(
        self,
        original: Sequence[MoodFragment],
        filtered: Sequence[MoodFragment],
    ) -> SearchStats:
        return SearchStats(
            total_count=len(original),
            filtered_count=len(filtered),
            has_results=bool(filtered),
        )
