"""
Analytics Service

Статистика по записям: тренд, распределение настроений,
частота записей, отчёт с выводами, быстрые итоги недели/месяца.
"""

from collections import Counter
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from moodiary.domain.entities import MoodFragment
from moodiary.domain.value_objects import MoodType, TimeFilter

from .search import window_start

# Час по умолчанию, если записей нет
DEFAULT_ACTIVE_HOUR = 12
# Изменение меньше 1% считается стабильным
STABLE_TREND_THRESHOLD = 1.0


@dataclass(frozen=True)
class MoodShare:
    """Доля одного настроения."""
    mood: MoodType
    count: int
    percentage: float  # 0 - 100


@dataclass(frozen=True)
class MoodInsightsReport:
    """
    Отчёт по настроению за период.
    """
    total_entries: int
    average_score: float
    mood_distribution: Dict[MoodType, int]
    trend_percentage: float
    most_active_hour: int
    streak_days: int
    period: int

    @classmethod
    def empty(cls, period: int = 30) -> "MoodInsightsReport":
        return cls(
            total_entries=0,
            average_score=0.0,
            mood_distribution={},
            trend_percentage=0.0,
            most_active_hour=DEFAULT_ACTIVE_HOUR,
            streak_days=0,
            period=period,
        )

    @property
    def dominant_mood_type(self) -> Optional[MoodType]:
        if not self.mood_distribution:
            return None
        return max(self.mood_distribution.items(), key=lambda item: item[1])[0]

    @property
    def trend_description(self) -> str:
        if abs(self.trend_percentage) < STABLE_TREND_THRESHOLD:
            return "保持稳定"
        if self.trend_percentage > 0:
            return f"情绪向好 +{self.trend_percentage:.1f}%"
        return f"需要关注 {self.trend_percentage:.1f}%"

    @property
    def active_time_description(self) -> str:
        if self.most_active_hour < 6:
            return "深夜时光"
        if self.most_active_hour < 12:
            return "上午时光"
        if self.most_active_hour < 18:
            return "下午时光"
        return "晚间时光"


@dataclass(frozen=True)
class QuickStats:
    """Итоги текущей недели и месяца."""
    week_count: int
    week_average: float
    month_count: int
    month_average: float


def _average(fragments: Sequence[MoodFragment]) -> float:
    if not fragments:
        return 0.0
    return sum(f.emotion_score for f in fragments) / len(fragments)


def _day_axis(days: int, now: datetime) -> List[date]:
    today = now.date()
    return [today - timedelta(days=offset) for offset in range(days - 1, -1, -1)]


def _midnight(day: date) -> datetime:
    return datetime(day.year, day.month, day.day)


class AnalyticsService:
    """
    Статистика настроений.

    Период в N дней = N календарных дней, заканчивая сегодняшним.
    Все методы принимают now для воспроизводимых расчётов.
    """

    def _in_period(
        self,
        fragments: Iterable[MoodFragment],
        days: int,
        now: datetime,
        previous: bool = False,
    ) -> List[MoodFragment]:
        """Записи за период; previous=True - предыдущий период той же длины."""
        period_start = _midnight(now.date() - timedelta(days=days - 1))

        if previous:
            start = period_start - timedelta(days=days)
            return [f for f in fragments if start <= f.timestamp < period_start]

        return [f for f in fragments if period_start <= f.timestamp <= now]

    def mood_trend(
        self,
        fragments: Sequence[MoodFragment],
        days: int = 7,
        now: Optional[datetime] = None,
    ) -> List[Tuple[date, float]]:
        """
        Средняя оценка по дням: [(day, average), ...].

        День без записей → 0. Без записей за период → [].
        """
        now = now or datetime.now()
        entries = self._in_period(fragments, days, now)

        if not entries:
            return []

        daily: Dict[date, List[int]] = {}
        for f in entries:
            daily.setdefault(f.timestamp.date(), []).append(f.emotion_score)

        return [
            (day, sum(daily[day]) / len(daily[day]) if day in daily else 0.0)
            for day in _day_axis(days, now)
        ]

    def mood_distribution(
        self,
        fragments: Sequence[MoodFragment],
        days: int = 30,
        now: Optional[datetime] = None,
    ) -> List[MoodShare]:
        """Количество и доля записей по каждому настроению (по убыванию)."""
        now = now or datetime.now()
        entries = self._in_period(fragments, days, now)

        if not entries:
            return []

        counts = Counter(f.mood for f in entries)
        return [
            MoodShare(mood=mood, count=count, percentage=count / len(entries) * 100)
            for mood, count in counts.most_common()
        ]

    def record_frequency(
        self,
        fragments: Sequence[MoodFragment],
        days: int = 7,
        now: Optional[datetime] = None,
    ) -> List[Tuple[date, int]]:
        """Количество записей по дням (дни без записей → 0)."""
        now = now or datetime.now()
        counts = Counter(f.timestamp.date() for f in self._in_period(fragments, days, now))
        return [(day, counts.get(day, 0)) for day in _day_axis(days, now)]

    def get_mood_insights(
        self,
        fragments: Sequence[MoodFragment],
        days: int = 30,
        now: Optional[datetime] = None,
    ) -> MoodInsightsReport:
        """
        Отчёт за период.

        trend_percentage - изменение средней оценки относительно
        предыдущего периода той же длины (0, если данных нет).
        """
        now = now or datetime.now()
        entries = self._in_period(fragments, days, now)

        if not entries:
            return MoodInsightsReport.empty(period=days)

        average = _average(entries)

        previous = self._in_period(fragments, days, now, previous=True)
        previous_average = _average(previous)
        trend = 0.0
        if previous_average > 0:
            trend = (average - previous_average) / previous_average * 100

        hour_counts = Counter(f.timestamp.hour for f in entries)
        # При равенстве побеждает час, встреченный раньше
        most_active_hour = hour_counts.most_common(1)[0][0]

        return MoodInsightsReport(
            total_entries=len(entries),
            average_score=average,
            mood_distribution=dict(Counter(f.mood for f in entries)),
            trend_percentage=trend,
            most_active_hour=most_active_hour,
            streak_days=self.record_streak(entries, now),
            period=days,
        )

    def record_streak(self, fragments: Iterable[MoodFragment], now: Optional[datetime] = None) -> int:
        """
        Сколько дней подряд есть записи.

        Отсчёт с сегодняшнего дня, если сегодня есть запись, иначе со вчерашнего.
        """
        now = now or datetime.now()
        recorded = {f.timestamp.date() for f in fragments}

        if not recorded:
            return 0

        current = now.date()
        if current not in recorded:
            current -= timedelta(days=1)

        streak = 0
        while current in recorded:
            streak += 1
            current -= timedelta(days=1)
        return streak

    def get_quick_stats(
        self,
        fragments: Sequence[MoodFragment],
        now: Optional[datetime] = None,
    ) -> QuickStats:
        """Неделя с понедельника, месяц с 1-го числа, до now включительно."""
        now = now or datetime.now()

        def since(start: datetime) -> List[MoodFragment]:
            return [f for f in fragments if start <= f.timestamp <= now]

        week = since(window_start(TimeFilter.WEEK, now))
        month = since(window_start(TimeFilter.MONTH, now))

        return QuickStats(
            week_count=len(week),
            week_average=_average(week),
            month_count=len(month),
            month_average=_average(month),
        )
