"""
Tag Utils

Извлечение #тегов из текста записи, текст без тегов,
статистика тегов. Результаты кэшируются по точной строке.
"""

import re
import threading
from collections import Counter, OrderedDict
from typing import Dict, Generic, Iterable, List, Optional, Tuple, TypeVar

from moodiary.core.logging import get_logger
from moodiary.domain.entities import MoodFragment

logger = get_logger(__name__)

# Иероглифы + буквы/цифры/подчёркивание (Unicode)
TAG_PATTERN = re.compile(r"#([\u4e00-\u9fff\w]+)")
_WHITESPACE_RE = re.compile(r"\s+")

V = TypeVar("V")


class MemoCache(Generic[V]):
    """
    Кэш строка → значение.

    maxsize=None - без ограничения (до clear());
    иначе LRU-вытеснение самой давно использованной записи.
    """

    def __init__(self, maxsize: Optional[int] = None):
        if maxsize is not None and maxsize < 1:
            raise ValueError("maxsize must be positive or None")

        self.maxsize = maxsize
        self._data: "OrderedDict[str, V]" = OrderedDict()
        self._lock = threading.RLock()
        self.hits = 0
        self.misses = 0
        self.evictions = 0

    def get(self, key: str) -> Optional[V]:
        with self._lock:
            if key not in self._data:
                self.misses += 1
                return None
            self._data.move_to_end(key)
            self.hits += 1
            return self._data[key]

    def set(self, key: str, value: V) -> None:
        with self._lock:
            self._data[key] = value
            self._data.move_to_end(key)
            if self.maxsize is not None:
                while len(self._data) > self.maxsize:
                    self._data.popitem(last=False)
                    self.evictions += 1

    def clear(self) -> None:
        with self._lock:
            self._data.clear()

    def __contains__(self, key: str) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)


class TagUtils:
    """
    Операции с #тегами.

    Владеет двумя кэшами (теги и текст без тегов). Кэш нужно
    очищать (clear_cache) при изменении записей.

    Usage:
        tags = TagUtils()
        tags.extract_tags("今天很开心 #工作 #happy")  # ["工作", "happy"]
    """

    def __init__(self, maxsize: Optional[int] = None):
        """
        Args:
            maxsize: Размер каждого кэша (None = без ограничения)
        """
        self._extract_cache: MemoCache[Tuple[str, ...]] = MemoCache(maxsize)
        self._display_cache: MemoCache[str] = MemoCache(maxsize)

    def extract_tags(self, content: str, use_cache: bool = True) -> List[str]:
        """
        Теги без '#', уникальные, в порядке первого появления.

        Возвращается новый список: изменение результата не портит кэш.
        """
        if not content:
            return []

        if use_cache:
            cached = self._extract_cache.get(content)
            if cached is not None:
                return list(cached)

        tags = tuple(dict.fromkeys(TAG_PATTERN.findall(content)))

        if use_cache:
            self._extract_cache.set(content, tags)

        return list(tags)

    def get_display_content(self, content: str, use_cache: bool = True) -> str:
        """Текст без тегов, пробелы схлопнуты."""
        if not content:
            return ""

        if use_cache:
            cached = self._display_cache.get(content)
            if cached is not None:
                return cached

        display = TAG_PATTERN.sub("", content).strip()
        display = _WHITESPACE_RE.sub(" ", display)

        if use_cache:
            self._display_cache.set(content, display)

        return display

    def contains_tag(self, content: str, tag_name: str) -> bool:
        return tag_name in self.extract_tags(content)

    def calculate_tag_stats(self, fragments: Iterable[MoodFragment]) -> Dict[str, int]:
        """Тег → количество записей, где он встречается."""
        stats: Counter = Counter()
        for fragment in fragments:
            if fragment.text_content:
                stats.update(self.extract_tags(fragment.text_content))
        return dict(stats)

    def get_popular_tags(self, fragments: Iterable[MoodFragment], limit: int = 10) -> List[Tuple[str, int]]:
        """Самые частые теги: [(tag, count), ...] по убыванию."""
        stats = Counter(self.calculate_tag_stats(fragments))
        return stats.most_common(limit)

    def preload_cache(self, contents: Iterable[str]) -> None:
        """Прогрев кэша (например, после загрузки записей)."""
        count = 0
        for content in contents:
            if content:
                self.extract_tags(content)
                self.get_display_content(content)
                count += 1
        logger.debug("Tag cache preloaded: %d contents", count)

    def get_cache_stats(self) -> Dict[str, int]:
        return {
            "extract_cache": len(self._extract_cache),
            "display_cache": len(self._display_cache),
            "hits": self._extract_cache.hits + self._display_cache.hits,
            "misses": self._extract_cache.misses + self._display_cache.misses,
            "evictions": self._extract_cache.evictions + self._display_cache.evictions,
        }

    def clear_cache(self) -> None:
        self._extract_cache.clear()
        self._display_cache.clear()
