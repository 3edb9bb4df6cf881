"""
Smart Tag Extractor

Подсказки тегов по тексту записи: кандидаты-слова (китайские 2-6
иероглифов и английские слова), оценка по частоте, прошлым тегам
пользователя, словам эмоций и контекста. Плюс вставка '#' перед
выбранными словами.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Set

from moodiary.core.logging import get_logger
from moodiary.domain.entities import MoodFragment

from .tags import TagUtils

logger = get_logger(__name__)

MAX_SUGGESTIONS = 10

CHINESE_WORD_PATTERN = re.compile(r"[\u4e00-\u9fff]{2,6}")
ENGLISH_WORD_PATTERN = re.compile(r"[A-Za-z]{2,15}")

# Весовые коэффициенты оценки
FREQUENCY_WEIGHT = 0.3
HISTORY_BONUS = 2.0
EMOTION_BONUS = 1.5
CONTEXT_BONUS = 1.0
KEYWORD_BONUS = 0.5
LONG_WORD_PENALTY = 0.3

REASON_HISTORY = "常用标签"
REASON_EMOTION = "情绪相关"
REASON_CONTEXT = "场景活动"
REASON_KEYWORD = "关键词"

STOP_WORDS = frozenset({
    "的", "了", "在", "是", "我", "有", "和", "就", "不", "人", "都", "一",
    "上", "也", "很", "到", "说", "要", "去", "你", "会", "着", "没", "看",
    "好", "自己", "这", "那", "他", "她", "它", "们", "什么", "怎么", "为什么",
    "因为", "所以", "但是", "然后", "还是", "或者", "如果", "虽然", "可能",
    "应该", "必须", "今天", "昨天", "明天", "现在", "以前", "以后", "时候",
    "地方", "东西", "事情", "问题", "方法", "时间", "开始", "结束", "感觉",
})

ENGLISH_STOP_WORDS = frozenset({"the", "and", "you", "are", "for", "not", "with", "this", "that"})

EMOTION_WORDS = frozenset({
    "开心", "高兴", "快乐", "兴奋", "激动", "满意", "幸福", "愉悦", "喜悦",
    "难过", "伤心", "沮丧", "失落", "郁闷", "烦躁", "焦虑", "紧张", "担心",
    "愤怒", "生气", "恼火", "烦恼", "无奈", "疲惫", "累", "困", "放松",
    "平静", "淡定", "冷静", "安静", "舒服", "温暖", "感动", "惊喜", "意外",
    "压力", "困难", "挑战", "机会", "希望", "梦想", "目标", "成功", "失败",
})

CONTEXT_WORDS = frozenset({
    "工作", "上班", "下班", "公司", "办公室", "会议", "项目", "任务", "客户",
    "学习", "上课", "考试", "作业", "复习", "书", "图书馆", "学校", "老师",
    "家", "房间", "客厅", "厨房", "卧室", "家人", "父母", "孩子", "宠物",
    "朋友", "同事", "同学", "聚会", "聊天", "电话", "微信", "约会", "见面",
    "运动", "跑步", "健身", "游泳", "篮球", "足球", "瑜伽", "散步", "爬山",
    "吃饭", "做饭", "外卖", "餐厅", "咖啡", "奶茶", "电影", "音乐", "游戏",
    "旅行", "出差", "度假", "景点", "酒店", "飞机", "火车", "地铁", "公交",
    "购物", "买", "卖", "钱", "价格", "便宜", "贵", "优惠", "促销", "商场",
    "医院", "医生", "看病", "吃药", "健康", "身体", "头疼", "感冒", "发烧",
    "天气", "下雨", "晴天", "阴天", "热", "冷", "温度", "空气", "风", "雪",
})


@dataclass
class KeywordCandidate:
    """Слово-кандидат и его позиции в тексте."""
    word: str
    positions: List[int] = field(default_factory=list)
    frequency: int = 0


@dataclass(frozen=True)
class TagSuggestionItem:
    """Одна подсказка тега."""
    keyword: str
    score: float
    positions: List[int]
    reason: str

    def __str__(self) -> str:
        return f"{self.keyword} (分数: {self.score:.1f}, 原因: {self.reason})"


@dataclass(frozen=True)
class SmartTagSuggestion:
    """Подсказки для одного текста (лучшие первыми)."""
    suggestions: List[TagSuggestionItem]
    original_text: str

    @property
    def has_suggestions(self) -> bool:
        return bool(self.suggestions)

    @property
    def suggestion_count(self) -> int:
        return len(self.suggestions)


class SmartTagExtractor:
    """
    Подсказывает, какие слова записи стоит сделать тегами.

    Usage:
        extractor = SmartTagExtractor(TagUtils())
        result = extractor.extract_smart_tags("加班好累，想去跑步", fragments)
        text = extractor.convert_keywords_to_tags(result.original_text, ["跑步"])
    """

    def __init__(self, tag_utils: TagUtils):
        """
        Args:
            tag_utils: Извлечение уже проставленных тегов
        """
        self.tag_utils = tag_utils

    def extract_smart_tags(
        self,
        text: str,
        fragments: Iterable[MoodFragment] = (),
    ) -> SmartTagSuggestion:
        """
        Подсказки тегов для текста.

        Args:
            text: Текст записи
            fragments: Прошлые записи (их теги дают бонус "常用标签")

        Returns:
            SmartTagSuggestion, не больше MAX_SUGGESTIONS подсказок
        """
        if not text or not text.strip():
            return SmartTagSuggestion(suggestions=[], original_text=text or "")

        historical_tags = self._historical_tags(fragments)
        existing_tags = set(self.tag_utils.extract_tags(text))
        candidates = self._extract_candidates(text)

        suggestions = self._score_candidates(candidates, existing_tags, historical_tags)
        suggestions.sort(key=lambda item: item.score, reverse=True)
        top = suggestions[:MAX_SUGGESTIONS]

        logger.debug("Smart tag extraction: %d suggestions for %r", len(top), text[:50])

        return SmartTagSuggestion(suggestions=top, original_text=text)

    @staticmethod
    def _historical_tags(fragments: Iterable[MoodFragment]) -> Set[str]:
        tags: Set[str] = set()
        for fragment in fragments:
            if fragment.has_topic_tags:
                tags.update(fragment.topic_tags)
        return tags

    @staticmethod
    def _extract_candidates(text: str) -> List[KeywordCandidate]:
        candidates: Dict[str, KeywordCandidate] = {}

        def add(word: str, position: int) -> None:
            candidate = candidates.setdefault(word, KeywordCandidate(word=word))
            candidate.positions.append(position)
            candidate.frequency += 1

        for match in CHINESE_WORD_PATTERN.finditer(text):
            if match.group(0) not in STOP_WORDS:
                add(match.group(0), match.start())

        # Английские слова: бренды, места и т.п.
        for match in ENGLISH_WORD_PATTERN.finditer(text):
            word = match.group(0).lower()
            if word not in ENGLISH_STOP_WORDS:
                add(word, match.start())

        return list(candidates.values())

    @staticmethod
    def _score_candidates(
        candidates: List[KeywordCandidate],
        existing_tags: Set[str],
        historical_tags: Set[str],
    ) -> List[TagSuggestionItem]:
        suggestions = []

        for candidate in candidates:
            word = candidate.word
            if word in existing_tags:
                continue

            score = candidate.frequency * FREQUENCY_WEIGHT
            reason = REASON_KEYWORD

            if word in historical_tags:
                score += HISTORY_BONUS
                reason = REASON_HISTORY
            elif word in EMOTION_WORDS:
                score += EMOTION_BONUS
                reason = REASON_EMOTION
            elif word in CONTEXT_WORDS:
                score += CONTEXT_BONUS
                reason = REASON_CONTEXT
            elif 2 <= len(word) <= 4:
                score += KEYWORD_BONUS

            if len(word) > 6:
                score -= LONG_WORD_PENALTY

            if score > 0:
                suggestions.append(TagSuggestionItem(
                    keyword=word,
                    score=score,
                    positions=list(candidate.positions),
                    reason=reason,
                ))

        return suggestions

    @staticmethod
    def convert_keywords_to_tags(original_text: str, keywords: Iterable[str]) -> str:
        """
        Ставит '#' перед каждым вхождением выбранных слов.

        Вхождения, перед которыми уже стоит '#', не трогаются.
        """
        replacements = []
        for keyword in dict.fromkeys(keywords):
            if not keyword:
                continue
            start = original_text.find(keyword)
            while start != -1:
                if start == 0 or original_text[start - 1] != "#":
                    replacements.append((start, start + len(keyword), keyword))
                start = original_text.find(keyword, start + 1)

        # С конца, чтобы позиции не сдвигались
        text = original_text
        for start, end, keyword in sorted(replacements, key=lambda r: r[0], reverse=True):
            text = text[:start] + "#" + keyword + text[end:]
        return text
