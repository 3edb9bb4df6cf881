"""
Emotion Scorer

Доменный сервис для оценки эмоций по ключевым словам.
Детерминированный, без сети, всегда доступен.
"""

import math
from dataclasses import dataclass
from typing import Dict, Sequence

from moodiary.domain.value_objects import MoodType


# Константы оценки (Domain Rules)
MATCH_POINTS = 10.0
WEIGHT_POINTS = 5.0
LONG_KEYWORD_WEIGHT = 1.5  # ключевые слова длиннее 2 символов
SHORT_KEYWORD_WEIGHT = 1.0
STRONG_MARKER_BONUS = 5

BASE_SCORES = {
    MoodType.POSITIVE: 70,
    MoodType.NEGATIVE: 30,
    MoodType.NEUTRAL: 50,
}

EMOTION_KEYWORDS: Dict[MoodType, Sequence[str]] = {
    MoodType.POSITIVE: (
        "开心", "快乐", "高兴", "兴奋", "满意", "幸福", "愉快", "舒服", "棒", "好", "爱",
        "成功", "胜利", "完美", "美好", "温暖", "感动", "骄傲", "自豪", "满足", "放松",
        "哈哈", "嘻嘻", "😊", "😄", "😍", "🥰", "😘", "🤩", "😋", "😌",
    ),
    MoodType.NEGATIVE: (
        "难过", "悲伤", "失望", "沮丧", "痛苦", "伤心", "哭", "泪", "累", "烦", "恨",
        "愤怒", "生气", "愤慨", "讨厌", "焦虑", "紧张", "害怕", "恐惧", "担心", "压力",
        "糟糕", "坏", "差", "失败", "挫折", "孤独", "空虚", "无聊", "郁闷", "抑郁",
        "😢", "😭", "😔", "😞", "😟", "😧", "😨", "😰", "😱", "🙄", "😤", "😠", "😡",
    ),
    MoodType.NEUTRAL: (
        "平静", "平常", "一般", "还好", "普通", "正常", "平淡", "无感", "中性",
        "😐", "😑", "🙂",
    ),
}

# Маркеры сильной эмоции (+5 за каждый найденный)
STRONG_MARKERS = ("非常", "特别", "超级", "极其", "超", "巨", "！！", "...")


@dataclass(frozen=True)
class EmotionScore:
    """
    Результат оценки текста по правилам.
    """
    mood_type: MoodType
    score: int  # 0 - 100
    confidence: float  # 0.0 - 1.0

    def __str__(self) -> str:
        return f"EmotionScore({self.mood_type.value}, score={self.score}, confidence={self.confidence:.1%})"


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _round_half_up(value: float) -> int:
    """Округление: 0.5 вверх (значения неотрицательные)."""
    return int(math.floor(value + 0.5))


class EmotionScorer:
    """
    Оценка эмоций по словарю ключевых слов.

    Алгоритм:
    1. Для каждого настроения: совпадения * 10 + сумма весов * 5
    2. Доминирует настроение с максимальным баллом (при равенстве - neutral)
    3. Уверенность = максимум / сумма (0.5 если совпадений нет)
    4. Интенсивность 0-100: база по настроению + поправки на баллы,
       длину текста и маркеры сильной эмоции
    """

    def __init__(self, keywords: Dict[MoodType, Sequence[str]] = None):
        """
        Args:
            keywords: Словарь ключевых слов (по умолчанию EMOTION_KEYWORDS)
        """
        self.keywords = keywords or EMOTION_KEYWORDS

    def score(self, text: str) -> EmotionScore:
        """
        Оценивает текст.

        Args:
            text: Текст записи (может быть пустым)

        Returns:
            EmotionScore
        """
        clean_text = (text or "").lower().strip()

        if not clean_text:
            return EmotionScore(mood_type=MoodType.NEUTRAL, score=50, confidence=0.5)

        scores = {mood: self._mood_points(clean_text, mood) for mood in MoodType}

        dominant = MoodType.NEUTRAL
        max_points = scores[MoodType.NEUTRAL]
        for mood, points in scores.items():
            if points > max_points:
                max_points = points
                dominant = mood

        total = sum(scores.values())
        confidence = _clamp(max_points / total, 0.0, 1.0) if total > 0 else 0.5

        return EmotionScore(
            mood_type=dominant,
            score=self._intensity(clean_text, dominant, max_points),
            confidence=confidence,
        )

    def _mood_points(self, text: str, mood: MoodType) -> float:
        matches = 0
        weight_sum = 0.0

        for keyword in self.keywords.get(mood, ()):
            if keyword in text:
                matches += 1
                weight_sum += LONG_KEYWORD_WEIGHT if len(keyword) > 2 else SHORT_KEYWORD_WEIGHT

        if not matches:
            return 0.0
        return matches * MATCH_POINTS + weight_sum * WEIGHT_POINTS

    def _intensity(self, text: str, mood: MoodType, raw_points: float) -> int:
        base = BASE_SCORES[mood]
        intensity_adjustment = _round_half_up(_clamp(raw_points / 10.0, -20.0, 20.0))
        length_adjustment = _round_half_up(_clamp(len(text) / 50.0, -5.0, 10.0))
        strong_bonus = sum(STRONG_MARKER_BONUS for marker in STRONG_MARKERS if marker in text)

        return int(_clamp(base + intensity_adjustment + length_adjustment + strong_bonus, 0, 100))

    @staticmethod
    def get_advice(mood_type: MoodType, score: int) -> str:
        """Короткий совет пользователю по настроению и оценке."""
        if mood_type is MoodType.POSITIVE:
            if score >= 80:
                return "你现在的心情非常棒！继续保持这种积极的状态，分享你的快乐给身边的人吧～"
            if score >= 60:
                return "心情不错呢！可以做一些自己喜欢的事情来延续这份美好。"
            return "有一些正面情绪，试着放大这些积极的感受，给自己一个小奖励吧！"

        if mood_type is MoodType.NEGATIVE:
            if score <= 20:
                return "感觉你现在比较难受，建议找信任的朋友聊聊，或者做一些放松的活动。如果持续低落，考虑寻求专业帮助。"
            if score <= 40:
                return "情绪有些低落，试着做一些让自己开心的事情，比如听音乐、散步或看喜欢的电影。"
            return "有一些负面情绪很正常，深呼吸，给自己一些时间，明天会更好的。"

        return "心情比较平静，这也很好。可以尝试做一些有趣的事情，给生活增加一些色彩。"
