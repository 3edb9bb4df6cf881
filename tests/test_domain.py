"""
Unit Tests for Domain Layer

Тесты для domain entities, value objects, services и exceptions.
"""

import pytest
from datetime import datetime

from moodiary.domain import (
    AnalysisError,
    AnalysisMethod,
    AnalysisResult,
    DomainError,
    EmotionScorer,
    FormatError,
    FragmentType,
    MediaAttachment,
    MediaFilter,
    MoodFragment,
    MoodType,
    ProviderError,
    RateLimitError,
    ScoreRange,
)


# ============================================================================
# Tests for Value Objects
# ============================================================================

class TestMoodType:
    """Тесты для MoodType."""

    def test_exactly_three_values(self):
        """Ровно три типа настроения."""
        assert {m.value for m in MoodType} == {"positive", "negative", "neutral"}

    def test_polarity(self):
        """Полярность для статистики."""
        assert MoodType.POSITIVE.polarity == 1.0
        assert MoodType.NEGATIVE.polarity == -1.0
        assert MoodType.NEUTRAL.polarity == 0.0


class TestAnalysisMethod:
    """Тесты для AnalysisMethod."""

    def test_from_value(self):
        assert AnalysisMethod.from_value("llm") is AnalysisMethod.LLM
        assert AnalysisMethod.from_value("rule") is AnalysisMethod.RULE

    def test_unknown_value_defaults_to_rule(self):
        """Неизвестное значение → RULE."""
        assert AnalysisMethod.from_value("magic") is AnalysisMethod.RULE

    def test_network_and_availability(self):
        assert AnalysisMethod.LLM.requires_network
        assert not AnalysisMethod.RULE.requires_network
        assert not AnalysisMethod.LOCAL.is_available


class TestScoreRange:
    """Тесты для ScoreRange."""

    def test_inclusive_bounds(self):
        """Границы включительно."""
        score_range = ScoreRange(40, 60)

        assert score_range.contains(40)
        assert score_range.contains(60)
        assert not score_range.contains(39)
        assert not score_range.contains(61)

    def test_invalid_range(self):
        with pytest.raises(ValueError):
            ScoreRange(80, 20)

    def test_is_full(self):
        assert ScoreRange().is_full
        assert not ScoreRange(10, 100).is_full

    def test_immutable(self):
        score_range = ScoreRange(0, 50)
        with pytest.raises(Exception):
            score_range.start = 10


class TestMediaFilter:
    """Тесты для MediaFilter."""

    @pytest.mark.parametrize("media_filter,fragment_type,expected", [
        (MediaFilter.ALL, FragmentType.TEXT, True),
        (MediaFilter.TEXT_ONLY, FragmentType.TEXT, True),
        (MediaFilter.TEXT_ONLY, FragmentType.MIXED, False),
        (MediaFilter.WITH_IMAGE, FragmentType.IMAGE, True),
        (MediaFilter.WITH_IMAGE, FragmentType.MIXED, True),
        (MediaFilter.WITH_IMAGE, FragmentType.TEXT, False),
        (MediaFilter.IMAGE_ONLY, FragmentType.MIXED, False),
        (MediaFilter.MIXED, FragmentType.MIXED, True),
    ])
    def test_matches(self, media_filter, fragment_type, expected):
        assert media_filter.matches(fragment_type) is expected


# ============================================================================
# Tests for Entities
# ============================================================================

class TestAnalysisResult:
    """Тесты для AnalysisResult."""

    def test_create_valid(self):
        """Создание валидного результата."""
        result = AnalysisResult(
            mood_type=MoodType.POSITIVE,
            emotion_score=80,
            analysis_method="llm",
            extracted_tags=("开心",),
            reasoning="积极词汇",
            confidence=0.9,
        )

        assert result.mood_type is MoodType.POSITIVE
        assert result.emotion_score == 80
        assert result.is_valid
        assert result.has_tags

    @pytest.mark.parametrize("score", [-1, 101])
    def test_score_out_of_range(self, score):
        """Оценка вне 0-100 → ValueError."""
        with pytest.raises(ValueError) as exc_info:
            AnalysisResult(mood_type=MoodType.NEUTRAL, emotion_score=score, analysis_method="rule")

        assert "between 0 and 100" in str(exc_info.value)

    def test_confidence_out_of_range(self):
        with pytest.raises(ValueError):
            AnalysisResult(
                mood_type=MoodType.NEUTRAL,
                emotion_score=50,
                analysis_method="rule",
                confidence=1.5,
            )

    def test_mood_type_must_be_enum(self):
        with pytest.raises(ValueError):
            AnalysisResult(mood_type="happy", emotion_score=50, analysis_method="rule")

    def test_tags_deduplicated(self):
        """Теги уникальны, порядок сохраняется."""
        result = AnalysisResult(
            mood_type=MoodType.NEUTRAL,
            emotion_score=50,
            analysis_method="rule",
            extracted_tags=("a", "b", "a"),
        )

        assert result.extracted_tags == ("a", "b")

    def test_immutable(self):
        result = AnalysisResult(mood_type=MoodType.NEUTRAL, emotion_score=50, analysis_method="rule")
        with pytest.raises(Exception):
            result.emotion_score = 60

    @pytest.mark.parametrize("mood,score,expected", [
        (MoodType.POSITIVE, 85, "很积极"),
        (MoodType.POSITIVE, 50, "较积极"),
        (MoodType.NEGATIVE, 20, "有些消极"),
        (MoodType.NEUTRAL, 50, "比较平静"),
    ])
    def test_mood_description(self, mood, score, expected):
        result = AnalysisResult(mood_type=mood, emotion_score=score, analysis_method="rule")
        assert result.mood_description == expected

    def test_dict_roundtrip(self):
        """to_dict / from_dict с camelCase ключами."""
        original = AnalysisResult(
            mood_type=MoodType.NEGATIVE,
            emotion_score=25,
            analysis_method="llm",
            extracted_tags=("累",),
            reasoning="疲惫",
            confidence=0.75,
            timestamp=datetime(2025, 6, 18, 10, 0),
        )

        data = original.to_dict()
        assert data["moodType"] == "negative"
        assert data["analysisMethod"] == "llm"

        assert AnalysisResult.from_dict(data) == original

    def test_from_rule_analysis(self):
        result = AnalysisResult.from_rule_analysis(MoodType.POSITIVE, 72, 0.7)

        assert result.analysis_method == "rule"
        assert result.extracted_tags == ()
        assert result.reasoning is None


class TestMoodFragment:
    """Тесты для MoodFragment."""

    def test_create_text(self):
        now = datetime(2025, 6, 18, 12, 0)
        fragment = MoodFragment.create(
            mood=MoodType.POSITIVE,
            emotion_score=70,
            text_content="开心",
            topic_tags=["a", "a", "b"],
            now=now,
        )

        assert fragment.type is FragmentType.TEXT
        assert fragment.topic_tags == ["a", "b"]
        assert fragment.id == str(int(now.timestamp() * 1000))
        assert fragment.timestamp == now

    def test_create_image_and_mixed(self):
        media = [MediaAttachment(id="m1", file_path="/tmp/x.jpg")]

        image = MoodFragment.create(mood=MoodType.NEUTRAL, emotion_score=50, media=media)
        mixed = MoodFragment.create(mood=MoodType.NEUTRAL, emotion_score=50, text_content="t", media=media)

        assert image.type is FragmentType.IMAGE
        assert image.has_media
        assert mixed.type is FragmentType.MIXED

    def test_with_analysis(self):
        """Новая копия с результатом анализа, исходник не меняется."""
        fragment = MoodFragment.create(mood=MoodType.NEUTRAL, emotion_score=50, text_content="x")
        analysis = AnalysisResult(mood_type=MoodType.NEGATIVE, emotion_score=20, analysis_method="llm")

        updated = fragment.with_analysis(analysis)

        assert updated.mood is MoodType.NEGATIVE
        assert updated.emotion_score == 20
        assert updated.analysis is analysis
        assert fragment.analysis is None

    def test_dict_roundtrip(self, sample_fragments):
        for fragment in sample_fragments:
            assert MoodFragment.from_dict(fragment.to_dict()) == fragment


# ============================================================================
# Tests for Domain Services
# ============================================================================

class TestEmotionScorer:
    """Тесты для EmotionScorer."""

    def test_empty_text(self):
        """Пустой текст → neutral / 50 / 0.5."""
        score = EmotionScorer().score("")

        assert score.mood_type is MoodType.NEUTRAL
        assert score.score == 50
        assert score.confidence == 0.5

    def test_positive(self):
        score = EmotionScorer().score("今天很开心，和朋友在一起很快乐")

        assert score.mood_type is MoodType.POSITIVE
        assert score.score > 70
        assert 0.0 <= score.confidence <= 1.0

    def test_negative(self):
        score = EmotionScorer().score("工作压力好大，很焦虑，也很难过")

        assert score.mood_type is MoodType.NEGATIVE
        assert 0 <= score.score <= 100

    def test_no_keywords_is_neutral(self):
        score = EmotionScorer().score("今天去了超市买东西")

        assert score.mood_type is MoodType.NEUTRAL
        assert score.confidence == 0.5

    def test_strong_markers_increase_intensity(self):
        scorer = EmotionScorer()

        plain = scorer.score("开心")
        strong = scorer.score("非常开心！！")

        assert strong.score > plain.score

    def test_score_always_in_range(self):
        """Оценка всегда 0-100, даже для длинного текста."""
        text = "非常特别超级极其开心快乐高兴兴奋满意幸福！！..." * 50
        score = EmotionScorer().score(text)

        assert 0 <= score.score <= 100

    @pytest.mark.parametrize("text,expected", [
        ("棒好爱", 75),     # 70 + 4.5 → 5
        ("a" * 25, 51),    # 50 + 0.5 → 1
    ])
    def test_half_rounds_up(self, text, expected):
        """Поправки с дробной частью 0.5 округляются вверх."""
        assert EmotionScorer().score(text).score == expected

    def test_custom_keywords(self):
        scorer = EmotionScorer(keywords={MoodType.POSITIVE: ("yay",), MoodType.NEGATIVE: (), MoodType.NEUTRAL: ()})

        assert scorer.score("YAY").mood_type is MoodType.POSITIVE

    def test_advice(self):
        assert EmotionScorer.get_advice(MoodType.POSITIVE, 90)
        assert EmotionScorer.get_advice(MoodType.NEGATIVE, 10) != EmotionScorer.get_advice(MoodType.NEGATIVE, 45)


# ============================================================================
# Tests for Exceptions
# ============================================================================

class TestExceptions:
    """Тесты для доменных исключений."""

    def test_details_in_str(self):
        error = DomainError("Something failed", {"key": "value"})

        assert "Something failed" in str(error)
        assert "key" in str(error)

    def test_provider_error_details(self):
        error = RateLimitError("Too many requests", provider_name="deepseek", status_code=429)

        assert isinstance(error, ProviderError)
        assert error.status_code == 429
        assert error.details == {"provider": "deepseek", "status": 429}

    def test_analysis_error_wrap(self):
        """AnalysisError хранит тип исходной ошибки."""
        cause = FormatError("bad json")
        error = AnalysisError.wrap(cause)

        assert isinstance(error, DomainError)
        assert error.details["cause"] == "FormatError"
        assert "bad json" in str(error)

    def test_analysis_error_keeps_cause(self):
        """Исходник в __cause__, в details - только имя типа (строка)."""
        cause = RateLimitError("Too many requests", provider_name="deepseek", status_code=429)

        with pytest.raises(AnalysisError) as exc_info:
            try:
                raise cause
            except ProviderError as exc:
                raise AnalysisError.wrap(exc) from exc

        assert exc_info.value.__cause__ is cause
        assert exc_info.value.details == {"cause": "RateLimitError"}


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
