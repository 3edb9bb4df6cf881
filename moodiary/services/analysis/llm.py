"""
LLM Analysis Strategy

Анализ эмоций через удалённую модель:
промпт → вызов провайдера → строгая валидация → AnalysisResult.
"""

from typing import Any, Dict, List, Optional, Sequence, Tuple

from moodiary.core.config import Config, SettingsProvider
from moodiary.core.logging import get_logger
from moodiary.domain.entities import AnalysisResult
from moodiary.domain.exceptions import (
    AnalysisError,
    ConfigurationError,
    DomainError,
    InvalidInputError,
)
from moodiary.domain.value_objects import AnalysisMethod, MoodType
from moodiary.services.llm.client import LLMClient
from moodiary.services.llm.prompt import (
    MAX_BATCH_TAGS,
    MAX_TAGS,
    build_batch_prompt,
    build_emotion_prompt,
)
from moodiary.services.llm.validation import validate_batch_response, validate_emotion_response

from .base import AnalysisStrategy

logger = get_logger(__name__)

# Низкая temperature → стабильная классификация
SINGLE_PARAMETERS = {"max_tokens": 500, "temperature": 0.3}
BATCH_PARAMETERS = {"max_tokens": 2000, "temperature": 0.3}


class LLMAnalysisStrategy(AnalysisStrategy):
    """
    Стратегия анализа большой языковой моделью.

    Результат всегда в трёх классах (positive / negative / neutral).
    Ошибки провайдера и формата ответа → AnalysisError,
    ошибки настройки и пустой ввод пробрасываются как есть.
    """

    strategy_name = "llm_analysis"
    description = "使用AI大模型进行智能分析，需要网络连接"
    requires_network = True
    estimated_duration_ms = 5000
    confidence_baseline = 0.8

    def __init__(self, llm_client: LLMClient, settings: SettingsProvider):
        """
        Args:
            llm_client: Реестр провайдеров
            settings: Источник текущих настроек (читается при каждом вызове)
        """
        self.llm_client = llm_client
        self.settings = settings
        # Сколько раз модель вернула неизвестный moodType
        self.unknown_mood_count = 0

    @property
    def required_configs(self) -> List[str]:
        return ["llm_provider", "llm_api_key"]

    def _require_settings(self) -> Config:
        settings = self.settings.current_settings
        if not settings.is_llm_configured:
            raise ConfigurationError("LLM provider or API key not configured")
        return settings

    async def _probe(self) -> bool:
        try:
            settings = self.settings.current_settings
            if not settings.is_llm_configured:
                return False
            return await self.llm_client.test_provider_connection(
                settings.llm_provider,
                api_key=settings.llm_api_key,
            )
        except Exception as e:
            logger.warning("LLM availability check failed: %s", e)
            return False

    async def is_available(self) -> bool:
        return await self._probe()

    async def validate_config(self) -> bool:
        return await self._probe()

    async def _generate(self, settings: Config, prompt: str, parameters: Dict[str, Any]) -> str:
        return await self.llm_client.generate_text(
            settings.llm_provider,
            prompt,
            model=settings.llm_model,
            api_key=settings.llm_api_key,
            parameters=parameters,
        )

    async def analyze(self, content: str) -> AnalysisResult:
        """
        Анализ одной записи. Без повторных попыток.

        Raises:
            InvalidInputError: Пустой текст
            ConfigurationError: Не настроен провайдер или ключ
            AnalysisError: Ошибка провайдера, формата ответа или неожиданная
        """
        if not content or not content.strip():
            raise InvalidInputError("Content cannot be empty for LLM analysis")

        settings = self._require_settings()
        prompt = build_emotion_prompt(content)

        logger.debug(
            "LLM analysis: provider=%s, content_len=%d",
            settings.llm_provider, len(content),
        )

        try:
            raw = await self._generate(settings, prompt, SINGLE_PARAMETERS)
            parsed = validate_emotion_response(raw)
            return self._to_result(parsed, MAX_TAGS)
        except (ConfigurationError, InvalidInputError):
            raise
        except Exception as exc:
            logger.warning("LLM analysis failed: %s", exc)
            raise AnalysisError.wrap(exc) from exc

    async def analyze_batch(self, contents: Sequence[str]) -> List[AnalysisResult]:
        """
        Пакетный анализ (повторный анализ истории).

        Один запрос на весь пакет; при любой ошибке пакета
        записи анализируются по одной, неудачные пропускаются.
        Не бросает исключений: пустой список = ни одна запись не удалась.
        """
        return [result for _, result in await self.analyze_batch_indexed(contents)]

    async def analyze_batch_indexed(self, contents: Sequence[str]) -> List[Tuple[int, AnalysisResult]]:
        """
        То же, что analyze_batch, но с позицией входной записи:
        [(position, result), ...] в порядке входа.
        """
        contents = list(contents)

        if not contents:
            return []

        if len(contents) == 1:
            return await self._fallback_sequential(contents)

        results = await self._attempt_batch(contents)
        if results is not None:
            return list(enumerate(results))

        logger.warning("LLM batch failed, falling back to per-item analysis: count=%d", len(contents))
        return await self._fallback_sequential(contents)

    async def _attempt_batch(self, contents: List[str]) -> Optional[List[AnalysisResult]]:
        """Фаза 1: один запрос. None = пакет не удался."""
        try:
            settings = self._require_settings()
            prompt = build_batch_prompt(contents)

            logger.info("LLM batch analysis: count=%d", len(contents))

            raw = await self._generate(settings, prompt, BATCH_PARAMETERS)
            parsed = validate_batch_response(raw, len(contents))
            return [self._to_result(item, MAX_BATCH_TAGS) for item in parsed]
        except Exception as e:
            logger.warning("LLM batch attempt failed: %s", e)
            return None

    async def _fallback_sequential(self, contents: List[str]) -> List[Tuple[int, AnalysisResult]]:
        """Фаза 2: по одной записи, в порядке входа; ошибки пропускаются."""
        results = []
        for position, content in enumerate(contents):
            try:
                results.append((position, await self.analyze(content)))
            except DomainError as e:
                logger.warning("Skipping item %d in batch fallback: %s", position, e)
        return results

    def parse_mood_type(self, value: str) -> MoodType:
        """
        Строка модели → MoodType.

        Неизвестные значения → NEUTRAL (с предупреждением и счётчиком).
        """
        try:
            return MoodType((value or "").strip().lower())
        except ValueError:
            self.unknown_mood_count += 1
            logger.warning("Unknown mood type: %r, defaulting to neutral", value)
            return MoodType.NEUTRAL

    def _to_result(self, parsed: Dict[str, Any], max_tags: int) -> AnalysisResult:
        tags = tuple(dict.fromkeys(parsed["extractedTags"]))[:max_tags]

        return AnalysisResult(
            mood_type=self.parse_mood_type(parsed["moodType"]),
            emotion_score=parsed["emotionScore"],
            extracted_tags=tags,
            reasoning=parsed["reasoning"],
            analysis_method=AnalysisMethod.LLM.value,
            confidence=float(parsed["confidence"]),
        )
