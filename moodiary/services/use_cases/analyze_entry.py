"""
Analyze Entry Use Case

Создание записи с анализом настроения (текст → стратегия → MoodFragment)
и повторный анализ истории пакетным путём.
"""

from datetime import datetime
from typing import List, Optional, Sequence, Union

from moodiary.core.logging import get_logger
from moodiary.domain.entities import MediaAttachment, MoodFragment
from moodiary.domain.exceptions import InvalidInputError
from moodiary.domain.value_objects import AnalysisMethod, MoodType
from moodiary.services.analysis import AnalysisStrategySelector, LLMAnalysisStrategy
from moodiary.services.tags import TagUtils

logger = get_logger(__name__)

# Запись только с изображением не анализируется
IMAGE_ONLY_SCORE = 50


class AnalyzeEntryUseCase:
    """
    Use case создания записи.

    Шаги:
    1. Запись без текста (только изображения) → neutral / 50
    2. Выбор стратегии (настройки + доступность)
    3. Анализ текста
    4. Извлечение #тегов
    5. MoodFragment с прикреплённым AnalysisResult
    """

    def __init__(
        self,
        selector: AnalysisStrategySelector,
        tag_utils: TagUtils,
        llm_strategy: Optional[LLMAnalysisStrategy] = None,
    ):
        """
        Args:
            selector: Выбор стратегии анализа
            tag_utils: Извлечение тегов (владелец кэша)
            llm_strategy: Стратегия для повторного анализа истории
        """
        self.selector = selector
        self.tag_utils = tag_utils
        self.llm_strategy = llm_strategy

    async def execute(
        self,
        text: Optional[str],
        media: Optional[List[MediaAttachment]] = None,
        method: Union[AnalysisMethod, str, None] = None,
        now: Optional[datetime] = None,
    ) -> MoodFragment:
        """
        Создать запись с анализом.

        Args:
            text: Текст записи (может отсутствовать, если есть медиа)
            media: Вложения
            method: Способ анализа (по умолчанию из настроек)

        Returns:
            MoodFragment

        Raises:
            InvalidInputError: Нет ни текста, ни медиа
        """
        text = (text or "").strip() or None

        if text is None:
            if not media:
                raise InvalidInputError("Entry must have text or media")

            logger.info("[AnalyzeEntry] Image-only entry, analysis skipped: media=%d", len(media))
            return MoodFragment.create(
                mood=MoodType.NEUTRAL,
                emotion_score=IMAGE_ONLY_SCORE,
                media=media,
                now=now,
            )

        logger.info("[AnalyzeEntry] Step 1: Analyzing text, len=%d", len(text))
        analysis = await self.selector.analyze(text, method)

        logger.info("[AnalyzeEntry] Step 2: Extracting tags")
        tags = self.tag_utils.extract_tags(text)

        fragment = MoodFragment.create(
            mood=analysis.mood_type,
            emotion_score=analysis.emotion_score,
            text_content=text,
            media=media,
            topic_tags=tags,
            analysis=analysis,
            now=now,
        )

        logger.info(
            "[AnalyzeEntry] Done: mood=%s, score=%d, method=%s, tags=%d",
            analysis.mood_type.value, analysis.emotion_score, analysis.analysis_method, len(tags),
        )
        return fragment

    async def reanalyze(self, fragments: Sequence[MoodFragment]) -> List[MoodFragment]:
        """
        Повторный анализ текстовых записей через LLM (пакетом).

        Returns:
            Все записи в исходном порядке: получившие результат - обновлённые
            копии, остальные без изменений
        """
        if self.llm_strategy is None:
            raise ValueError("LLM strategy is required for re-analysis")

        targets = [i for i, f in enumerate(fragments) if f.text_content and f.text_content.strip()]
        if not targets:
            return list(fragments)

        logger.info("[AnalyzeEntry] Re-analyzing %d of %d fragments", len(targets), len(fragments))

        indexed = await self.llm_strategy.analyze_batch_indexed(
            [fragments[i].text_content for i in targets]
        )

        updated = list(fragments)
        for position, result in indexed:
            fragment_index = targets[position]
            updated[fragment_index] = fragments[fragment_index].with_analysis(result)

        logger.info(
            "[AnalyzeEntry] Re-analysis done: updated=%d, failed=%d",
            len(indexed), len(targets) - len(indexed),
        )
        return updated
