"""
Валидация ответов модели.

Граница между недоверенным текстом LLM и типизированным доменом:
любое отклонение от схемы → FormatError. Без побочных эффектов.
"""

import json
import re
from typing import Any, Dict, List

from pydantic import ValidationError

from moodiary.domain.exceptions import FormatError
from moodiary.schemas.llm import BatchEmotionItemSchema, EmotionAnalysisSchema


_FENCE_OPEN_RE = re.compile(r"^```(?:json)?")
_FENCE_CLOSE_RE = re.compile(r"```$")


def strip_code_fence(raw: str) -> str:
    """
    Убирает обрамляющие ```json / ``` и пробелы.

    "```json\\n{...}\\n```" → "{...}"
    """
    text = (raw or "").strip()
    text = _FENCE_OPEN_RE.sub("", text, count=1)
    text = _FENCE_CLOSE_RE.sub("", text, count=1)
    return text.strip()


def _load_json(raw: str) -> Any:
    text = strip_code_fence(raw)
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise FormatError(f"Response is not valid JSON: {exc.msg}", {"position": exc.pos}) from exc


def _describe(exc: ValidationError) -> List[str]:
    return [
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    ]


def validate_emotion_response(raw: str) -> Dict[str, Any]:
    """
    Проверяет ответ на одну запись.

    Args:
        raw: Сырой текст ответа модели (JSON, возможно в code fence)

    Returns:
        dict ровно с пятью ключами:
        moodType, emotionScore, extractedTags, reasoning, confidence

    Raises:
        FormatError: Невалидный JSON, не объект, или нарушение схемы
    """
    data = _load_json(raw)

    if not isinstance(data, dict):
        raise FormatError("Response is not a JSON object")

    try:
        parsed = EmotionAnalysisSchema.model_validate(data)
    except ValidationError as exc:
        raise FormatError("Response does not match schema", {"errors": _describe(exc)}) from exc

    return parsed.to_response_dict()


def validate_batch_response(raw: str, expected_count: int) -> List[Dict[str, Any]]:
    """
    Проверяет пакетный ответ.

    Массив должен содержать ровно expected_count объектов,
    index каждого = позиция + 1. Любое нарушение валит весь пакет.

    Returns:
        Список dict (пять полей + index) в порядке ответа

    Raises:
        FormatError
    """
    data = _load_json(raw)

    if not isinstance(data, list):
        raise FormatError("Batch response is not a JSON array")

    if len(data) != expected_count:
        raise FormatError(
            f"Expected {expected_count} results, got {len(data)}",
            {"expected": expected_count, "actual": len(data)},
        )

    results = []
    for position, item in enumerate(data):
        if not isinstance(item, dict):
            raise FormatError(f"Result {position} is not a JSON object")

        try:
            parsed = BatchEmotionItemSchema.model_validate(item)
        except ValidationError as exc:
            raise FormatError(
                f"Result {position} does not match schema",
                {"errors": _describe(exc)},
            ) from exc

        if parsed.index != position + 1:
            raise FormatError(
                f"Invalid index in result {position}",
                {"expected": position + 1, "actual": parsed.index},
            )

        results.append(parsed.to_response_dict())

    return results
