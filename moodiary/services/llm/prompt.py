"""
Prompt templates для анализа эмоций.

Чистые функции: вход → строка, без сети и состояния.
"""

from typing import Sequence

from moodiary.domain.exceptions import InvalidInputError


VALID_MOOD_TYPES = ("positive", "negative", "neutral")

MAX_TAGS = 5
MAX_BATCH_TAGS = 3
MAX_REASONING_CHARS = 100
MAX_BATCH_REASONING_CHARS = 50


_SINGLE_TEMPLATE = """你是一个专业的情绪分析师，擅长分析中文文本的情绪倾向。请分析以下用户的心情记录内容，并按照指定格式返回分析结果。

用户内容：
"{content}"

分析要求：
1. 情绪分类：将内容分为积极(positive)、消极(negative)或中性(neutral)三类
2. 情绪强度：评分范围0-100，其中0为无情绪，50为中等强度，100为极强情绪
3. 关键词提取：提取能够反映情绪状态的关键词或短语，最多{max_tags}个
4. 分析推理：简要说明分类依据，{max_reasoning}字以内

请严格按照以下JSON格式返回结果，不要添加任何其他内容：

```json
{{
  "moodType": "positive/negative/neutral",
  "emotionScore": 数字(0-100),
  "extractedTags": ["关键词1", "关键词2", "关键词3"],
  "reasoning": "分析推理说明",
  "confidence": 数字(0.0-1.0)
}}
```

注意事项：
- moodType必须是positive、negative或neutral之一
- emotionScore必须是0-100之间的整数
- extractedTags数组最多包含{max_tags}个字符串
- reasoning要简洁明了，聚焦关键情绪表达
- confidence表示分析结果的置信度，0.0-1.0之间的小数
- 所有字段都必须存在，不能为null
"""

_BATCH_TEMPLATE = """你是一个专业的情绪分析师，擅长分析中文文本的情绪倾向。请分析以下{count}条用户心情记录内容，并按照指定格式返回分析结果。

用户内容：
{numbered}

分析要求：
1. 对每条内容进行独立的情绪分析
2. 情绪分类：积极(positive)、消极(negative)或中性(neutral)
3. 情绪强度：评分0-100
4. 关键词提取：每条最多{max_tags}个关键词
5. 简要推理：{max_reasoning}字以内

请严格按照以下JSON数组格式返回结果：

```json
[
  {{
    "index": 1,
    "moodType": "positive/negative/neutral",
    "emotionScore": 数字(0-100),
    "extractedTags": ["关键词1", "关键词2"],
    "reasoning": "分析推理",
    "confidence": 数字(0.0-1.0)
  }},
  {{
    "index": 2,
    "moodType": "positive/negative/neutral",
    "emotionScore": 数字(0-100),
    "extractedTags": ["关键词1", "关键词2"],
    "reasoning": "分析推理",
    "confidence": 数字(0.0-1.0)
  }}
]
```

注意：返回的数组长度必须与输入内容数量一致，index从1开始对应输入顺序。
"""


def build_emotion_prompt(content: str) -> str:
    """
    Промпт для анализа одной записи.

    Args:
        content: Текст записи пользователя

    Returns:
        Готовый промпт (китайский язык, JSON-only ответ)
    """
    return _SINGLE_TEMPLATE.format(
        content=content,
        max_tags=MAX_TAGS,
        max_reasoning=MAX_REASONING_CHARS,
    )


def build_batch_prompt(contents: Sequence[str]) -> str:
    """
    Промпт для пакетного анализа.

    Записи нумеруются с 1, модель обязана вернуть массив той же длины.

    Raises:
        InvalidInputError: Если список пуст
    """
    if not contents:
        raise InvalidInputError("Contents list cannot be empty")

    numbered = "\n".join(
        f'{position}. "{content}"' for position, content in enumerate(contents, start=1)
    )

    return _BATCH_TEMPLATE.format(
        count=len(contents),
        numbered=numbered,
        max_tags=MAX_BATCH_TAGS,
        max_reasoning=MAX_BATCH_REASONING_CHARS,
    )
