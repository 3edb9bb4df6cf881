"""
Pytest Configuration and Fixtures

Общие fixtures для всех тестов.
"""

import json
from datetime import datetime, timedelta

import pytest
from unittest.mock import Mock, AsyncMock

from moodiary.core.config import Config, ConfigSettingsProvider
from moodiary.core.container import Container, reset_container
from moodiary.domain.entities import MediaAttachment, MoodFragment
from moodiary.domain.value_objects import FragmentType, MoodType


# Фиксированное "сейчас": среда, 18 июня 2025, 15:30
NOW = datetime(2025, 6, 18, 15, 30)


def chat_completion(content, model="Qwen/Qwen3-14B"):
    """Тело ответа chat/completions в формате OpenAI."""
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "created": 1718700000,
        "model": model,
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
        "usage": {"prompt_tokens": 10, "completion_tokens": 10, "total_tokens": 20},
    }


def llm_response(mood="positive", score=80, tags=("开心",), reasoning="积极词汇", confidence=0.9):
    """JSON-ответ модели на одну запись."""
    return json.dumps({
        "moodType": mood,
        "emotionScore": score,
        "extractedTags": list(tags),
        "reasoning": reasoning,
        "confidence": confidence,
    }, ensure_ascii=False)


def batch_response(count, mood="positive", score=70):
    """JSON-ответ модели на пакет из count записей."""
    return json.dumps([
        {
            "index": i + 1,
            "moodType": mood,
            "emotionScore": score,
            "extractedTags": ["标签"],
            "reasoning": "分析",
            "confidence": 0.8,
        }
        for i in range(count)
    ], ensure_ascii=False)


@pytest.fixture(autouse=True)
def reset_di():
    """Сбрасываем DI контейнер перед каждым тестом."""
    reset_container()
    yield
    reset_container()


@pytest.fixture
def rule_config():
    """Конфигурация без LLM."""
    return Config(_env_file=None, analysis_method="rule", llm_provider=None, llm_api_key=None)


@pytest.fixture
def llm_config():
    """Конфигурация с LLM."""
    return Config(
        _env_file=None,
        analysis_method="llm",
        llm_provider="siliconflow",
        llm_api_key="sk-test",
        llm_model=None,
    )


@pytest.fixture
def llm_settings(llm_config):
    return ConfigSettingsProvider(llm_config)


@pytest.fixture
def rule_settings(rule_config):
    return ConfigSettingsProvider(rule_config)


@pytest.fixture
def test_container(rule_config):
    """Тестовый DI контейнер."""
    return Container(config=rule_config)


@pytest.fixture
def mock_llm_client():
    """Mock для LLMClient."""
    client = Mock()
    client.generate_text = AsyncMock(return_value=llm_response())
    client.test_provider_connection = AsyncMock(return_value=True)
    return client


@pytest.fixture
def sample_fragments():
    """Записи за последние дни (относительно NOW)."""
    return [
        MoodFragment(
            id="1",
            mood=MoodType.POSITIVE,
            emotion_score=80,
            timestamp=NOW - timedelta(hours=1),
            text_content="今天很开心 #工作 #happy",
            topic_tags=["工作", "happy"],
        ),
        MoodFragment(
            id="2",
            mood=MoodType.NEGATIVE,
            emotion_score=30,
            timestamp=NOW - timedelta(days=1),
            text_content="加班好累 #工作",
            topic_tags=["工作"],
        ),
        MoodFragment(
            id="3",
            mood=MoodType.NEUTRAL,
            emotion_score=50,
            timestamp=NOW - timedelta(days=3),
            type=FragmentType.IMAGE,
            media=[MediaAttachment(id="m1", file_path="/tmp/a.jpg")],
        ),
        MoodFragment(
            id="4",
            mood=MoodType.POSITIVE,
            emotion_score=90,
            timestamp=NOW - timedelta(days=20),
            type=FragmentType.MIXED,
            text_content="旅行 #Travel",
            media=[MediaAttachment(id="m2", file_path="/tmp/b.jpg")],
            topic_tags=["Travel"],
        ),
    ]
