"""
DeepSeek Provider

OpenAI-совместимый API: https://api.deepseek.com/v1
"""

from moodiary.schemas.llm import LLMModelInfo

from .base import OpenAICompatibleProvider


class DeepSeekProvider(OpenAICompatibleProvider):
    """Провайдер DeepSeek."""

    name = "deepseek"
    display_name = "DeepSeek"
    base_url = "https://api.deepseek.com/v1"
    default_model = "deepseek-chat"
    supported_models = ["deepseek-chat"]

    status_messages = {
        400: "Invalid request parameters",
        401: "DeepSeek API key is invalid or expired",
        429: "Too many requests, retry later",
        503: "DeepSeek service temporarily unavailable, retry later",
    }

    models = [
        LLMModelInfo(
            name="deepseek-chat",
            display_name="DeepSeek Chat",
            description="DeepSeek对话模型，推理能力强",
            max_context_length=32768,
        ),
    ]
