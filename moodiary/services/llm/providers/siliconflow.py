"""
SiliconFlow Provider

OpenAI-совместимый API: https://api.siliconflow.cn/v1
"""

from moodiary.schemas.llm import LLMModelInfo

from .base import OpenAICompatibleProvider


class SiliconFlowProvider(OpenAICompatibleProvider):
    """Провайдер SiliconFlow (модели Qwen / DeepSeek)."""

    name = "siliconflow"
    display_name = "SiliconFlow"
    base_url = "https://api.siliconflow.cn/v1"
    default_model = "Qwen/Qwen3-14B"
    supported_models = ["Qwen/Qwen3-14B", "deepseek-ai/DeepSeek-V3"]

    status_messages = {
        400: "Invalid request parameters, check the model name and parameters",
        401: "SiliconFlow API key is invalid or expired",
        404: "Model does not exist or is unavailable",
        429: "Too many requests, retry later",
        503: "Model service overloaded, retry later",
        504: "SiliconFlow gateway timeout, retry later",
    }

    models = [
        LLMModelInfo(
            name="Qwen/Qwen3-14B",
            display_name="Qwen3-14B (推荐)",
            description="通义千问3代14B模型，中文理解和推理能力优秀",
            max_context_length=131072,
        ),
        LLMModelInfo(
            name="deepseek-ai/DeepSeek-V3",
            display_name="DeepSeek-V3",
            description="DeepSeek最新V3模型，推理和代码能力强",
            max_context_length=131072,
        ),
    ]
