"""
LLM Providers

Удалённые модели с единым интерфейсом BaseLLMProvider.
"""

from .base import BaseLLMProvider, OpenAICompatibleProvider
from .deepseek import DeepSeekProvider
from .siliconflow import SiliconFlowProvider

__all__ = [
    "BaseLLMProvider",
    "OpenAICompatibleProvider",
    "SiliconFlowProvider",
    "DeepSeekProvider",
]
