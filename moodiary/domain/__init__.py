"""
Domain Layer

Содержит бизнес-логику, не зависящую от внешних фреймворков:
- Entities: Доменные сущности
- Value Objects: Неизменяемые объекты и перечисления
- Services: Доменные сервисы (бизнес-правила)
- Exceptions: Доменные исключения
"""

from .exceptions import (
    DomainError,
    InvalidInputError,
    ConfigurationError,
    ProviderError,
    AuthError,
    RateLimitError,
    UpstreamUnavailableError,
    FormatError,
    AnalysisError,
)

from .value_objects import (
    MoodType,
    AnalysisMethod,
    FragmentType,
    MediaType,
    TimeFilter,
    MediaFilter,
    ScoreRange,
)

from .entities import (
    AnalysisResult,
    MoodFragment,
    MediaAttachment,
)

from .services import (
    EmotionScorer,
    EmotionScore,
)

__all__ = [
    # Exceptions
    "DomainError",
    "InvalidInputError",
    "ConfigurationError",
    "ProviderError",
    "AuthError",
    "RateLimitError",
    "UpstreamUnavailableError",
    "FormatError",
    "AnalysisError",
    # Value Objects
    "MoodType",
    "AnalysisMethod",
    "FragmentType",
    "MediaType",
    "TimeFilter",
    "MediaFilter",
    "ScoreRange",
    # Entities
    "AnalysisResult",
    "MoodFragment",
    "MediaAttachment",
    # Services
    "EmotionScorer",
    "EmotionScore",
]
