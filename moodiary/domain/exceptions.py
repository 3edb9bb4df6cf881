"""
Domain Exceptions

Доменные исключения конвейера анализа эмоций.
Независимы от инфраструктуры (HTTP SDK, хранилище, UI).
"""

from typing import Optional


class DomainError(Exception):
    """Базовый класс для всех доменных исключений."""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class InvalidInputError(DomainError):
    """Пустой текст передан стратегии, которой нужен текст."""

    def __init__(self, reason: str = "Content cannot be empty"):
        super().__init__(reason)


class ConfigurationError(DomainError):
    """Не настроен провайдер LLM или API ключ."""
    pass


class ProviderError(DomainError):
    """
    Ошибка удалённого провайдера: сеть, таймаут, неожиданный ответ.

    Базовый класс для ошибок, привязанных к HTTP статусу.
    """

    def __init__(
        self,
        message: str,
        provider_name: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        details = {}
        if provider_name:
            details["provider"] = provider_name
        if status_code is not None:
            details["status"] = status_code

        super().__init__(message, details)
        self.provider_name = provider_name
        self.status_code = status_code


class AuthError(ProviderError):
    """Провайдер отклонил API ключ (401)."""
    pass


class RateLimitError(ProviderError):
    """Превышен лимит запросов (429)."""
    pass


class UpstreamUnavailableError(ProviderError):
    """Сервис провайдера недоступен (5xx)."""
    pass


class FormatError(DomainError):
    """Ответ модели не прошёл JSON/schema валидацию."""
    pass


class AnalysisError(DomainError):
    """
    Ошибка LLM-анализа.

    Оборачивает исходное исключение (ProviderError, FormatError или
    неожиданное): исходник в __cause__, имя его типа в details["cause"].
    """

    @classmethod
    def wrap(cls, exc: Exception) -> "AnalysisError":
        """Создаёт AnalysisError поверх исходной ошибки."""
        return cls(
            f"LLM analysis failed: {exc}",
            {"cause": type(exc).__name__},
        )
