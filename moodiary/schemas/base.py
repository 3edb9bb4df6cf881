"""
Base Schemas

Базовые классы для всех Pydantic schemas.
"""

from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """
    Базовый класс для всех schemas.

    Настройки:
    - from_attributes: Позволяет создавать из domain-объектов
    - populate_by_name: Позволяет использовать alias
    - str_strip_whitespace: Удаляет пробелы из строк
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class StrictSchema(BaseModel):
    """
    Базовый класс для недоверенных данных (ответы модели).

    Никаких преобразований типов, кроме int → float.
    Поля принимаются только по alias (как в JSON ответа).
    """

    model_config = ConfigDict(
        strict=True,
        populate_by_name=False,
        extra="ignore",
    )
