"""Pydantic configuration models for News Observer."""

from pydantic import BaseModel, field_validator

from news_observer.data import Country


class AppConfig(BaseModel):
    """Persisted application settings.

    ``query`` switches fetching from top headlines to a popularity-sorted
    search when set.
    """

    dark_theme: bool = True
    api_key: str = ""
    country: Country = Country.US
    query: str | None = None
    font_size: float = 18.0

    model_config = {"frozen": True}

    @field_validator("query")
    @classmethod
    def blank_query_is_none(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        return v.strip()
