"""Data models for News Observer."""

from news_observer.data.models import Article, Country, FetchMode, FetchOutcome, FetchRequest

__all__ = [
    "Article",
    "Country",
    "FetchMode",
    "FetchOutcome",
    "FetchRequest",
]
