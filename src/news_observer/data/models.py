"""Core data models for News Observer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from news_observer.errors import FetchError


class Country(StrEnum):
    """News edition selector. Values are the codes the News API expects."""

    US = "us"
    RU = "ru"

    @property
    def label(self) -> str:
        """Uppercase code shown on the locale toggle."""
        return self.value.upper()

    def toggled(self) -> Country:
        """Return the next locale in declaration order, wrapping around."""
        members = list(Country)
        return members[(members.index(self) + 1) % len(members)]


class FetchMode(StrEnum):
    """Which News API endpoint a request targets."""

    TOP_HEADLINES = "top_headlines"
    EVERYTHING = "everything"


@dataclass(frozen=True)
class Article:
    """A news article as returned by the API."""

    title: str
    url: str
    description: str | None = None


@dataclass(frozen=True)
class FetchRequest:
    """Parameters of a single fetch.

    Use :meth:`headlines` or :meth:`search` rather than the constructor so
    the mode and its required fields stay consistent.
    """

    api_key: str
    mode: FetchMode = FetchMode.TOP_HEADLINES
    country: Country | None = None
    query: str | None = None

    def __post_init__(self) -> None:
        if self.mode == FetchMode.TOP_HEADLINES and self.country is None:
            raise ValueError("Top headlines request requires a country.")
        if self.mode == FetchMode.EVERYTHING and not (self.query and self.query.strip()):
            raise ValueError("Search request requires a non-empty query.")

    @classmethod
    def headlines(cls, api_key: str, country: Country) -> FetchRequest:
        return cls(api_key=api_key, mode=FetchMode.TOP_HEADLINES, country=country)

    @classmethod
    def search(cls, api_key: str, query: str, country: Country | None = None) -> FetchRequest:
        return cls(api_key=api_key, mode=FetchMode.EVERYTHING, country=country, query=query)


@dataclass(frozen=True)
class FetchOutcome:
    """Result of one background fetch, delivered through its handoff.

    Exactly one of ``articles`` and ``error`` is set.
    """

    generation: int
    articles: tuple[Article, ...] | None = None
    error: FetchError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.articles is not None
