"""Article fetchers."""

from news_observer.fetch.base import ArticleFetcher
from news_observer.fetch.newsapi import NEWS_API_BASE_URL, NewsAPIFetcher, build_request_url

__all__ = [
    "NEWS_API_BASE_URL",
    "ArticleFetcher",
    "NewsAPIFetcher",
    "build_request_url",
]
