"""News Observer: top headlines from the News API, fetched in the background."""

from news_observer.config import (
    AppConfig,
    ConfigStore,
    YamlConfigStore,
    get_default_config_path,
    load_config,
    save_config,
)
from news_observer.data import Article, Country, FetchMode, FetchOutcome, FetchRequest
from news_observer.errors import DecodeFailure, FetchError, TransportFailure
from news_observer.fetch import ArticleFetcher, NewsAPIFetcher, build_request_url
from news_observer.presenter import EMPTY_STATE_MESSAGE, FetchState, NewsPresenter

__all__ = [
    # Models
    "Article",
    "Country",
    "FetchMode",
    "FetchOutcome",
    "FetchRequest",
    # Errors
    "DecodeFailure",
    "FetchError",
    "TransportFailure",
    # Protocols
    "ArticleFetcher",
    "ConfigStore",
    # Fetchers
    "NewsAPIFetcher",
    "build_request_url",
    # Presenter
    "EMPTY_STATE_MESSAGE",
    "FetchState",
    "NewsPresenter",
    # Config
    "AppConfig",
    "YamlConfigStore",
    "get_default_config_path",
    "load_config",
    "save_config",
]
