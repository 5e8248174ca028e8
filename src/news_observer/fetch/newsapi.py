"""Fetch headlines from the News API (https://newsapi.org)."""

import logging

import httpx
from pydantic import BaseModel, ConfigDict, ValidationError

from news_observer.data import Article, FetchMode, FetchRequest
from news_observer.errors import DecodeFailure, TransportFailure

logger = logging.getLogger(__name__)

NEWS_API_BASE_URL = "https://newsapi.org/v2"

_ENDPOINTS = {
    FetchMode.TOP_HEADLINES: "top-headlines",
    FetchMode.EVERYTHING: "everything",
}


class NewsAPIArticle(BaseModel):
    """One entry of the ``articles`` array. Unknown fields are ignored."""
    model_config = ConfigDict(extra="ignore")

    title: str
    url: str
    description: str | None = None


class NewsAPIResponse(BaseModel):
    """Response body of both endpoints."""
    model_config = ConfigDict(extra="ignore")

    articles: list[NewsAPIArticle]


def build_request_url(request: FetchRequest, base_url: str = NEWS_API_BASE_URL) -> httpx.URL:
    """Build the request URL for a fetch.

    Headlines mode sends ``country``. Search mode sends ``q`` and
    ``sortBy=popularity``, plus ``country`` if the request carries one.
    ``apiKey`` is always last.
    """
    params: dict[str, str] = {}
    if request.country is not None:
        params["country"] = request.country.value
    if request.mode == FetchMode.EVERYTHING:
        params["q"] = request.query or ""
        params["sortBy"] = "popularity"
    params["apiKey"] = request.api_key

    endpoint = _ENDPOINTS[FetchMode(request.mode)]
    return httpx.URL(f"{base_url.rstrip('/')}/{endpoint}", params=params)


def decode_articles(data: object) -> list[Article]:
    """Convert a decoded JSON body into articles.

    Raises:
        DecodeFailure: If the body does not have the expected shape.
    """
    try:
        payload = NewsAPIResponse.model_validate(data)
    except ValidationError as e:
        raise DecodeFailure(f"Unexpected response shape: {e.error_count()} validation error(s)") from e

    return [
        Article(title=item.title, url=item.url, description=item.description)
        for item in payload.articles
    ]


class NewsAPIFetcher:
    """Fetch articles from the News API with one blocking GET per call.

    No timeout override and no retry: the HTTP client's defaults apply.

    Args:
        base_url: API root, overridable for tests or a proxy.
    """

    def __init__(self, *, base_url: str = NEWS_API_BASE_URL) -> None:
        self._base_url = base_url

    def fetch(self, request: FetchRequest) -> list[Article]:
        """Fetch articles for the given request.

        Args:
            request: Parameters of this fetch.

        Returns:
            Articles in API order.

        Raises:
            TransportFailure: Network error or non-success HTTP status.
            DecodeFailure: Body is not JSON or lacks the expected fields.
        """
        url = build_request_url(request, self._base_url)
        # The key is a query parameter; log only the path.
        logger.debug("Requesting %s (mode=%s)", url.path, request.mode)

        try:
            with httpx.Client() as client:
                response = client.get(url)
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise TransportFailure(f"News API request failed: {type(e).__name__}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise DecodeFailure("News API response is not valid JSON") from e

        articles = decode_articles(data)
        logger.info("Fetched %d articles from %s", len(articles), url.path)
        return articles
