"""Tests for NewsAPIFetcher."""

from __future__ import annotations

import json
from unittest.mock import MagicMock

import httpx
import pytest

from news_observer.data import Article, Country, FetchMode, FetchRequest
from news_observer.errors import DecodeFailure, FetchError, TransportFailure
from news_observer.fetch.base import ArticleFetcher
from news_observer.fetch.newsapi import NewsAPIFetcher, build_request_url, decode_articles


class TestBuildRequestUrl:
    """Tests for request URL construction."""

    @pytest.mark.parametrize("country", list(Country))
    def test_headlines_has_single_country_and_no_query(self, country: Country) -> None:
        url = build_request_url(FetchRequest.headlines("key", country))

        assert url.path == "/v2/top-headlines"
        assert url.params.get_list("country") == [country.value]
        assert "q" not in url.params
        assert "sortBy" not in url.params
        assert url.params["apiKey"] == "key"

    def test_search_without_country(self) -> None:
        url = build_request_url(FetchRequest.search("key", "rust lang"))

        assert url.path == "/v2/everything"
        assert url.params["q"] == "rust lang"
        assert url.params["sortBy"] == "popularity"
        assert "country" not in url.params

    def test_search_with_country(self) -> None:
        url = build_request_url(FetchRequest.search("key", "elections", Country.RU))

        assert url.params["q"] == "elections"
        assert url.params.get_list("country") == ["ru"]

    def test_query_is_percent_encoded(self) -> None:
        url = build_request_url(FetchRequest.search("key", "a&b=c"))

        assert "q=a%26b%3Dc" in str(url)
        assert url.params["q"] == "a&b=c"

    def test_empty_api_key_is_sent(self) -> None:
        url = build_request_url(FetchRequest.headlines("", Country.US))
        assert url.params["apiKey"] == ""

    def test_custom_base_url(self) -> None:
        url = build_request_url(
            FetchRequest.headlines("key", Country.US), base_url="http://localhost:8080/v2/"
        )
        assert str(url).startswith("http://localhost:8080/v2/top-headlines?")


class TestDecodeArticles:
    """Tests for response body decoding."""

    def test_null_description_is_absent(self) -> None:
        body = {"articles": [{"title": "A", "url": "http://x", "description": None}]}

        articles = decode_articles(body)

        assert articles == [Article(title="A", url="http://x", description=None)]

    def test_missing_description_and_extra_fields(self) -> None:
        body = {
            "status": "ok",
            "totalResults": 1,
            "articles": [{"title": "A", "url": "http://x", "source": {"name": "X"}}],
        }

        articles = decode_articles(body)

        assert len(articles) == 1
        assert articles[0].description is None

    def test_preserves_order(self) -> None:
        body = {"articles": [{"title": t, "url": f"http://{t}"} for t in "cab"]}
        assert [a.title for a in decode_articles(body)] == ["c", "a", "b"]

    @pytest.mark.parametrize(
        "body",
        [
            {},
            {"articles": None},
            {"articles": [{"url": "http://x"}]},
            {"articles": [{"title": "A"}]},
            ["not", "an", "object"],
        ],
    )
    def test_unexpected_shape_raises_decode_failure(self, body: object) -> None:
        with pytest.raises(DecodeFailure):
            decode_articles(body)


class TestNewsAPIFetcher:
    """Tests for the HTTP round trip."""

    @pytest.fixture
    def mock_response_data(self) -> dict:
        """Sample News API response."""
        return {
            "status": "ok",
            "totalResults": 2,
            "articles": [
                {
                    "source": {"id": None, "name": "Example News"},
                    "title": "Article 1",
                    "url": "https://example.com/article1",
                    "description": "Description 1",
                    "publishedAt": "2026-02-01T10:00:00Z",
                },
                {
                    "source": {"id": None, "name": "Other News"},
                    "title": "Article 2",
                    "url": "https://example.com/article2",
                    "description": None,
                },
            ],
        }

    @pytest.fixture
    def fetcher(self) -> NewsAPIFetcher:
        return NewsAPIFetcher()

    def test_fetch_returns_articles(
        self,
        fetcher: NewsAPIFetcher,
        mock_response_data: dict,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        mock_response = MagicMock()
        mock_response.json.return_value = mock_response_data
        mock_response.raise_for_status = MagicMock()

        def mock_get(*args, **kwargs):
            return mock_response

        monkeypatch.setattr(httpx.Client, "get", mock_get)

        articles = fetcher.fetch(FetchRequest.headlines("test-key", Country.US))

        assert len(articles) == 2
        assert all(isinstance(a, Article) for a in articles)
        assert articles[0].title == "Article 1"
        assert articles[0].description == "Description 1"
        assert articles[1].description is None

    def test_fetch_requests_built_url(
        self,
        fetcher: NewsAPIFetcher,
        mock_response_data: dict,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        captured: list[httpx.URL] = []

        mock_response = MagicMock()
        mock_response.json.return_value = mock_response_data
        mock_response.raise_for_status = MagicMock()

        def mock_get(self, url, **kwargs):
            captured.append(httpx.URL(url))
            return mock_response

        monkeypatch.setattr(httpx.Client, "get", mock_get)

        request = FetchRequest.search("test-key", "climate", Country.RU)
        fetcher.fetch(request)

        assert len(captured) == 1
        assert captured[0] == build_request_url(request)
        assert request.mode == FetchMode.EVERYTHING

    def test_http_error_status_is_transport_failure(
        self, fetcher: NewsAPIFetcher, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def mock_get(self, url, **kwargs):
            request = httpx.Request("GET", url)
            return httpx.Response(
                401,
                json={"status": "error", "code": "apiKeyInvalid"},
                request=request,
            )

        monkeypatch.setattr(httpx.Client, "get", mock_get)

        with pytest.raises(TransportFailure) as exc_info:
            fetcher.fetch(FetchRequest.headlines("", Country.US))

        assert exc_info.value.kind == "transport"
        assert isinstance(exc_info.value.__cause__, httpx.HTTPStatusError)

    def test_network_error_is_transport_failure(
        self, fetcher: NewsAPIFetcher, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def mock_get(self, url, **kwargs):
            raise httpx.ConnectError("Name or service not known")

        monkeypatch.setattr(httpx.Client, "get", mock_get)

        with pytest.raises(TransportFailure):
            fetcher.fetch(FetchRequest.headlines("key", Country.US))

    def test_non_json_body_is_decode_failure(
        self, fetcher: NewsAPIFetcher, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        mock_response = MagicMock()
        mock_response.raise_for_status = MagicMock()
        mock_response.json.side_effect = json.JSONDecodeError("Expecting value", "<html>", 0)

        def mock_get(*args, **kwargs):
            return mock_response

        monkeypatch.setattr(httpx.Client, "get", mock_get)

        with pytest.raises(DecodeFailure) as exc_info:
            fetcher.fetch(FetchRequest.headlines("key", Country.US))

        assert exc_info.value.kind == "decode"
        assert isinstance(exc_info.value, FetchError)

    def test_real_response_with_html_body_is_decode_failure(
        self, fetcher: NewsAPIFetcher, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def mock_get(self, url, **kwargs):
            return httpx.Response(200, text="<html>maintenance</html>", request=httpx.Request("GET", url))

        monkeypatch.setattr(httpx.Client, "get", mock_get)

        with pytest.raises(DecodeFailure):
            fetcher.fetch(FetchRequest.headlines("key", Country.US))


def test_fetcher_satisfies_protocol() -> None:
    """NewsAPIFetcher structurally satisfies the ArticleFetcher protocol."""
    fetcher: ArticleFetcher = NewsAPIFetcher()
    assert isinstance(fetcher, ArticleFetcher)


def test_object_without_fetch_does_not_satisfy_protocol() -> None:
    class NotAFetcher:
        def search(self, request: FetchRequest) -> list[Article]:
            return []

    assert not isinstance(NotAFetcher(), ArticleFetcher)
