from typing import Protocol, runtime_checkable

from news_observer.data import Article, FetchRequest


@runtime_checkable
class ArticleFetcher(Protocol):
    """Interface for fetching a list of articles."""

    def fetch(self, request: FetchRequest) -> list[Article]:
        """Fetch articles for a single request.

        Blocks for the duration of one network call.

        Args:
            request: Parameters of this fetch.

        Returns:
            Articles in the order the service returned them.

        Raises:
            TransportFailure: The request could not be completed.
            DecodeFailure: The response body could not be decoded.
        """
        ...
