"""Fetch-and-swap presenter driven by the host's display loop."""

import logging
import queue
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum

from news_observer.config import AppConfig, ConfigStore
from news_observer.data import Article, FetchOutcome, FetchRequest
from news_observer.errors import FetchError
from news_observer.fetch.base import ArticleFetcher

logger = logging.getLogger(__name__)

Job = Callable[[], None]
Spawner = Callable[[Job], None]

EMPTY_STATE_MESSAGE = (
    "There is nothing to show you.\n"
    "1) Check your API key setting in the Configuration window. "
    "After that, don't forget to refresh the news cards by pressing the refresh button!\n"
    "2) If the key is valid, but you're still seeing this message, the News API "
    "servers are probably down. Try again later."
)


class FetchState(StrEnum):
    """State of the presenter's single fetch slot."""

    IDLE = "idle"
    FETCHING = "fetching"
    READY = "ready"


@dataclass
class _FetchHandle:
    """Handoff minted for one fetch generation.

    Only the worker spawned with this handle writes to its channel.
    """

    generation: int
    channel: "queue.Queue[FetchOutcome]" = field(default_factory=lambda: queue.Queue(maxsize=1))


def spawn_thread(job: Job) -> None:
    """Run ``job`` on a new daemon thread."""
    threading.Thread(target=job, name="news-fetch", daemon=True).start()


def run_fetch(fetcher: ArticleFetcher, request: FetchRequest, generation: int) -> FetchOutcome:
    """Run one fetch and fold any failure into the outcome."""
    try:
        articles = fetcher.fetch(request)
    except FetchError as e:
        logger.warning("Fetch #%d failed (%s): %s", generation, e.kind, e)
        return FetchOutcome(generation=generation, error=e)
    except Exception as e:
        logger.exception("Fetch #%d crashed", generation)
        return FetchOutcome(generation=generation, error=FetchError(str(e)))
    return FetchOutcome(generation=generation, articles=tuple(articles))


class NewsPresenter:
    """Owns the displayed articles, the app config and at most one pending fetch.

    The host calls :meth:`poll` once per display tick; the presenter never
    blocks on the network. Starting a fetch while one is pending replaces the
    handle, so only the newest generation's result is ever applied.

    Args:
        fetcher: Performs the blocking fetch on a background task.
        store: Loads the config at construction and saves it on every change.
        spawn: Runs a job in the background (default: one daemon thread per job).
    """

    def __init__(
        self,
        fetcher: ArticleFetcher,
        store: ConfigStore,
        *,
        spawn: Spawner | None = None,
    ) -> None:
        self._fetcher = fetcher
        self._store = store
        self._spawn = spawn or spawn_thread
        self._config = store.load()
        self._articles: tuple[Article, ...] = ()
        self._pending: _FetchHandle | None = None
        self._generation = 0
        self._last_error: FetchError | None = None
        self._session_api_key: str | None = None
        self._show_config_window = not self._config.api_key

    @property
    def config(self) -> AppConfig:
        return self._config

    @property
    def articles(self) -> tuple[Article, ...]:
        """Currently displayed articles."""
        return self._articles

    @property
    def generation(self) -> int:
        """Number of fetches started so far."""
        return self._generation

    @property
    def last_error(self) -> FetchError | None:
        """Error of the most recently applied outcome, if it failed."""
        return self._last_error

    @property
    def show_config_window(self) -> bool:
        return self._show_config_window

    @property
    def state(self) -> FetchState:
        if self._pending is None:
            return FetchState.IDLE
        if self._pending.channel.empty():
            return FetchState.FETCHING
        return FetchState.READY

    @property
    def is_fetching(self) -> bool:
        return self._pending is not None

    @property
    def empty_state_message(self) -> str | None:
        if self._articles:
            return None
        return EMPTY_STATE_MESSAGE

    def build_request(self) -> FetchRequest:
        """Build the request for the next fetch from the current config."""
        api_key = self.api_key
        if self._config.query:
            return FetchRequest.search(api_key, self._config.query, self._config.country)
        return FetchRequest.headlines(api_key, self._config.country)

    @property
    def api_key(self) -> str:
        """Key used for fetching: the session key if one is set, else the stored one."""
        if self._session_api_key is not None:
            return self._session_api_key
        return self._config.api_key

    def start(self) -> int:
        """Kick off the first fetch when the display comes up."""
        return self.refresh()

    def refresh(self) -> int:
        """Start a background fetch, replacing any pending one.

        Returns:
            Generation number of the new fetch.
        """
        request = self.build_request()
        self._generation += 1
        handle = _FetchHandle(generation=self._generation)
        if self._pending is not None:
            logger.debug("Abandoning fetch #%d", self._pending.generation)
        self._pending = handle

        fetcher = self._fetcher

        def job() -> None:
            handle.channel.put(run_fetch(fetcher, request, handle.generation))

        logger.info("Starting fetch #%d (%s)", handle.generation, request.mode)
        self._spawn(job)
        return handle.generation

    def poll(self) -> bool:
        """Apply the pending fetch's result if it has arrived.

        Never blocks. Successful non-empty results replace the displayed list;
        failures and empty results keep it.

        Returns:
            True if the displayed list changed.
        """
        if self._pending is None:
            return False
        try:
            outcome = self._pending.channel.get_nowait()
        except queue.Empty:
            return False

        self._pending = None
        if not outcome.ok:
            self._last_error = outcome.error
            return False

        self._last_error = None
        if not outcome.articles:
            logger.info("Fetch #%d returned no articles, keeping current list", outcome.generation)
            return False
        self._articles = outcome.articles
        return True

    def toggle_country(self) -> None:
        """Switch to the next locale, refetch and save."""
        self._update(country=self._config.country.toggled())
        self.refresh()
        self._save()

    def toggle_theme(self) -> None:
        self._update(dark_theme=not self._config.dark_theme)
        self._save()

    def toggle_config_window(self) -> None:
        self._show_config_window = not self._show_config_window

    def confirm_api_key(self, api_key: str) -> None:
        """Accept a key entered in the configuration panel."""
        self._session_api_key = None
        self._update(api_key=api_key.strip())
        self._show_config_window = False
        self.refresh()
        self._save()

    def set_query(self, query: str | None) -> None:
        """Search for ``query`` instead of top headlines, or clear it with None."""
        self._update(query=_normalize_query(query))
        self.refresh()
        self._save()

    def use_session_api_key(self, api_key: str) -> None:
        """Fetch with ``api_key`` without ever writing it to the store.

        Does not start a fetch. A key confirmed later replaces it.
        """
        self._session_api_key = api_key.strip()
        if self._session_api_key:
            self._show_config_window = False

    def update_config(self, **changes: object) -> bool:
        """Apply several settings together.

        Saves once, and starts one fetch only if the next request differs.

        Returns:
            True if the config changed.
        """
        previous_request = self.build_request()
        if "query" in changes:
            changes["query"] = _normalize_query(changes["query"])  # type: ignore[arg-type]
        drops_session_key = False
        if "api_key" in changes:
            changes["api_key"] = str(changes["api_key"]).strip()
            drops_session_key = self._session_api_key is not None
            self._show_config_window = False

        updated = self._config.model_copy(update=changes)
        if updated == self._config and not drops_session_key:
            return False
        if drops_session_key:
            self._session_api_key = None
        self._config = updated
        if self.build_request() != previous_request:
            self.refresh()
        self._save()
        return True

    def _update(self, **changes: object) -> None:
        self._config = self._config.model_copy(update=changes)

    def _save(self) -> None:
        self._store.save(self._config)


def _normalize_query(query: str | None) -> str | None:
    if query is None or not query.strip():
        return None
    return query.strip()
