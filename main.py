#!/usr/bin/env python
"""CLI for News Observer."""

import argparse
import logging
import os
import sys
import time
from pathlib import Path

from pydantic import BaseModel, ValidationError, field_validator

from news_observer.config import YamlConfigStore, get_default_config_path
from news_observer.data import Country
from news_observer.fetch import NewsAPIFetcher
from news_observer.presenter import NewsPresenter

logger = logging.getLogger(__name__)


class CLIArgs(BaseModel):
    """Validated CLI arguments.

    ``api_key`` comes from ``--api-key`` and is saved; ``env_api_key`` comes
    from ``NEWS_API_KEY`` and is only used for this run.
    """

    config: Path
    api_key: str | None = None
    env_api_key: str | None = None
    country: Country | None = None
    query: str | None = None
    gui: bool = False
    tick: float = 0.1

    @field_validator("tick")
    @classmethod
    def tick_must_be_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"Tick must be positive, got {v}")
        return v


def apply_overrides(presenter: NewsPresenter, args: CLIArgs) -> None:
    """Apply command-line overrides as one config change: one save, at most one fetch."""
    if args.env_api_key and not args.api_key:
        presenter.use_session_api_key(args.env_api_key)

    changes: dict[str, object] = {}
    if args.api_key:
        changes["api_key"] = args.api_key
    if args.country is not None:
        changes["country"] = args.country
    if args.query is not None:
        changes["query"] = args.query
    if changes:
        presenter.update_config(**changes)


def run_headless(presenter: NewsPresenter, tick: float) -> int:
    """Poll the presenter like a frame loop until the fetch lands, then print cards.

    Returns:
        Process exit code.
    """
    if not presenter.is_fetching:
        presenter.start()
    while presenter.is_fetching:
        time.sleep(tick)
        presenter.poll()

    message = presenter.empty_state_message
    if message is not None:
        logger.error(message)
        return 2

    print(f"\nTop news ({presenter.config.country.label}):\n")
    for i, article in enumerate(presenter.articles, 1):
        print(f"{i}. {article.title}")
        print(f"   {article.description or '...'}")
        print(f"   MORE: {article.url}\n")
    return 0


def parse_args(argv: list[str] | None = None) -> CLIArgs:
    """Parse and validate the command line, exiting with status 1 on invalid input."""
    parser = argparse.ArgumentParser(description="Browse top headlines from the News API.")
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help=f"Path to YAML config file (default: {get_default_config_path()})",
    )
    parser.add_argument(
        "--api-key",
        default=None,
        help="News API key to save (default: NEWS_API_KEY env var for this run, then the stored key)",
    )
    parser.add_argument(
        "--country",
        choices=[c.value for c in Country],
        default=None,
        help="News edition to show",
    )
    parser.add_argument(
        "--query",
        "-q",
        default=None,
        help="Search everything for this text instead of top headlines (empty string clears)",
    )
    parser.add_argument(
        "--gui",
        action="store_true",
        default=False,
        help="Open the desktop window instead of printing headlines",
    )
    parser.add_argument(
        "--tick",
        type=float,
        default=0.1,
        help="Seconds between polls of the background fetch (default: 0.1)",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    ns = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if ns.verbose else logging.INFO, format="%(message)s")

    try:
        return CLIArgs(
            config=ns.config if ns.config else get_default_config_path(),
            api_key=ns.api_key,
            env_api_key=os.environ.get("NEWS_API_KEY"),
            country=ns.country,
            query=ns.query,
            gui=ns.gui,
            tick=ns.tick,
        )
    except ValidationError as e:
        logger.error(str(e))
        sys.exit(1)


def main(argv: list[str] | None = None) -> None:
    """Entry point for the CLI."""
    args = parse_args(argv)
    presenter = NewsPresenter(NewsAPIFetcher(), YamlConfigStore(args.config))
    apply_overrides(presenter, args)

    try:
        if args.gui:
            from news_observer.gui import run_window

            run_window(presenter, tick_ms=int(args.tick * 1000))
        else:
            sys.exit(run_headless(presenter, args.tick))
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    main()
