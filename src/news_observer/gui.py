"""Tkinter window that renders the presenter's articles as scrollable cards."""

from __future__ import annotations

import logging
import tkinter as tk
import webbrowser
from dataclasses import dataclass
from tkinter import ttk

from news_observer.data import Article
from news_observer.presenter import NewsPresenter

logger = logging.getLogger(__name__)

DEFAULT_TICK_MS = 100
NEWS_API_HOME = "https://newsapi.org"

REFRESH_GLYPH = "↺"
WRENCH_GLYPH = "\U0001f527"
SUN_GLYPH = "☀"
MOON_GLYPH = "\U0001f318"


@dataclass(frozen=True)
class Palette:
    background: str
    card_title: str
    text: str
    hyperlink: str
    error: str = "#c80000"


DARK = Palette(background="#1b1b1b", card_title="#ffffff", text="#d0d0d0", hyperlink="#00ff1e")
LIGHT = Palette(background="#f8f8f8", card_title="#0a0a0a", text="#303030", hyperlink="#0000c8")


class NewsObserverWindow:
    """Top-level window: control bar, article cards, footer, config dialog.

    Drives ``presenter.poll()`` from the Tk event loop every ``tick_ms``.
    """

    def __init__(self, root: tk.Tk, presenter: NewsPresenter, *, tick_ms: int = DEFAULT_TICK_MS) -> None:
        self.root = root
        self.presenter = presenter
        self.tick_ms = tick_ms
        self._config_dialog: tk.Toplevel | None = None
        self._rendered_theme: bool | None = None

        root.title("News Observer")
        root.geometry("720x800")

        size = int(presenter.config.font_size)
        self._body_font = ("TkDefaultFont", size)
        self._title_font = ("TkDefaultFont", size, "bold")
        self._heading_font = ("TkDefaultFont", size + 10, "bold")
        self._small_font = ("TkDefaultFont", max(size - 4, 8))

        self._build_controls()
        self._build_body()

    @property
    def palette(self) -> Palette:
        return DARK if self.presenter.config.dark_theme else LIGHT

    def run(self) -> None:
        if not self.presenter.is_fetching:
            self.presenter.start()
        self.render()
        self._sync_config_dialog()
        self.root.after(self.tick_ms, self._tick)
        self.root.mainloop()

    def _build_controls(self) -> None:
        bar = ttk.Frame(self.root, padding=(4, 2))
        bar.pack(fill="x", side="top")

        ttk.Button(bar, text=REFRESH_GLYPH, width=3, command=self._on_refresh).pack(side="left")
        ttk.Button(bar, text=WRENCH_GLYPH, width=3, command=self._on_configure).pack(side="left")

        self._theme_button = ttk.Button(bar, width=3, command=self._on_theme)
        self._theme_button.pack(side="right")
        self._country_button = ttk.Button(bar, width=4, command=self._on_country)
        self._country_button.pack(side="right")

        self._status = tk.StringVar(value="")
        ttk.Label(bar, textvariable=self._status).pack(side="left", padx=8)

    def _build_body(self) -> None:
        self._canvas = tk.Canvas(self.root, highlightthickness=0)
        scrollbar = ttk.Scrollbar(self.root, orient="vertical", command=self._canvas.yview)
        self._canvas.configure(yscrollcommand=scrollbar.set)
        scrollbar.pack(side="right", fill="y")
        self._canvas.pack(side="left", fill="both", expand=True)

        self._content = tk.Frame(self._canvas)
        self._content_id = self._canvas.create_window((0, 0), window=self._content, anchor="nw")
        self._content.bind(
            "<Configure>", lambda _e: self._canvas.configure(scrollregion=self._canvas.bbox("all"))
        )
        self._canvas.bind(
            "<Configure>", lambda e: self._canvas.itemconfigure(self._content_id, width=e.width)
        )

    def _tick(self) -> None:
        changed = self.presenter.poll()
        if changed or self._rendered_theme != self.presenter.config.dark_theme:
            self.render()
        self._update_status()
        self.root.after(self.tick_ms, self._tick)

    def _update_status(self) -> None:
        if self.presenter.is_fetching:
            self._status.set("Fetching...")
        elif self.presenter.last_error is not None:
            self._status.set(f"Last fetch failed ({self.presenter.last_error.kind})")
        else:
            self._status.set("")

    def render(self) -> None:
        palette = self.palette
        config = self.presenter.config
        self._rendered_theme = config.dark_theme
        self._theme_button.configure(text=SUN_GLYPH if config.dark_theme else MOON_GLYPH)
        self._country_button.configure(text=config.country.label)

        for child in self._content.winfo_children():
            child.destroy()
        self._canvas.configure(background=palette.background)
        self._content.configure(background=palette.background)

        heading = "Top News" if config.query is None else f"News: {config.query}"
        tk.Label(
            self._content, text=heading, font=self._heading_font,
            fg=palette.card_title, bg=palette.background,
        ).pack(pady=(10, 10))
        ttk.Separator(self._content).pack(fill="x")

        message = self.presenter.empty_state_message
        if message is not None:
            self._wrapped_label(message, palette.error, self._body_font)
            ttk.Separator(self._content).pack(fill="x")
        for article in self.presenter.articles:
            self._render_card(article, palette)

        self._render_footer(palette)
        self._update_status()

    def _render_card(self, article: Article, palette: Palette) -> None:
        self._wrapped_label(f"▶ {article.title}", palette.card_title, self._title_font)
        self._wrapped_label(article.description or "...", palette.text, self._body_font)
        self._link(self._content, "MORE ↪", article.url, palette, anchor="e")
        ttk.Separator(self._content).pack(fill="x")

    def _render_footer(self, palette: Palette) -> None:
        footer = tk.Frame(self._content, bg=palette.background)
        footer.pack(fill="x", pady=5)
        self._link(footer, "The news are provided by the News API.", NEWS_API_HOME, palette)

    def _wrapped_label(self, text: str, color: str, font: tuple) -> None:
        label = tk.Label(
            self._content, text=text, fg=color, bg=self.palette.background,
            font=font, justify="left", anchor="w", wraplength=660,
        )
        label.pack(fill="x", padx=8, pady=5)

    def _link(self, parent: tk.Widget, text: str, url: str, palette: Palette, *, anchor: str = "center") -> None:
        link = tk.Label(
            parent, text=text, fg=palette.hyperlink, bg=palette.background,
            font=self._small_font, cursor="hand2",
        )
        link.bind("<Button-1>", lambda _e: webbrowser.open(url))
        link.pack(anchor=anchor, padx=8, pady=5)

    def _on_refresh(self) -> None:
        self.presenter.refresh()
        self._update_status()

    def _on_country(self) -> None:
        self.presenter.toggle_country()
        self._country_button.configure(text=self.presenter.config.country.label)
        self._update_status()

    def _on_theme(self) -> None:
        self.presenter.toggle_theme()
        self.render()

    def _on_configure(self) -> None:
        self.presenter.toggle_config_window()
        self._sync_config_dialog()

    def _sync_config_dialog(self) -> None:
        if not self.presenter.show_config_window:
            if self._config_dialog is not None:
                self._config_dialog.destroy()
                self._config_dialog = None
            return
        if self._config_dialog is not None:
            return

        dialog = tk.Toplevel(self.root)
        dialog.title("Configuration")
        dialog.resizable(False, False)
        dialog.protocol("WM_DELETE_WINDOW", self._on_configure)

        ttk.Label(dialog, text="Enter your key for the News API and press Enter:").pack(padx=10, pady=(10, 4))
        key = tk.StringVar(value=self.presenter.config.api_key)
        entry = ttk.Entry(dialog, textvariable=key, width=40)
        entry.pack(padx=10)
        entry.bind("<Return>", lambda _e: self._on_key_confirmed(key.get()))
        entry.focus_set()

        ttk.Label(dialog, text="If you don't have it, you can register one at").pack(padx=10, pady=(8, 0))
        self._link(dialog, NEWS_API_HOME, NEWS_API_HOME, LIGHT)
        self._config_dialog = dialog

    def _on_key_confirmed(self, api_key: str) -> None:
        self.presenter.confirm_api_key(api_key)
        self._sync_config_dialog()
        self._update_status()


def run_window(presenter: NewsPresenter, *, tick_ms: int = DEFAULT_TICK_MS) -> None:
    """Open the window and block until it is closed."""
    root = tk.Tk()
    window = NewsObserverWindow(root, presenter, tick_ms=tick_ms)
    logger.info("Opening News Observer window")
    window.run()
