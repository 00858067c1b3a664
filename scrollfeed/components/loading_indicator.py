"""GTK widgets for the loading, load-more and no-results affordances."""

import logging
from pathlib import Path
from typing import Callable, Optional

import gi

gi.require_version("Gtk", "4.0")
gi.require_version("Gdk", "4.0")
from gi.repository import Gdk, GLib, Gtk

from scrollfeed.config.settings import IndicatorSettings
from scrollfeed.utils.indicator_css import CUSTOM, DOTS, INDICATOR_CLASS, build_indicator_css

logger = logging.getLogger("ScrollFeed.LoadingIndicator")


class GtkIndicatorPresenter:
    """IndicatorPresenter backed by GTK 4 widgets.

    Visibility changes go through ``GLib.idle_add`` so the engine may run on
    a worker thread's event loop.
    """

    def __init__(
        self,
        settings: IndicatorSettings,
        on_load_more: Optional[Callable[[], None]] = None,
        no_results_text: str = "No results",
        css_path: Optional[Path] = None,
    ):
        """Initialize GtkIndicatorPresenter.

        Args:
            settings: Indicator look and whether it is active at all
            on_load_more: Called when the "Load more" button is clicked
            no_results_text: Label shown when the first segment is empty
            css_path: Optional user stylesheet loaded after the built-in one
        """
        self.settings = settings
        self.on_load_more = on_load_more
        self.css_path = css_path

        self.box = Gtk.Box(orientation=Gtk.Orientation.VERTICAL)
        self.box.set_halign(Gtk.Align.CENTER)

        self.loader = self._create_loader()
        self.loader.set_visible(False)
        self.box.append(self.loader)

        self.load_more_button = Gtk.Button(label="Load more")
        self.load_more_button.set_visible(False)
        self.load_more_button.connect("clicked", self._on_load_more_clicked)
        self.box.append(self.load_more_button)

        self.no_results_label = Gtk.Label(label=no_results_text)
        self.no_results_label.add_css_class("dim-label")
        self.no_results_label.set_visible(False)
        self.box.append(self.no_results_label)

    def _create_loader(self) -> Gtk.Widget:
        if self.settings.type == CUSTOM:
            loader = Gtk.Label()
            loader.set_markup(self.settings.html)
        elif self.settings.type == DOTS:
            loader = Gtk.Box(orientation=Gtk.Orientation.HORIZONTAL)
            for _ in range(4):
                dot = Gtk.Box()
                dot.add_css_class("inf-dot")
                loader.append(dot)
        else:
            loader = Gtk.Box()
        loader.add_css_class(INDICATOR_CLASS)
        loader.set_halign(Gtk.Align.CENTER)
        return loader

    def install_css(self) -> bool:
        """Register the indicator stylesheet on the default display."""
        display = Gdk.Display.get_default()
        if display is None:
            logger.debug("No display available, skipping indicator CSS")
            return False

        css = build_indicator_css(self.settings)
        if css:
            provider = Gtk.CssProvider()
            provider.load_from_data(css, -1)
            Gtk.StyleContext.add_provider_for_display(
                display, provider, Gtk.STYLE_PROVIDER_PRIORITY_APPLICATION
            )

        if self.css_path and Path(self.css_path).exists():
            provider = Gtk.CssProvider()
            provider.load_from_path(str(self.css_path))
            Gtk.StyleContext.add_provider_for_display(
                display, provider, Gtk.STYLE_PROVIDER_PRIORITY_USER
            )
        return True

    def get_widget(self) -> Gtk.Box:
        return self.box

    def _set_visible(self, widget: Gtk.Widget, visible: bool) -> None:
        def apply():
            widget.set_visible(visible)
            return False  # Don't repeat

        GLib.idle_add(apply)

    def show_loading(self) -> None:
        if self.settings.active:
            self._set_visible(self.loader, True)

    def hide_loading(self) -> None:
        if self.settings.active:
            self._set_visible(self.loader, False)

    def show_load_more(self) -> None:
        self._set_visible(self.load_more_button, True)

    def hide_load_more(self) -> None:
        self._set_visible(self.load_more_button, False)

    def show_no_results(self) -> None:
        self._set_visible(self.no_results_label, True)

    def hide_no_results(self) -> None:
        self._set_visible(self.no_results_label, False)

    def _on_load_more_clicked(self, button) -> None:
        logger.debug("Load more clicked")
        if self.on_load_more:
            self.on_load_more()
