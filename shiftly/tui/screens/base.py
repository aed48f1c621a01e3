"""
Base class for all Shiftly console panes.
Every tab pane inherits from ShiftlyPane, which provides:
  - controller wiring (subscribe on mount, unsubscribe on unmount)
  - refresh_content() hook (called by the app-level refresh/retry action)
  - the shared status line: loading, stale, error banner
"""
from __future__ import annotations
from typing import ClassVar
from textual.binding import Binding
from textual.widget import Widget
from textual.widgets import Static
from shiftly.controllers.base import ScreenController


def esc(text: str) -> str:
    """Escape Rich markup in server-provided text."""
    return str(text).replace("[", "\\[")


_ERROR_HINT = "r = retry  x = dismiss"


def status_line(controller: ScreenController, idle_text: str = "", hint: str = _ERROR_HINT) -> str:
    if controller.show_error:
        return f"[bold red]✗ {esc(controller.error_message)}[/bold red]  [dim]{hint}[/dim]"
    if controller.is_loading:
        return "[dim]loading…[/dim]"
    if controller.has_stale_data:
        return "[dim]refreshing…[/dim]"
    return idle_text


class ShiftlyPane(Widget):
    """
    Base widget for all tab content.
    Subclass this, implement compose() and render_state().
    render_state() runs after every controller transition.
    """

    BINDINGS: ClassVar[list[Binding]] = [
        Binding("x", "dismiss_error", "Dismiss", show=False),
    ]

    DEFAULT_CSS = """
    ShiftlyPane {
        height: 1fr;
        width: 1fr;
    }
    """

    def __init__(self, controller: ScreenController, **kwargs):
        super().__init__(**kwargs)
        self.controller = controller
        self._unsubscribe = None

    def on_mount(self) -> None:
        self._unsubscribe = self.controller.subscribe(lambda _c: self.render_state())
        self.render_state()
        self.refresh_content()

    def on_unmount(self) -> None:
        if self._unsubscribe:
            self._unsubscribe()
            self._unsubscribe = None

    def action_dismiss_error(self) -> None:
        self.controller.dismiss_error()

    def refresh_content(self) -> None:
        """Called by the app to request a data refresh (also the retry action)."""
        self.run_worker(self.controller.refresh(), group=f"refresh-{self.controller.name}")

    def render_state(self) -> None:
        """Re-render from controller state. Override in subclasses."""
        self.refresh()

    @staticmethod
    def section(title: str) -> Static:
        """Return a styled section header widget."""
        return Static(f"[bold blue]── {title} ──[/bold blue]", markup=True)
