"""
Shiftly Manager console.
Textual-based TUI over the dealership agent API: dashboard, conversations,
escalations, leads and settings tabs, plus a live conversation screen.
Entry point: shiftly console (alias: tui, jack)
"""
from __future__ import annotations
from pathlib import Path
from typing import ClassVar
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header, TabbedContent, TabPane
from shiftly.api import ShiftlyClient
from shiftly.config import get_config
from shiftly.controllers import (
    ConversationDetailController,
    ConversationsListController,
    DashboardController,
    EscalationsController,
    LeadsController,
    SettingsController,
)
from shiftly.notifier import AlertNotifier
from shiftly.tui.screens.conversation import ConversationScreen
from shiftly.tui.screens.conversations import ConversationsPane
from shiftly.tui.screens.dashboard import DashboardPane
from shiftly.tui.screens.escalations import EscalationsPane
from shiftly.tui.screens.leads import LeadsPane
from shiftly.tui.screens.settings import SettingsPane

# ---------------------------------------------------------------------------
# Tab registry: add new panes here to extend the console
# Each entry: (key, label, tab_id, pane_class, controller attribute on the app)
# ---------------------------------------------------------------------------
TAB_REGISTRY = [
    ("1", "Dashboard",     "dashboard",     DashboardPane,     "dashboard"),
    ("2", "Conversations", "conversations", ConversationsPane, "conversations"),
    ("3", "Escalations",   "escalations",   EscalationsPane,   "escalations"),
    ("4", "Leads",         "leads",         LeadsPane,         "leads"),
    ("5", "Settings",      "settings",      SettingsPane,      "settings"),
]


class ShiftlyApp(App):
    """Shiftly Manager console."""
    CSS_PATH = str(Path(__file__).parent / "styles" / "main.tcss")
    TITLE = "Shiftly Manager"
    SUB_TITLE = "dealership leads · escalations"
    BINDINGS: ClassVar[list[Binding]] = [
        Binding("ctrl+q", "quit", "Quit", priority=True),
        Binding("1", "switch_tab('dashboard')",     "Dashboard",     show=True),
        Binding("2", "switch_tab('conversations')", "Conversations", show=True),
        Binding("3", "switch_tab('escalations')",   "Escalations",   show=True),
        Binding("4", "switch_tab('leads')",         "Leads",         show=True),
        Binding("5", "switch_tab('settings')",      "Settings",      show=True),
        Binding("r", "refresh_all",                 "Refresh",       show=True),
    ]

    def __init__(self, cfg: dict | None = None, client: ShiftlyClient | None = None, **kwargs):
        super().__init__(**kwargs)
        self.cfg = cfg or get_config()
        self.client = client or ShiftlyClient.from_config(self.cfg)
        polling = self.cfg.get("polling", {})
        self.conversation_interval = float(polling.get("conversation_interval", 5))
        self.notifier = AlertNotifier(self.cfg.get("notifications", {}).get("webhook_url", ""))

        self.dashboard = DashboardController(self.client)
        self.conversations = ConversationsListController(self.client)
        self.escalations = EscalationsController(
            self.client, self.notifier, poll_interval=float(polling.get("escalations_interval", 30))
        )
        self.leads = LeadsController(self.client, self.notifier)
        self.settings = SettingsController(self.client)
        self.apply_alert_preferences()

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with TabbedContent(initial="dashboard"):
            for _key, label, tab_id, pane_cls, attr in TAB_REGISTRY:
                with TabPane(label, id=tab_id):
                    yield pane_cls(getattr(self, attr), id=f"{tab_id}-pane")
        yield Footer()

    def on_mount(self) -> None:
        self.escalations.subscribe(self._update_badge)

    async def on_unmount(self) -> None:
        self.escalations.stop_auto_refresh()
        await self.client.aclose()

    def _update_badge(self, controller: EscalationsController) -> None:
        count = controller.active_count
        self.sub_title = f"{count} active escalation{'s' if count != 1 else ''}" if count else self.SUB_TITLE

    def on_tabbed_content_tab_activated(self, event: TabbedContent.TabActivated) -> None:
        # Escalations only auto-refresh while their tab is on screen
        if self.query_one(TabbedContent).active == "escalations":
            self.escalations.start_auto_refresh()
        else:
            self.escalations.stop_auto_refresh()

    def apply_alert_preferences(self) -> None:
        self.settings.apply_notification_preferences(self.escalations, self.leads)

    def open_conversation(self, phone: str) -> None:
        controller = ConversationDetailController(
            self.client, phone, poll_interval=self.conversation_interval
        )
        self.push_screen(ConversationScreen(controller))

    def action_switch_tab(self, tab_id: str) -> None:
        self.query_one(TabbedContent).active = tab_id

    def action_refresh_all(self) -> None:
        for _key, _label, tab_id, _cls, _attr in TAB_REGISTRY:
            pane = self.query_one(f"#{tab_id}-pane")
            pane.refresh_content()
