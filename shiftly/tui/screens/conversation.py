"""
Conversation screen: live transcript for one customer, pushed over the tabs.
Polls every few seconds while the conversation is active.

Type a reply and press Enter to send it as the manager. Slash commands:
    /escalate <reason>   hand the conversation to a human (high priority)
    /complete            mark the conversation completed
Escape goes back.
"""
from __future__ import annotations
from typing import ClassVar
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import ScrollableContainer
from textual.screen import Screen
from textual.widgets import Footer, Header, Input, Static
from shiftly.controllers.conversation_detail import ConversationDetailController
from shiftly.formatting import clock_time, format_score, status_color
from shiftly.tui.screens.base import esc, status_line

_DEFAULT_ESCALATION_REASON = "Manager requested takeover"
_ERROR_HINT = "ctrl+r = retry  ctrl+x = dismiss"


def _message_markup(message) -> str:
    if message.is_customer:
        who, style, indent = "▶ Customer", "blue", ""
    elif message.is_manager:
        who, style, indent = "◆ Manager", "magenta", "        "
    else:
        who, style, indent = "◀ Agent", "green", "        "
    ts = clock_time(message.created_at)
    ts_part = f"  [dim]{ts}[/dim]" if ts else ""
    content = esc(message.content).replace("\n", f"\n{indent}  ")
    return f"{indent}[{style}]{who}[/{style}]{ts_part}\n{indent}  {content}"


class ConversationScreen(Screen):
    """Transcript and manager actions for a single conversation."""

    BINDINGS: ClassVar[list[Binding]] = [
        Binding("escape", "back", "Back", show=True),
        Binding("ctrl+r", "reload", "Refresh", show=True),
        Binding("ctrl+x", "dismiss_error", "Dismiss", show=False),
    ]

    def __init__(self, controller: ConversationDetailController, **kwargs):
        super().__init__(**kwargs)
        self.controller = controller
        self._unsubscribe = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield Static("", id="conversation-header", markup=True)
        with ScrollableContainer(id="conversation-scroll"):
            yield Static(id="conversation-body", markup=True)
        yield Input(placeholder="Reply as manager  (/escalate <reason>, /complete)", id="conversation-reply")
        yield Footer()

    def on_mount(self) -> None:
        self.title = self.controller.phone
        self._unsubscribe = self.controller.subscribe(lambda _c: self.render_state())
        self.render_state()
        self.run_worker(self.controller.start(), group="conversation-start")

    def on_unmount(self) -> None:
        self.controller.stop()
        if self._unsubscribe:
            self._unsubscribe()
            self._unsubscribe = None

    def action_back(self) -> None:
        self.app.pop_screen()

    def action_dismiss_error(self) -> None:
        self.controller.dismiss_error()

    def action_reload(self) -> None:
        self.run_worker(self.controller.refresh(), group="conversation-refresh")

    def on_input_submitted(self, event: Input.Submitted) -> None:
        text = event.value.strip()
        if not text:
            return
        event.input.value = ""
        if text.startswith("/escalate"):
            reason = text[len("/escalate"):].strip() or _DEFAULT_ESCALATION_REASON
            self.run_worker(self.controller.escalate(reason), group="conversation-action")
        elif text == "/complete":
            self.run_worker(self.controller.complete(), group="conversation-action")
        else:
            self.run_worker(self.controller.send_message(text), group="conversation-action")

    def render_state(self) -> None:
        c = self.controller
        conv = c.conversation
        header = self.query_one("#conversation-header", Static)
        body = self.query_one("#conversation-body", Static)

        if conv is None:
            header.update(status_line(c, hint=_ERROR_HINT))
            if c.show_error:
                body.update("[dim]Conversation not found. Could not load this conversation.[/dim]")
            return

        self.title = conv.display_name
        dot = status_color(conv.status)
        parts = [f"[{dot}]● {esc(conv.status)}[/{dot}]"]
        if conv.qualification_score is not None:
            parts.append(f"Score: {format_score(conv.qualification_score)}")
        parts.append(f"[dim]{esc(conv.phone)}[/dim]")
        parts.append(f"[dim]{len(conv.messages)} messages[/dim]")
        if c.is_polling:
            parts.append("[dim]live[/dim]")
        if c.is_sending:
            parts.append("[dim]sending…[/dim]")
        info = "  │  ".join(parts)
        banner = status_line(c, hint=_ERROR_HINT)
        header.update(f"{info}\n{banner}" if banner else info)

        body.update("\n\n".join(_message_markup(m) for m in conv.messages) or "[dim]No messages yet.[/dim]")
        self.query_one("#conversation-scroll", ScrollableContainer).scroll_end(animate=False)
