"""
Settings pane: dealership info, agent tuning, alert preferences, API health.
Edit the fields and press Save to PUT the agent config.
"""
from __future__ import annotations
from textual.app import ComposeResult
from textual.containers import Horizontal, ScrollableContainer
from textual.widgets import Button, Input, Label, Static, Switch
from shiftly.tui.screens.base import ShiftlyPane, esc, status_line


class SettingsPane(ShiftlyPane):
    """Agent configuration editor."""

    def compose(self) -> ComposeResult:
        yield Static("", id="settings-status", markup=True)
        with ScrollableContainer(id="settings-scroll"):
            yield Static(id="settings-info", markup=True)
            yield self.section("Agent")
            with Horizontal(classes="settings-row"):
                yield Label("Qualification threshold (0-100)")
                yield Input(id="settings-threshold", type="integer")
            with Horizontal(classes="settings-row"):
                yield Label("Model temperature")
                yield Input(id="settings-temperature", type="number")
            with Horizontal(classes="settings-row"):
                yield Label("Max tokens")
                yield Input(id="settings-max-tokens", type="integer")
            yield self.section("Notifications")
            with Horizontal(classes="settings-row"):
                yield Label("Escalation alerts")
                yield Switch(value=True, id="settings-escalation-alerts")
            with Horizontal(classes="settings-row"):
                yield Label("High score alerts")
                yield Switch(value=True, id="settings-high-score-alerts")
            with Horizontal(classes="settings-row"):
                yield Label("Alert threshold (0-100)")
                yield Input(id="settings-alert-threshold", type="integer")
            yield Button("Save", id="settings-save", variant="primary")

    def render_state(self) -> None:
        c = self.controller
        health = "[green]● healthy[/green]" if c.api_healthy else "[red]● unreachable[/red]"
        self.query_one("#settings-status", Static).update(status_line(c, f"[dim]API[/dim] {health}"))
        self.query_one("#settings-info", Static).update(
            "\n".join([
                "[bold blue]── Dealership ──[/bold blue]",
                f"  Name          {esc(c.dealership_name)}",
                f"  Phone         {esc(c.phone)}",
                f"  Timezone      {esc(c.timezone)}",
                f"  SMS provider  {esc(c.sms_provider)}",
            ])
        )
        if c.has_stale_data or c.is_loading:
            return
        self.query_one("#settings-threshold", Input).value = str(c.qualification_threshold)
        self.query_one("#settings-temperature", Input).value = f"{c.temperature:g}"
        self.query_one("#settings-max-tokens", Input).value = str(c.max_tokens)
        self.query_one("#settings-alert-threshold", Input).value = str(c.alert_threshold)
        if c.consume_save_success():
            self.app.notify("Configuration saved", title="Settings")

    def on_switch_changed(self, event: Switch.Changed) -> None:
        c = self.controller
        if event.switch.id == "settings-escalation-alerts":
            c.escalation_alerts = event.value
        elif event.switch.id == "settings-high-score-alerts":
            c.high_score_alerts = event.value
        self.app.apply_alert_preferences()

    def _read_inputs(self) -> bool:
        c = self.controller
        try:
            threshold = int(self.query_one("#settings-threshold", Input).value)
            temperature = float(self.query_one("#settings-temperature", Input).value)
            max_tokens = int(self.query_one("#settings-max-tokens", Input).value)
            alert_threshold = int(self.query_one("#settings-alert-threshold", Input).value)
        except ValueError:
            self.app.notify("Enter numeric values", title="Settings", severity="error")
            return False
        c.qualification_threshold = max(0, min(threshold, 100))
        c.temperature = max(0.0, min(temperature, 2.0))
        c.max_tokens = max(1, max_tokens)
        c.alert_threshold = max(0, min(alert_threshold, 100))
        return True

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "settings-save" and self._read_inputs():
            self.app.apply_alert_preferences()
            self.run_worker(self.controller.save_config(), group="settings-save")
