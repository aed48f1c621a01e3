#!/usr/bin/env python3
"""
Shiftly Manager CLI: watch the lot, work the leads.

Every command has a short name and standard aliases:

    COMMAND         ALIASES         WHAT IT DOES
    -------         -------         ----------------------------------
    console         tui, jack       Launch the interactive console
    ring            health, ping    Check the agent API is reachable
    dashboard       stats           Print dashboard metrics
    escalations     esc             Print the escalation queue
    leads           rank            Print ranked leads
    tone            banner          Print the banner
"""

import argparse
import asyncio
import sys

from shiftly import __version__

BANNER = r"""
    ╔══════════════════════════════════════════════════╗
    ║                                                  ║
    ║   ███████ ██   ██ ██ ███████ ████████ ██   ██  ██║
    ║   ██      ██   ██ ██ ██         ██    ██    ████ ║
    ║   ███████ ███████ ██ █████      ██    ██     ██  ║
    ║        ██ ██   ██ ██ ██         ██    ██     ██  ║
    ║   ███████ ██   ██ ██ ██         ██    ██████ ██  ║
    ║                                                  ║
    ║   Watch the lot. Work the leads.      v""" + __version__ + r"""   ║
    ║                                                  ║
    ╚══════════════════════════════════════════════════╝
"""


def _load(args):
    """Load config (optionally from --config) and configure logging."""
    from shiftly.config import load_config, setup_logging

    cfg = load_config(args.config) if getattr(args, "config", None) else load_config()
    setup_logging(cfg)
    return cfg


async def _with_client(cfg, fn):
    from shiftly.api import ShiftlyClient

    async with ShiftlyClient.from_config(cfg) as client:
        return await fn(client)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def cmd_console(args):
    """Launch the Textual console."""
    from shiftly.tui.app import ShiftlyApp

    cfg = _load(args)
    ShiftlyApp(cfg=cfg).run()


def cmd_ring(args):
    """Check the API health endpoint."""
    cfg = _load(args)
    url = cfg["api"]["base_url"]
    print(f"  Ringing {url} ...")

    healthy = asyncio.run(_with_client(cfg, lambda c: c.check_health()))
    if healthy:
        print("  ✓  Agent API is up")
    else:
        print("  ✗  No answer from the agent API")
        sys.exit(1)


def _run_controller(cfg, factory):
    """Build a controller, refresh it once, return it (or exit on error)."""
    async def run(client):
        controller = factory(client)
        await controller.refresh()
        return controller

    controller = asyncio.run(_with_client(cfg, run))
    if controller.show_error:
        print(f"  ✗  {controller.error_message}")
        sys.exit(1)
    return controller


def cmd_dashboard(args):
    """Print headline dashboard metrics."""
    from shiftly.controllers import DashboardController
    from shiftly.formatting import format_score

    cfg = _load(args)
    c = _run_controller(cfg, DashboardController)
    m = c.metrics
    print(f"  Total conversations   {m.total_conversations}")
    print(f"  Active now            {m.active_conversations}")
    print(f"  Avg score             {format_score(m.average_qualification_score)}")
    print(f"  Completion            {format_score(c.completion_rate)}")
    recent = c.recent_conversations(args.recent)
    if recent:
        print()
        print("  Recent conversations:")
        for conv in recent:
            print(f"    {conv.display_name:<24} {conv.status:<10} {format_score(conv.qualification_score):>5}")


def cmd_escalations(args):
    """Print the escalation queue."""
    from shiftly.controllers import EscalationsController
    from shiftly.formatting import format_score, relative_time

    cfg = _load(args)
    c = _run_controller(cfg, EscalationsController)
    print(f"  {c.active_count} active escalations")
    if c.stats is not None:
        print(f"  Avg resolve time {c.stats.avg_resolve_time_min:.0f}m, "
              f"rate today {c.stats.escalation_rate_today:.0%}")
    print()
    for e in c.escalations:
        if args.pending and not e.is_pending:
            continue
        print(f"  [{e.status:<8}] {e.id:<12} {e.customer_phone:<16} "
              f"{format_score(e.qualification_score):>5}  {relative_time(e.escalated_at):>8}  "
              f"{e.escalation_reason}")


def cmd_leads(args):
    """Print ranked leads."""
    from shiftly.controllers import LeadFilter, LeadsController
    from shiftly.formatting import format_score, score_bar

    cfg = _load(args)
    c = _run_controller(cfg, LeadsController)
    lead_filter = LeadFilter(args.filter)
    leads = c.filtered(lead_filter)
    print(f"  {lead_filter.label}: {len(leads)} leads")
    print()
    for lead in leads[: args.limit]:
        score = lead.qualification_score
        print(f"  #{c.rank(lead):<3} {lead.display_name:<24} {score_bar(score)} {format_score(score):>5}")


def cmd_tone(args):
    """Print the banner."""
    print(BANNER)


# ---------------------------------------------------------------------------
# Parser with aliases
# ---------------------------------------------------------------------------

def _add_command(subparsers, names, help_text, func, setup_fn=None):
    """Register a command under multiple names."""
    p = subparsers.add_parser(names[0], help=help_text, aliases=names[1:])
    p.add_argument("--config", "-c", default=None, help="Path to config.yaml")
    p.set_defaults(func=func)
    if setup_fn:
        setup_fn(p)
    return p


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shiftly",
        description="Shiftly Manager: watch the lot, work the leads.",
        epilog="Run 'shiftly <command> --help' for command-specific options.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", "-V", action="version",
        version=f"shiftly {__version__}",
    )

    sub = parser.add_subparsers(dest="command", metavar="<command>")

    _add_command(sub, ["console", "tui", "jack"], "Launch the interactive console", cmd_console)
    _add_command(sub, ["ring", "health", "ping"], "Check the agent API is reachable", cmd_ring)

    def setup_dashboard(p):
        p.add_argument("--recent", "-n", type=int, default=5, help="Recent conversations to list")

    _add_command(sub, ["dashboard", "stats"], "Print dashboard metrics", cmd_dashboard, setup_dashboard)

    def setup_escalations(p):
        p.add_argument("--pending", action="store_true", help="Only show pending escalations")

    _add_command(sub, ["escalations", "esc"], "Print the escalation queue", cmd_escalations, setup_escalations)

    def setup_leads(p):
        p.add_argument("--filter", "-f", choices=["hot", "warm", "all"], default="all",
                       help="Score band (hot 70+, warm 40-69)")
        p.add_argument("--limit", "-n", type=int, default=20, help="Maximum leads to print")

    _add_command(sub, ["leads", "rank"], "Print ranked leads", cmd_leads, setup_leads)
    _add_command(sub, ["tone", "banner"], "Print the banner", cmd_tone)
    return parser


def main():
    parser = build_parser()
    args = parser.parse_args()
    if not args.command:
        cmd_tone(args)
        parser.print_help()
        return

    args.func(args)


if __name__ == "__main__":
    main()
