"""
Tests for CLI argument parsing.
Run with: pytest tests/test_cli.py
"""

import pytest

from shiftly.cli import build_parser, cmd_console, cmd_escalations, cmd_leads, cmd_ring


@pytest.mark.parametrize("alias", ["console", "tui", "jack"])
def test_console_aliases(alias):
    args = build_parser().parse_args([alias])
    assert args.func is cmd_console


@pytest.mark.parametrize("alias", ["ring", "health", "ping"])
def test_ring_aliases(alias):
    assert build_parser().parse_args([alias]).func is cmd_ring


def test_leads_options():
    args = build_parser().parse_args(["rank", "--filter", "hot", "-n", "3", "--config", "x.yaml"])
    assert args.func is cmd_leads
    assert args.filter == "hot"
    assert args.limit == 3
    assert args.config == "x.yaml"


def test_leads_rejects_unknown_filter():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["leads", "--filter", "cold"])


def test_escalations_pending_flag():
    args = build_parser().parse_args(["esc", "--pending"])
    assert args.func is cmd_escalations
    assert args.pending is True
