"""Shiftly Manager console: dealership lead and escalation management."""

__version__ = "0.3.0"
