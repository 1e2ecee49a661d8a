"""Formatting helpers for elapsed-time counters."""

from __future__ import annotations


def format_elapsed(seconds: int) -> str:
    """Render a second count as ``MM:SS``; minutes grow past 99 if needed."""
    minutes, remaining = divmod(max(seconds, 0), 60)
    return f"{minutes:02d}:{remaining:02d}"
