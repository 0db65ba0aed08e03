"""Formatting utilities for display."""

from datetime import timedelta


def format_distance_label(distance: float, unit: str) -> str:
    """Format a distance as a chart label with one decimal, e.g. '2.3 mi'."""
    return f"{distance:.1f} {unit}"


def format_elevation(elevation: float | None, unit: str) -> str:
    """Format an elevation rounded to whole units, or 'n/a' when unknown."""
    if elevation is None:
        return "n/a"
    return f"{elevation:,.0f} {unit}"


def format_duration(td: timedelta | None) -> str:
    """Format a timedelta as Xh YYm ZZs string."""
    if td is None:
        return "n/a"
    total_seconds = int(td.total_seconds())
    hours, remainder = divmod(total_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{hours}h {minutes:02d}m {seconds:02d}s"
