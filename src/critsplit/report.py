"""Human-readable byte-size statistics."""

from __future__ import annotations

_UNITS = ["B", "kB", "MB", "GB", "TB"]


def format_bytes(size: int) -> str:
    """Format *size* with decimal units: ``512 B``, ``1.5 kB``, ``2.34 MB``."""
    if size < 1000:
        return f"{size} B"
    value = float(size)
    for unit in _UNITS[1:]:
        value /= 1000
        if float(f"{value:.3g}") < 1000 or unit == _UNITS[-1]:
            break
    return f"{value:.3g} {unit}"


def percent(part: int, whole: int) -> int:
    """Integer percentage of *part* in *whole* (0 when *whole* is empty)."""
    if not whole:
        return 0
    return int(part * 100 / whole)


def split_summary(name: str, original: int, critical: int, remaining: int) -> str:
    """One line describing how a stylesheet was split."""
    return (
        f"Inlined {format_bytes(critical)} ({percent(critical, original)}% of original "
        f"{format_bytes(original)}) of {name}, reducing non-inlined size "
        f"{percent(remaining, original)}% to {format_bytes(remaining)}."
    )
