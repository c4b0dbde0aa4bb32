"""
Shared formatting helpers for report output.
"""

from typing import Optional


def format_bytes(
    num_bytes: Optional[int],
    decimal_places: int = 2,
    binary_units: bool = True,
) -> str:
    """
    Format byte count as human-readable string with appropriate units.

    Args:
        num_bytes: Number of bytes to format (None returns "n/a")
        decimal_places: Number of decimal places to display (default: 2)
        binary_units: Use binary units (KiB) vs decimal (KB) (default: True)

    Examples:
        >>> format_bytes(1024)
        '1.00 KiB'
        >>> format_bytes(1000, binary_units=False)
        '1.00 KB'
        >>> format_bytes(None)
        'n/a'
    """
    if num_bytes is None:
        return "n/a"

    if binary_units:
        units = ["B", "KiB", "MiB", "GiB", "TiB", "PiB"]
        divisor = 1024
    else:
        units = ["B", "KB", "MB", "GB", "TB", "PB"]
        divisor = 1000

    value = float(num_bytes)
    for unit in units[:-1]:
        if value < divisor:
            return f"{value:.{decimal_places}f} {unit}"
        value /= divisor
    return f"{value:.{decimal_places}f} {units[-1]}"


def format_count(count: int, noun: str) -> str:
    """Return e.g. '1 file' or '1,204 files'."""
    suffix = "" if count == 1 else "s"
    return f"{count:,} {noun}{suffix}"


__all__ = ["format_bytes", "format_count"]
