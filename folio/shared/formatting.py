"""
Display Formatting
==================

Human-readable byte sizes for folder listings.
"""

_KB = 1024
_MB = _KB * 1024
_GB = _MB * 1024


def format_size(size_bytes: int | None) -> str:
    """
    Format a byte count for display.

    Empty sizes render as ``"-"``; everything below one kilobyte is shown in
    bytes, larger values with one decimal in KB, MB or GB.

    Examples:
        >>> format_size(0)
        '-'
        >>> format_size(2 * 1024 * 1024)
        '2.0 MB'
    """
    if not size_bytes:
        return "-"
    if size_bytes < _KB:
        return f"{size_bytes} B"
    if size_bytes < _MB:
        return f"{size_bytes / _KB:.1f} KB"
    if size_bytes < _GB:
        return f"{size_bytes / _MB:.1f} MB"
    return f"{size_bytes / _GB:.1f} GB"
