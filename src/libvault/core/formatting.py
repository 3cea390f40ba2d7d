"""Formatting utilities for domain logic."""


def status_to_color(status: str) -> str:
    """Map an artifact cache status to a color name.

    Args:
        status: Status string ("cached", "refresh", or "missing")

    Returns:
        Color name string:
        - "cached" -> "green"
        - "refresh" -> "yellow"
        - "missing" -> "red"
        - invalid -> empty string
    """
    color_map = {
        "cached": "green",
        "refresh": "yellow",
        "missing": "red",
    }
    return color_map.get(status, "")
