"""Text formatting helpers shared by the tool handlers."""

CHARACTER_LIMIT = 25000  # Maximum response size in characters


def format_duration(seconds: int) -> str:
    """
    Format seconds as "{h}h {m}m", flooring both parts.

    Examples: 125 -> "0h 2m", 3661 -> "1h 1m"
    """
    hours = seconds // 3600
    minutes = (seconds % 3600) // 60
    return f"{hours}h {minutes}m"


def format_compact_duration(seconds: int) -> str:
    """
    Format seconds for per-entry lines, dropping zero parts.

    Examples: 5400 -> "1h 30m", 7200 -> "2h", 900 -> "15m", 20 -> "0m"
    """
    hours = seconds // 3600
    minutes = (seconds % 3600) // 60

    if hours and minutes:
        return f"{hours}h {minutes}m"
    elif hours:
        return f"{hours}h"
    return f"{minutes}m"


def format_hours(hours: float) -> str:
    """Render an hour figure without trailing zeros (1.50 -> "1.5", 2.0 -> "2")."""
    return f"{hours:.2f}".rstrip("0").rstrip(".")


def truncate_response(content: str) -> str:
    """
    Truncate a response that exceeds CHARACTER_LIMIT.

    The cut happens at the last newline before the limit and a note is
    appended so the caller knows the text is partial.
    """
    if len(content) <= CHARACTER_LIMIT:
        return content

    truncated = content[:CHARACTER_LIMIT]
    last_newline = truncated.rfind('\n')
    if last_newline > 0:
        truncated = truncated[:last_newline]

    truncated += (
        f"\n\n---\nResponse truncated: showing partial results due to size limit "
        f"({len(content):,} characters). Request a narrower range to see more."
    )
    return truncated
