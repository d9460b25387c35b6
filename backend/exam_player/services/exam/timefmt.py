import math


def format_mm_ss(seconds) -> str:
    """Render seconds as zero-padded MM:SS. Negative input renders as 00:00."""
    safe = max(0, math.floor(seconds))
    minutes, secs = divmod(safe, 60)
    return f"{minutes:02d}:{secs:02d}"
