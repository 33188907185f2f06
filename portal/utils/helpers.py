"""Helper utilities."""

import re
import time


def sanitize_filename(filename: str) -> str:
    """Sanitize filename for storage."""
    # Remove special characters
    sanitized = re.sub(r'[^\w\s.-]', '', filename or "")
    # Replace spaces with underscores
    sanitized = re.sub(r'\s+', '_', sanitized).strip('._')
    return sanitized[:200] or "resume"


def timestamped_key(filename: str) -> str:
    """Storage key: epoch milliseconds prefix plus the sanitized original name."""
    return f"{int(time.time() * 1000)}-{sanitize_filename(filename)}"


def clamp(value: int, lower: int, upper: int) -> int:
    return max(lower, min(upper, value))
