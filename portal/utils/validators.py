"""Validators."""

import re
from typing import List, Optional


def validate_phone(phone: str, min_digits: int = 10) -> bool:
    """Validate phone number: optional leading +, digits/spaces/dashes, enough digits."""
    if not re.match(r'^\+?[\d\s-]+$', phone or ""):
        return False
    return len(re.sub(r'\D', '', phone)) >= min_digits


def validate_file_extension(filename: str, allowed_extensions: List[str]) -> bool:
    """Validate file extension."""
    if not filename or '.' not in filename:
        return False

    extension = filename.rsplit('.', 1)[-1].lower()
    return extension in [ext.lower() for ext in allowed_extensions]


def parse_cgpa(value: str) -> Optional[float]:
    """Parse a CGPA/percentage typed as free text ("8.5", "85%").

    Only presence and numeric shape are checked, not the range.
    """
    if value is None:
        return None
    cleaned = str(value).strip().rstrip('%').strip()
    if not cleaned:
        return None
    try:
        return float(cleaned)
    except ValueError:
        return None
