"""Date parsing utilities."""

import re
from datetime import date
from dateutil import parser as date_parser

BIRTHDATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def parse_birthdate(date_str: str) -> date:
    """Parse a birthdate in strict YYYY-MM-DD form, such as "1990-04-21".

    Args:
        date_str: Date string in YYYY-MM-DD form

    Returns:
        Date object

    Raises:
        ValueError: If date string is not a valid YYYY-MM-DD date
    """
    if not isinstance(date_str, str) or not date_str.strip():
        raise ValueError("Empty birthdate")

    date_str = date_str.strip()
    if not BIRTHDATE_PATTERN.fullmatch(date_str):
        raise ValueError(f"Could not parse birthdate '{date_str}': expected YYYY-MM-DD")

    try:
        return date_parser.isoparse(date_str).date()
    except (ValueError, TypeError) as e:
        raise ValueError(f"Could not parse birthdate '{date_str}': {e}")
