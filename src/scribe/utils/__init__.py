"""Utility functions for scribe."""

from scribe.utils.amount_parser import format_cents, parse_amount, parse_amount_cents
from scribe.utils.date_parser import parse_birthdate
from scribe.utils.request_loader import load_bulk_transfer, load_enrollment_request

__all__ = [
    "format_cents",
    "parse_amount",
    "parse_amount_cents",
    "parse_birthdate",
    "load_bulk_transfer",
    "load_enrollment_request",
]
