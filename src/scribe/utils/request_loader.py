"""Decoding of bulk transfer and enrollment request payloads.

Payloads are JSON objects, either already decoded or read from a file.
JSON numbers are decoded as Decimal so that amounts never pass through
floating point.
"""

import json
from decimal import Decimal
from pathlib import Path
from typing import Any, Mapping, Union

from scribe.domain.entities import (
    Account,
    BulkTransfer,
    CreditTransfer,
    EnrollmentRequest,
    Student,
)
from scribe.domain.errors import ValidationError
from scribe.utils.amount_parser import parse_amount_cents
from scribe.utils.date_parser import parse_birthdate

RequestSource = Union[str, Path, Mapping[str, Any]]

_CREDIT_TRANSFER_FIELDS = (
    "amount",
    "currency",
    "counterparty_name",
    "counterparty_bic",
    "counterparty_iban",
    "description",
)


def _read_payload(source: RequestSource) -> Mapping[str, Any]:
    if isinstance(source, Mapping):
        return source
    try:
        with open(source, encoding="utf-8") as handle:
            payload = json.load(handle, parse_float=Decimal)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Malformed JSON in {source}: {e}")
    except UnicodeDecodeError as e:
        raise ValidationError(f"Request file {source} is not valid UTF-8: {e}")
    if not isinstance(payload, Mapping):
        raise ValidationError(f"Expected a JSON object in {source}")
    return payload


def _require(payload: Mapping[str, Any], field: str, where: str) -> Any:
    value = payload.get(field)
    if value is None or value == "":
        raise ValidationError(f"{where}: '{field}' is required")
    return value


def _require_list(payload: Mapping[str, Any], field: str) -> list:
    value = payload.get(field)
    if not isinstance(value, list) or not value:
        raise ValidationError(f"'{field}' must be a non-empty list")
    return value


def _credit_transfer(raw: Any, index: int) -> CreditTransfer:
    where = f"credit_transfers[{index}]"
    if not isinstance(raw, Mapping):
        raise ValidationError(f"{where}: expected an object")
    values = {field: _require(raw, field, where) for field in _CREDIT_TRANSFER_FIELDS}
    try:
        amount_cents = parse_amount_cents(values["amount"])
    except ValueError as e:
        raise ValidationError(f"{where}: {e}")
    return CreditTransfer(
        amount_cents=amount_cents,
        currency=str(values["currency"]),
        counterparty_name=str(values["counterparty_name"]),
        counterparty_bic=str(values["counterparty_bic"]),
        counterparty_iban=str(values["counterparty_iban"]),
        description=str(values["description"]),
    )


def load_bulk_transfer(source: RequestSource) -> BulkTransfer:
    """Decode a bulk transfer request.

    Expected shape::

        {
          "organization_name": "ACME Corp",
          "organization_bic": "OIVUSCLQXXX",
          "organization_iban": "FR10474608000002006107XXXXX",
          "credit_transfers": [
            {"amount": "14.5", "currency": "EUR", "counterparty_name": "Bip Bip",
             "counterparty_bic": "CRLYFRPPTOU", "counterparty_iban": "EE383680981021245685",
             "description": "Wonderland/4410"}
          ]
        }

    Args:
        source: Path to a JSON file or an already decoded mapping

    Returns:
        BulkTransfer ready for FundTransferWorkflow

    Raises:
        ValidationError: If the payload is malformed
    """
    payload = _read_payload(source)
    account = Account(
        organization_name=str(_require(payload, "organization_name", "bulk transfer")),
        organization_bic=str(_require(payload, "organization_bic", "bulk transfer")),
        organization_iban=str(_require(payload, "organization_iban", "bulk transfer")),
    )
    transfers = tuple(
        _credit_transfer(raw, index)
        for index, raw in enumerate(_require_list(payload, "credit_transfers"))
    )
    return BulkTransfer(account=account, credit_transfers=transfers)


def _student(raw: Any, index: int) -> Student:
    where = f"students[{index}]"
    if not isinstance(raw, Mapping):
        raise ValidationError(f"{where}: expected an object")
    email = str(_require(raw, "email", where))
    birthdate = None
    if raw.get("birthdate"):
        try:
            birthdate = parse_birthdate(raw["birthdate"])
        except ValueError as e:
            raise ValidationError(f"{where}: {e}")
    return Student(name=str(raw.get("name") or ""), birthdate=birthdate, email=email)


def load_enrollment_request(source: RequestSource) -> EnrollmentRequest:
    """Decode an enrollment request.

    Expected shape::

        {
          "course_code": "SICP",
          "students": [
            {"name": "Ramdas Tifft", "birthdate": "1990-04-21", "email": "r.tifft@gmail.com"}
          ]
        }

    Args:
        source: Path to a JSON file or an already decoded mapping

    Returns:
        EnrollmentRequest ready for EnrollmentWorkflow

    Raises:
        ValidationError: If the payload is malformed
    """
    payload = _read_payload(source)
    course_code = str(_require(payload, "course_code", "enrollment request"))
    students = tuple(
        _student(raw, index) for index, raw in enumerate(_require_list(payload, "students"))
    )
    return EnrollmentRequest(course_code=course_code, students=students)
