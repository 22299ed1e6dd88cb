"""Validation rules for payment attributes."""

import uuid
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from pydantic import ValidationError

from components.payment.schemas import PaymentAttributes, PaymentRecord

REQUIRED_FIELDS = ("amount",)


def humanize(path: Union[str, Sequence[Any]]) -> str:
    """Turn ``organisation_id`` or ``("fx", "exchange_rate")`` into a label."""
    if isinstance(path, str):
        path = (path,)
    words = " ".join(str(part) for part in path if not isinstance(part, int))
    words = words.replace("_", " ").strip()
    return words[:1].upper() + words[1:]


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def is_canonical_uuid(value: str) -> bool:
    """Only the 36-character hyphenated form, e.g. no ``urn:uuid:`` or braces."""
    try:
        return str(uuid.UUID(value)) == value.lower()
    except ValueError:
        return False


class AttributeTypeError(ValueError):
    def __init__(self, messages: List[str]):
        self.messages = messages
        super().__init__("; ".join(messages))


def parse_attributes(raw: Mapping[str, Any]) -> Dict[str, Any]:
    """Type-check inbound attributes, keeping only the keys that were sent.

    An attribute sent as ``null`` is kept (as ``None``); an attribute that was
    not sent is absent from the result. Raises ``AttributeTypeError`` with one
    message per mistyped field.
    """
    try:
        attributes = PaymentAttributes.model_validate(dict(raw))
    except ValidationError as exc:
        messages = []
        for error in exc.errors():
            message = f"{humanize(error['loc'])} is invalid"
            if message not in messages:
                messages.append(message)
        raise AttributeTypeError(messages) from exc
    return attributes.model_dump(exclude_unset=True)


def validate_payment(
    attributes: Mapping[str, Any],
    current: Optional[PaymentRecord] = None,
) -> List[str]:
    """Return one message per failing rule; an empty list means valid.

    ``attributes`` is the complete attribute set the payment would have after
    the write, i.e. for updates the stored attributes merged with the changes.
    """
    errors: List[str] = []

    for field in REQUIRED_FIELDS:
        if is_blank(attributes.get(field)):
            errors.append(f"{humanize(field)} can't be blank")

    amount = attributes.get("amount")
    if not is_blank(amount):
        try:
            if not Decimal(str(amount).strip()).is_finite():
                raise InvalidOperation
        except InvalidOperation:
            errors.append("Amount is not a number")

    organisation_id = attributes.get("organisation_id")
    if not is_blank(organisation_id):
        if not is_canonical_uuid(str(organisation_id)):
            errors.append("Organisation id is invalid")

    version = attributes.get("version")
    if "version" in attributes and version is None:
        errors.append("Version can't be blank")
    elif version is not None:
        if version < 0:
            errors.append("Version must be greater than or equal to 0")
        elif current is not None and version < current.version:
            errors.append("Version can't be lower than current version")

    return errors
