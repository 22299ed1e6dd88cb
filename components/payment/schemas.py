"""Pydantic schemas for payment data validation and JSON:API documents."""

from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field

PAYMENT_TYPE = "Payment"


class NestedGroup(BaseModel):
    """Base for nested attribute groups; unknown keys are kept as sent."""
    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)


class Party(NestedGroup):
    """Beneficiary, debtor or sponsor account details."""
    account_name: Optional[str] = None
    account_number: Optional[str] = None
    account_number_code: Optional[str] = None
    account_type: Optional[int] = None
    address: Optional[str] = None
    bank_id: Optional[str] = None
    bank_id_code: Optional[str] = None
    name: Optional[str] = None


class Charge(NestedGroup):
    amount: Optional[str] = None
    currency: Optional[str] = None


class ChargesInformation(NestedGroup):
    bearer_code: Optional[str] = None
    sender_charges: Optional[List[Charge]] = None
    receiver_charges_amount: Optional[str] = None
    receiver_charges_currency: Optional[str] = None


class ForeignExchange(NestedGroup):
    contract_reference: Optional[str] = None
    exchange_rate: Optional[str] = None
    original_amount: Optional[str] = None
    original_currency: Optional[str] = None


class PaymentAttributes(BaseModel):
    """Inbound payment attributes.

    Every field is optional here; presence rules are checked after merging,
    see ``components.payment.validators``. Fields the client did not send are
    left out of ``model_dump(exclude_unset=True)``.
    """
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    # Lengths follow the payments table columns
    amount: Optional[str] = Field(None, max_length=64)
    currency: Optional[str] = Field(None, max_length=16)
    end_to_end_reference: Optional[str] = Field(None, max_length=255)
    numeric_reference: Optional[str] = Field(None, max_length=64)
    payment_id: Optional[str] = Field(None, max_length=64)
    payment_purpose: Optional[str] = Field(None, max_length=255)
    payment_scheme: Optional[str] = Field(None, max_length=64)
    payment_type: Optional[str] = Field(None, max_length=64)
    processing_date: Optional[str] = Field(None, max_length=32)
    reference: Optional[str] = Field(None, max_length=255)
    scheme_payment_sub_type: Optional[str] = Field(None, max_length=64)
    scheme_payment_type: Optional[str] = Field(None, max_length=64)
    version: Optional[int] = None
    organisation_id: Optional[str] = Field(None, max_length=36)

    beneficiary_party: Optional[Party] = None
    debtor_party: Optional[Party] = None
    sponsor_party: Optional[Party] = None
    charges_information: Optional[ChargesInformation] = None
    fx: Optional[ForeignExchange] = None


class PaymentFields(BaseModel):
    """Stored payment attributes; nested groups are opaque mappings."""
    model_config = ConfigDict(from_attributes=True)

    amount: Optional[str] = None
    currency: Optional[str] = None
    end_to_end_reference: Optional[str] = None
    numeric_reference: Optional[str] = None
    payment_id: Optional[str] = None
    payment_purpose: Optional[str] = None
    payment_scheme: Optional[str] = None
    payment_type: Optional[str] = None
    processing_date: Optional[str] = None
    reference: Optional[str] = None
    scheme_payment_sub_type: Optional[str] = None
    scheme_payment_type: Optional[str] = None
    version: int = 0
    organisation_id: Optional[str] = None

    beneficiary_party: Optional[Dict[str, Any]] = None
    debtor_party: Optional[Dict[str, Any]] = None
    sponsor_party: Optional[Dict[str, Any]] = None
    charges_information: Optional[Dict[str, Any]] = None
    fx: Optional[Dict[str, Any]] = None


class PaymentRecord(PaymentFields):
    """Payment as returned by a repository."""
    id: str

    def attributes(self) -> Dict[str, Any]:
        return self.model_dump(exclude={"id"})


class PaymentResource(BaseModel):
    id: str
    type: Literal["Payment"] = PAYMENT_TYPE
    attributes: PaymentFields


class PaymentDocument(BaseModel):
    data: PaymentResource


class PaymentCollectionDocument(BaseModel):
    data: List[PaymentResource]


def to_resource(record: PaymentRecord) -> PaymentResource:
    return PaymentResource(
        id=record.id,
        attributes=PaymentFields(**record.attributes()),
    )


def to_document(record: PaymentRecord) -> PaymentDocument:
    return PaymentDocument(data=to_resource(record))


def to_collection_document(records: List[PaymentRecord]) -> PaymentCollectionDocument:
    return PaymentCollectionDocument(data=[to_resource(record) for record in records])
