"""Payment model for the database."""

import uuid

from sqlalchemy import Column, Integer, String, DateTime, JSON, func

from components.core.database import Base


def generate_id() -> str:
    return str(uuid.uuid4())


class Payment(Base):
    """Payment model storing a single payment instruction."""
    __tablename__ = "payments"

    # Insertion order; the public identifier is `id`
    pk = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String(36), unique=True, index=True, nullable=False, default=generate_id)
    amount = Column(String(64), nullable=False)
    currency = Column(String(16), nullable=True)
    end_to_end_reference = Column(String(255), nullable=True)
    numeric_reference = Column(String(64), nullable=True)
    payment_id = Column(String(64), nullable=True)
    payment_purpose = Column(String(255), nullable=True)
    payment_scheme = Column(String(64), nullable=True)
    payment_type = Column(String(64), nullable=True)
    processing_date = Column(String(32), nullable=True)
    reference = Column(String(255), nullable=True)
    scheme_payment_sub_type = Column(String(64), nullable=True)
    scheme_payment_type = Column(String(64), nullable=True)
    version = Column(Integer, nullable=False, default=0)
    organisation_id = Column(String(36), nullable=True)

    # Nested groups, stored as supplied
    beneficiary_party = Column(JSON, nullable=True)
    debtor_party = Column(JSON, nullable=True)
    sponsor_party = Column(JSON, nullable=True)
    charges_information = Column(JSON, nullable=True)
    fx = Column(JSON, nullable=True)

    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(DateTime, nullable=False, server_default=func.now(), onupdate=func.now())
