"""
Pytest configuration and fixtures.
"""
import os

# Settings are read at import time; keep the module-level engine off MySQL.
os.environ.setdefault("DB_URL", "sqlite+aiosqlite://")
os.environ.setdefault("CREATE_TABLES", "false")

import copy
import uuid
from typing import Any, AsyncGenerator, Awaitable, Callable, Dict, List, Optional

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from components.core.database import DatabaseManager
from components.core.init_db import get_db
from components.payment.repository import AbstractPaymentRepository, PaymentRepository, next_version
from components.payment.schemas import PaymentRecord
from restapi.endpoints.payment import get_payment_repository
from restapi.router import create_app


class InMemoryPaymentRepository(AbstractPaymentRepository):
    """Dict-backed repository for handler tests that don't need SQL."""

    def __init__(self) -> None:
        self.payments: Dict[str, PaymentRecord] = {}

    async def get_all(self) -> List[PaymentRecord]:
        return list(self.payments.values())

    async def get_by_id(self, payment_id: str) -> Optional[PaymentRecord]:
        return self.payments.get(payment_id)

    async def create(self, attributes: Dict[str, Any]) -> PaymentRecord:
        record = PaymentRecord(id=str(uuid.uuid4()), **copy.deepcopy(attributes))
        self.payments[record.id] = record
        return record

    async def update(self, payment_id: str, changes: Dict[str, Any]) -> Optional[PaymentRecord]:
        current = self.payments.get(payment_id)
        if current is None:
            return None
        attributes = {**current.attributes(), **copy.deepcopy(changes)}
        attributes["version"] = next_version(current.version, changes)
        record = PaymentRecord(id=payment_id, **attributes)
        self.payments[payment_id] = record
        return record

    async def delete(self, payment_id: str) -> bool:
        return self.payments.pop(payment_id, None) is not None


@pytest.fixture
def sample_payment_attributes() -> Dict[str, Any]:
    """Attributes of a complete, valid payment."""
    return {
        "amount": "99.99",
        "currency": "GBP",
        "end_to_end_reference": "Wil piano Jan",
        "numeric_reference": "1002001",
        "payment_id": "123456789012345678",
        "payment_purpose": "Paying for goods/services",
        "payment_scheme": "FDS",
        "payment_type": "Credit",
        "processing_date": "2017-01-18",
        "reference": "Payment for Em's piano lessons",
        "scheme_payment_sub_type": "InternetBanking",
        "scheme_payment_type": "ImmediatePayment",
        "version": 0,
        "organisation_id": "743d5b63-8e6f-432e-a8fa-c5d8d2ee5fcb",
        "beneficiary_party": {
            "account_name": "W Owens",
            "account_number": "31926819",
            "account_number_code": "BBAN",
            "account_type": 0,
            "address": "1 The Beneficiary Localtown SE2",
            "bank_id": "403000",
            "bank_id_code": "GBDSC",
            "name": "Wilfred Jeremiah Owens",
        },
        "debtor_party": {
            "account_name": "EJ Brown Black",
            "account_number": "GB29XABC10161234567801",
            "account_number_code": "IBAN",
            "address": "10 Debtor Crescent Sourcetown NE1",
            "bank_id": "203301",
            "bank_id_code": "GBDSC",
            "name": "Emelia Jane Brown",
        },
        "sponsor_party": {
            "account_number": "56781234",
            "bank_id": "123123",
            "bank_id_code": "GBDSC",
        },
        "charges_information": {
            "bearer_code": "SHAR",
            "sender_charges": [
                {"amount": "5.00", "currency": "GBP"},
                {"amount": "10.00", "currency": "USD"},
            ],
            "receiver_charges_amount": "1.00",
            "receiver_charges_currency": "USD",
        },
        "fx": {
            "contract_reference": "FX123",
            "exchange_rate": "2.00000",
            "original_amount": "200.42",
            "original_currency": "USD",
        },
    }


@pytest_asyncio.fixture
async def db_manager() -> AsyncGenerator[DatabaseManager, Any]:
    """In-memory SQLite database with all tables created."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    manager = DatabaseManager(engine=engine)
    await manager.create_tables()
    yield manager
    await manager.dispose()


@pytest.fixture
def app(db_manager: DatabaseManager) -> FastAPI:
    """Application wired to the test database."""
    application = create_app()

    async def override_get_db():
        async with db_manager.get_db() as session:
            yield session

    application.dependency_overrides[get_db] = override_get_db
    return application


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, Any]:
    """Create test HTTP client."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def create_payment(
    db_manager: DatabaseManager,
    sample_payment_attributes: Dict[str, Any],
) -> Callable[..., Awaitable[PaymentRecord]]:
    """Persist a payment directly through the repository."""

    async def _create(**overrides: Any) -> PaymentRecord:
        attributes = {**copy.deepcopy(sample_payment_attributes), **overrides}
        async with db_manager.get_db() as session:
            return await PaymentRepository(session).create(attributes)

    return _create


@pytest.fixture
def find_payment(db_manager: DatabaseManager) -> Callable[[str], Awaitable[Optional[PaymentRecord]]]:
    """Read a payment back from the database in a fresh session."""

    async def _find(payment_id: str) -> Optional[PaymentRecord]:
        async with db_manager.get_db() as session:
            return await PaymentRepository(session).get_by_id(payment_id)

    return _find


@pytest.fixture
def memory_repository() -> InMemoryPaymentRepository:
    return InMemoryPaymentRepository()


@pytest_asyncio.fixture
async def memory_client(memory_repository: InMemoryPaymentRepository) -> AsyncGenerator[AsyncClient, Any]:
    """HTTP client whose payment endpoints use the in-memory repository."""
    application = create_app()
    application.dependency_overrides[get_payment_repository] = lambda: memory_repository
    async with AsyncClient(transport=ASGITransport(app=application), base_url="http://test") as ac:
        yield ac
