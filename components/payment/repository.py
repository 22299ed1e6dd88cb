"""Repository for payment operations."""

import abc
import logging
from typing import Any, Dict, List, Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from components.payment.models import Payment
from components.payment.schemas import PaymentRecord

logger = logging.getLogger(__name__)


class AbstractPaymentRepository(abc.ABC):
    """Storage operations the payment endpoints depend on.

    Attribute mappings passed to ``create`` and ``update`` are already
    validated. ``update`` applies only the keys present in ``changes``.
    """

    @abc.abstractmethod
    async def get_all(self) -> List[PaymentRecord]:
        raise NotImplementedError

    @abc.abstractmethod
    async def get_by_id(self, payment_id: str) -> Optional[PaymentRecord]:
        raise NotImplementedError

    @abc.abstractmethod
    async def create(self, attributes: Dict[str, Any]) -> PaymentRecord:
        raise NotImplementedError

    @abc.abstractmethod
    async def update(self, payment_id: str, changes: Dict[str, Any]) -> Optional[PaymentRecord]:
        raise NotImplementedError

    @abc.abstractmethod
    async def delete(self, payment_id: str) -> bool:
        raise NotImplementedError


def next_version(current: int, changes: Dict[str, Any]) -> int:
    """Version after an update: the supplied one, or the stored one plus one."""
    if changes.get("version") is not None:
        return changes["version"]
    return current + 1


class PaymentRepository(AbstractPaymentRepository):
    """Repository for payment operations."""

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session."""
        self.session = session

    async def _get(self, payment_id: str) -> Optional[Payment]:
        result = await self.session.execute(
            select(Payment).where(Payment.id == payment_id)
        )
        return result.scalar_one_or_none()

    async def get_all(self) -> List[PaymentRecord]:
        """Get all payments in creation order."""
        result = await self.session.execute(
            select(Payment).order_by(Payment.pk)
        )
        return [PaymentRecord.model_validate(payment) for payment in result.scalars().all()]

    async def get_by_id(self, payment_id: str) -> Optional[PaymentRecord]:
        """Get payment by ID."""
        db_payment = await self._get(payment_id)
        if db_payment is None:
            logger.debug("Payment %s not found", payment_id)
            return None
        return PaymentRecord.model_validate(db_payment)

    async def create(self, attributes: Dict[str, Any]) -> PaymentRecord:
        """Create a new payment."""
        db_payment = Payment(**attributes)
        if db_payment.version is None:
            db_payment.version = 0
        self.session.add(db_payment)
        await self.session.commit()
        return PaymentRecord.model_validate(db_payment)

    async def update(self, payment_id: str, changes: Dict[str, Any]) -> Optional[PaymentRecord]:
        """Update payment by ID; nested groups present in ``changes`` are replaced."""
        db_payment = await self._get(payment_id)
        if not db_payment:
            return None

        version = next_version(db_payment.version, changes)
        for name, value in changes.items():
            setattr(db_payment, name, value)
        db_payment.version = version

        await self.session.commit()
        return PaymentRecord.model_validate(db_payment)

    async def delete(self, payment_id: str) -> bool:
        """Delete payment by ID."""
        db_payment = await self._get(payment_id)
        if not db_payment:
            return False

        await self.session.delete(db_payment)
        await self.session.commit()
        return True
