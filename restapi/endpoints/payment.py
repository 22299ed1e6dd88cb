"""Payment endpoints for the API."""

import logging
from typing import Any, Dict, Mapping

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.errors import ResourceInvalid, ResourceNotFound
from components.core.init_db import get_db
from components.core.jsonapi import JSONAPIResponse, read_resource_document
from components.core.schemas import ErrorDocument
from components.payment import schemas
from components.payment.repository import AbstractPaymentRepository, PaymentRepository
from components.payment.validators import AttributeTypeError, parse_attributes, validate_payment

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/payments",
    tags=["payments"],
    default_response_class=JSONAPIResponse,
    responses={
        404: {"model": ErrorDocument, "description": "Resource Not Found"},
        415: {"model": ErrorDocument, "description": "Unsupported Media Type"},
    },
)


def get_payment_repository(db: AsyncSession = Depends(get_db)) -> AbstractPaymentRepository:
    """FastAPI dependency providing the payment repository."""
    return PaymentRepository(db)


def decode_attributes(raw: Mapping[str, Any]) -> Dict[str, Any]:
    try:
        return parse_attributes(raw)
    except AttributeTypeError as exc:
        raise ResourceInvalid(exc.messages)


@router.get("", response_model=schemas.PaymentCollectionDocument)
async def list_payments(
    repo: AbstractPaymentRepository = Depends(get_payment_repository),
):
    """Get all payments."""
    payments = await repo.get_all()
    return schemas.to_collection_document(payments)


@router.get("/{payment_id}", response_model=schemas.PaymentDocument)
async def read_payment(
    payment_id: str,
    repo: AbstractPaymentRepository = Depends(get_payment_repository),
):
    """Get a specific payment by ID."""
    payment = await repo.get_by_id(payment_id)
    if payment is None:
        raise ResourceNotFound(schemas.PAYMENT_TYPE, payment_id)
    return schemas.to_document(payment)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=schemas.PaymentDocument,
    responses={422: {"model": ErrorDocument, "description": "Resource Invalid"}},
)
async def create_payment(
    request: Request,
    repo: AbstractPaymentRepository = Depends(get_payment_repository),
):
    """
    Create a new payment from a JSON:API resource document.

    ``data.type`` must be ``Payment`` when given. ``amount`` is required.
    """
    _, raw_attributes = await read_resource_document(request, schemas.PAYMENT_TYPE)
    attributes = decode_attributes(raw_attributes)

    errors = validate_payment(attributes)
    if errors:
        logger.warning("Rejected payment: %s", "; ".join(errors))
        raise ResourceInvalid(errors)

    payment = await repo.create(attributes)
    logger.info("Created payment %s", payment.id)
    return schemas.to_document(payment)


@router.patch(
    "/{payment_id}",
    response_model=schemas.PaymentDocument,
    responses={422: {"model": ErrorDocument, "description": "Resource Invalid"}},
)
async def update_payment(
    payment_id: str,
    request: Request,
    repo: AbstractPaymentRepository = Depends(get_payment_repository),
):
    """
    Partially update a payment.

    Attributes left out of the document keep their stored values. Nested
    groups (``fx``, parties, charges) that are sent replace the stored group
    as a whole.
    """
    current = await repo.get_by_id(payment_id)
    if current is None:
        raise ResourceNotFound(schemas.PAYMENT_TYPE, payment_id)

    _, raw_attributes = await read_resource_document(request, schemas.PAYMENT_TYPE, payment_id)
    changes = decode_attributes(raw_attributes)

    errors = validate_payment({**current.attributes(), **changes}, current)
    if errors:
        logger.warning("Rejected update of payment %s: %s", payment_id, "; ".join(errors))
        raise ResourceInvalid(errors)

    payment = await repo.update(payment_id, changes)
    if payment is None:
        raise ResourceNotFound(schemas.PAYMENT_TYPE, payment_id)
    logger.info("Updated payment %s to version %s", payment.id, payment.version)
    return schemas.to_document(payment)


@router.delete(
    "/{payment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def delete_payment(
    payment_id: str,
    repo: AbstractPaymentRepository = Depends(get_payment_repository),
):
    """Delete a payment permanently."""
    if not await repo.delete(payment_id):
        raise ResourceNotFound(schemas.PAYMENT_TYPE, payment_id)
    logger.info("Deleted payment %s", payment_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
