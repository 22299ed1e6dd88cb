"""Core schemas for the application."""

from typing import List

from pydantic import BaseModel


class HealthCheck(BaseModel):
    """Schema for health check response."""
    service_name: str
    status: str


class ErrorObject(BaseModel):
    type: str
    detail: str


class ErrorDocument(BaseModel):
    """JSON:API error document."""
    errors: List[ErrorObject]
