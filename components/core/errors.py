"""Errors surfaced to API clients as JSON:API error documents."""

from typing import Dict, List, Optional


class JSONAPIError(Exception):
    """Base error carrying an HTTP status and JSON:API error entries."""

    status_code: int = 500
    type: str = "Internal Server Error"

    def __init__(self, detail: Optional[str] = None, details: Optional[List[str]] = None):
        self.details = list(details) if details else [detail or self.type]
        super().__init__("; ".join(self.details))

    def to_errors(self) -> List[Dict[str, str]]:
        return [{"type": self.type, "detail": detail} for detail in self.details]


class BadRequest(JSONAPIError):
    status_code = 400
    type = "Bad Request"


class ResourceNotFound(JSONAPIError):
    status_code = 404
    type = "Resource Not Found"

    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(f"{resource_type} with id '{resource_id}' does not exist")


class ResourceConflict(JSONAPIError):
    status_code = 409
    type = "Resource Conflict"


class ResourceTypeConflict(ResourceConflict):
    type = "Resource Type Conflict"


class ResourceIdConflict(ResourceConflict):
    type = "Resource Id Conflict"


class UnsupportedMediaType(JSONAPIError):
    status_code = 415
    type = "Unsupported Media Type"


class ResourceInvalid(JSONAPIError):
    """Validation failure; one error entry per failing field."""

    status_code = 422
    type = "Resource Invalid"

    def __init__(self, messages: List[str]):
        super().__init__(details=messages)
