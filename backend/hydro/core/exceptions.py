"""
Domain exceptions

Raised by the service layer and translated into JSON responses by the
handlers registered in main.py. Route helpers keep raising HTTPException
directly for request-level validation.
"""
from typing import Optional


class HydroError(Exception):
    """Base class for every domain error"""
    status_code = 400
    error_code = "HYDRO_ERROR"

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ResourceNotFoundError(HydroError):
    status_code = 404
    error_code = "RESOURCE_NOT_FOUND"

    def __init__(self, resource: str, identifier):
        super().__init__(
            f"{resource} not found: {identifier}",
            {"resource": resource, "identifier": identifier},
        )


class ReferenceNotFoundError(HydroError):
    """A record references an entity (tenant, catalog entry) that does not exist"""
    status_code = 400
    error_code = "REFERENCE_NOT_FOUND"

    def __init__(self, resource: str, identifier):
        super().__init__(
            f"Referenced {resource} does not exist: {identifier}",
            {"resource": resource, "identifier": identifier},
        )


class InvalidDataError(HydroError):
    """Stored data cannot go through a calculation (missing or zero inputs)"""
    status_code = 400
    error_code = "INVALID_DATA"


class DuplicateResourceError(HydroError):
    status_code = 409
    error_code = "DUPLICATE_RESOURCE"


class ResourceInUseError(HydroError):
    status_code = 409
    error_code = "RESOURCE_IN_USE"


class ConcurrencyConflictError(HydroError):
    """The storage kept rejecting a write because of a concurrent writer"""
    status_code = 409
    error_code = "CONCURRENCY_CONFLICT"
