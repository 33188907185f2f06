"""Domain exceptions raised by services and mapped to HTTP responses in main."""

from typing import Dict, Optional


class PortalError(Exception):
    """Base class for all portal errors."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict:
        return {"detail": self.message}


class NotFound(PortalError):
    """Referenced role, application or FAQ does not exist."""

    status_code = 404

    def __init__(self, resource: str, resource_id):
        super().__init__(f"{resource} not found: {resource_id}")
        self.resource = resource
        self.resource_id = resource_id


class ValidationFailure(PortalError):
    """Submitted data is missing or malformed."""

    status_code = 422

    def __init__(self, message: str, errors: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.errors = errors or {}

    def to_dict(self) -> Dict:
        return {"detail": self.message, "errors": self.errors}


class InvalidTransition(PortalError):
    """Requested status change is not an edge of the lifecycle graph."""

    status_code = 409

    def __init__(self, current: str, target: str):
        super().__init__(f"Cannot move application from '{current}' to '{target}'")
        self.current = current
        self.target = target

    def to_dict(self) -> Dict:
        return {"detail": self.message, "current_status": self.current, "target_status": self.target}


class RemoteServiceFailure(PortalError):
    """A critical-path call to the data store or object storage failed.

    ``error`` keeps the driver message for logs; clients only see ``message``.
    """

    status_code = 502

    def __init__(self, service: str, error: str = ""):
        super().__init__(f"{service} failure")
        self.service = service
        self.error = error
