"""
Platform-wide exception hierarchy.

Services raise these types; blueprints map them to HTTP responses once
(see orgforge.__init__ error handlers) and get consistent status codes
everywhere.

The analysis engine itself raises none of them: it works on a snapshot that
has already been validated at the boundary.

Usage:
    from orgforge.core.exceptions import NotFoundError, ValidationError

    raise NotFoundError(resource="Workspace", resource_id="a1b2...")
    raise ValidationError("Invalid snapshot", details={"roles[0].id": "required"})
"""


class NotFoundError(Exception):
    """Raised when a requested resource does not exist.

    Maps to HTTP 404.

    Args:
        resource: Human-readable entity name (e.g. "Workspace").
        resource_id: The key that was looked up. Included in logs, not in HTTP response.
    """

    def __init__(self, resource: str, resource_id: int | str | None = None) -> None:
        self.resource = resource
        self.resource_id = resource_id
        msg = f"{resource}"
        if resource_id is not None:
            msg += f" id={resource_id}"
        msg += " not found"
        super().__init__(msg)


class ValidationError(Exception):
    """Raised when input is well-formed JSON but has the wrong shape or value.

    Maps to HTTP 422 in blueprint error handlers.

    Args:
        message: Human-readable explanation of what failed.
        details: Optional field-level breakdown for structured API responses.
                 Keys are field paths; values are error descriptions.
    """

    def __init__(self, message: str, details: dict | None = None) -> None:
        self.details = details or {}
        super().__init__(message)
