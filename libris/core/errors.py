"""Error taxonomy for Libris.

Every error carries a stable machine-readable ``code`` and the HTTP status
the API layer maps it to. Engines raise these; the API renders them.
"""

from typing import Any, Dict, Optional


class LibrisError(Exception):
    """Base exception for Libris."""

    code = "LIBRIS_ERROR"
    status_code = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class FilterError(LibrisError):
    """Client-supplied filter input could not be used."""

    code = "FILTER_ERROR"
    status_code = 400


class MalformedFilter(FilterError):
    """Filter text is not a JSON array of condition objects."""

    code = "MALFORMED_FILTER"


class UnsupportedFilter(FilterError):
    """Filter asks for boolean composition other than a flat AND."""

    code = "UNSUPPORTED_FILTER"


class InvalidFilterField(FilterError):
    code = "INVALID_FILTER_FIELD"

    def __init__(self, property_name: str, record_type: str):
        super().__init__(
            f"Unknown filter property '{property_name}' for {record_type}",
            {"property": property_name, "record_type": record_type},
        )
        self.property_name = property_name
        self.record_type = record_type


class InvalidFilterValue(FilterError):
    code = "INVALID_FILTER_VALUE"

    def __init__(self, field: str, operator: str, value: str, reason: str = ""):
        message = f"Invalid value '{value}' for {field} {operator}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(
            message,
            {"field": field, "operator": operator, "value": value},
        )
        self.field = field
        self.operator = operator
        self.value = value


class Unauthenticated(LibrisError):
    code = "UNAUTHENTICATED"
    status_code = 401

    def __init__(self, message: str = "Could not validate credentials"):
        super().__init__(message)


class Forbidden(LibrisError):
    code = "FORBIDDEN"
    status_code = 403

    def __init__(self, resource: str, action: str):
        super().__init__(
            f"Missing entitlement {action} on {resource}",
            {"resource": resource, "action": action},
        )
        self.resource = resource
        self.action = action


class NotFound(LibrisError):
    code = "NOT_FOUND"
    status_code = 404

    def __init__(self, record_type: str, entity_id: Any):
        super().__init__(
            f"{record_type} {entity_id} not found",
            {"record_type": record_type, "id": str(entity_id)},
        )


class IdentityMismatch(LibrisError):
    code = "IDENTITY_MISMATCH"
    status_code = 400

    def __init__(self, path_id: Any, payload_id: Any):
        super().__init__(
            "Mismatched Id",
            {"path_id": str(path_id), "payload_id": str(payload_id)},
        )
