"""Issue code constants for biomodel.api.lint().

These constants prevent stringly-typed issue codes and ensure
client code uses the correct codes.
"""

from enum import Enum


class ValidationCode(str, Enum):
    """Schema lint error and warning codes."""

    # Errors (blocking)
    INVALID_STRUCTURE = "INVALID_STRUCTURE"
    INVALID_SCHEMA = "INVALID_SCHEMA"
    UNRESOLVED_REF = "UNRESOLVED_REF"
    CYCLE_DETECTED = "CYCLE_DETECTED"
    MISSING_REQUIRED_PROPERTY = "MISSING_REQUIRED_PROPERTY"
    DUPLICATE_REQUIRED = "DUPLICATE_REQUIRED"
    UNKNOWN_LINK_TARGET = "UNKNOWN_LINK_TARGET"
    UNKNOWN_DEPENDENT_TRIGGER = "UNKNOWN_DEPENDENT_TRIGGER"
    MISSING_BASIC_ITEM = "MISSING_BASIC_ITEM"

    # Warnings (non-blocking)
    SHADOWED_PROPERTY = "SHADOWED_PROPERTY"
    REQUIRED_NOT_INHERITED = "REQUIRED_NOT_INHERITED"
    DEPENDENCY_NOT_INHERITED = "DEPENDENCY_NOT_INHERITED"
