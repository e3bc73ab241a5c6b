"""Public result models for biomodel package."""

from typing import List, Optional

from pydantic import BaseModel

from biomodel.kernel.validator import InstanceError


class ValidationIssue(BaseModel):
    """A single lint issue (error or warning)."""
    code: str  # a ValidationCode value
    message: str
    element_id: Optional[str] = None  # "<File>.json" or "<File>.json:<property>"
    ref: Optional[str] = None  # For UNRESOLVED_REF and SHADOWED_PROPERTY
    cycle_path: Optional[List[str]] = None  # For CYCLE_DETECTED


class ValidationResult(BaseModel):
    """Result of linting a schema collection."""
    ok: bool  # True if no errors (warnings don't block)
    errors: List[ValidationIssue]  # Blocking issues
    warnings: List[ValidationIssue]  # Non-blocking issues


class InstanceResult(BaseModel):
    """Result of validating one instance record."""
    ok: bool
    schema_name: str
    errors: List[InstanceError]
