"""biomodel: biomedical data model schemas + mixin resolution and validation tooling."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("biomodel")
except PackageNotFoundError:
    __version__ = "dev"

# Public API exports
from biomodel.api import check_examples, lint, resolve, validate_instance
from biomodel.codes import ValidationCode
from biomodel.contracts import InstanceResult, ValidationIssue, ValidationResult

__all__ = [
    "__version__",
    "resolve",
    "validate_instance",
    "lint",
    "check_examples",
    "ValidationCode",
    "ValidationIssue",
    "ValidationResult",
    "InstanceResult",
]
