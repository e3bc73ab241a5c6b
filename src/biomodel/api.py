"""Public API for the biomodel package.

High-level functions that return complete, structured results.
Clients should use these functions instead of importing from _internal.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

from biomodel._internal.io.schema_store import SchemaStore
from biomodel.codes import ValidationCode
from biomodel.config import get_settings
from biomodel.contracts import InstanceResult, ValidationIssue, ValidationResult
from biomodel.kernel.document import DocumentStructureError
from biomodel.kernel.examples import ExampleReport, check_examples as _check_examples
from biomodel.kernel.lint import lint_store
from biomodel.kernel.mixins import MixinResolver
from biomodel.kernel.validator import InstanceError, InstanceValidator

PathLike = Union[str, os.PathLike, Path]


def _normalize_path(path: PathLike) -> Path:
    """Normalize path input to Path object."""
    return Path(path) if not isinstance(path, Path) else path


def load_store(schemas_dir: Optional[PathLike] = None) -> SchemaStore:
    """Load a schema collection (configured or packaged one by default)."""
    if schemas_dir is None:
        schemas_dir = get_settings().resolved_schemas_dir
    return SchemaStore.from_directory(_normalize_path(schemas_dir))


def resolve(schema: str, schemas_dir: Optional[PathLike] = None) -> Dict[str, Any]:
    """
    Flatten one schema: mixins merged into `properties`.

    Args:
        schema: File name ("Tissue.json"), stem ("Tissue") or title

    Raises:
        ResolutionError: unknown schema or unresolvable mixin ref
        CycleError: cyclic mixin references
    """
    store = load_store(schemas_dir)
    return MixinResolver(store).resolve_schema(schema)


def validate_instance(
    schema: str,
    instance: Union[Mapping[str, Any], PathLike],
    schemas_dir: Optional[PathLike] = None,
) -> InstanceResult:
    """
    Validate one record against a schema, collecting every error.

    Args:
        schema: File name, stem or title of the schema
        instance: The record, or a path to a JSON file holding it

    Returns:
        InstanceResult with (path, rule, message) errors sorted deterministically.
    """
    store = load_store(schemas_dir)
    schema_name = store.lookup(schema)

    if isinstance(instance, Mapping):
        data = dict(instance)
    else:
        try:
            with open(_normalize_path(instance), "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            return InstanceResult(
                ok=False,
                schema_name=schema_name,
                errors=[InstanceError(path="", rule="json", message=f"Failed to parse instance: {e}")],
            )

    errors = InstanceValidator(store).validate(schema_name, data)
    return InstanceResult(ok=not errors, schema_name=schema_name, errors=errors)


def lint(schemas_dir: Optional[PathLike] = None) -> ValidationResult:
    """
    Lint a schema collection for authoring-convention violations.

    This is READ-ONLY - no side effects, no file writes, no mutations.
    """
    try:
        store = load_store(schemas_dir)
    except DocumentStructureError as e:
        issue = ValidationIssue(
            code=ValidationCode.INVALID_STRUCTURE.value,
            message=str(e),
            element_id=e.name,
        )
        return ValidationResult(ok=False, errors=[issue], warnings=[])

    errors, warnings = lint_store(store, get_settings().custom_keywords)

    # Sort by: code, then element_id, then message
    def sort_key(issue: ValidationIssue) -> tuple:
        return (issue.code, issue.element_id or "", issue.message)

    return ValidationResult(
        ok=len(errors) == 0,
        errors=sorted(errors, key=sort_key),
        warnings=sorted(warnings, key=sort_key),
    )


def check_examples(
    examples_dir: Optional[PathLike] = None,
    schemas_dir: Optional[PathLike] = None,
) -> ExampleReport:
    """Validate every `valid-*`/`invalid-*` fixture and report mismatches."""
    if examples_dir is None:
        examples_dir = get_settings().resolved_examples_dir
    store = load_store(schemas_dir)
    return _check_examples(InstanceValidator(store), _normalize_path(examples_dir))


__all__: List[str] = [
    "load_store",
    "resolve",
    "validate_instance",
    "lint",
    "check_examples",
    "InstanceResult",
    "ValidationIssue",
    "ValidationResult",
    "ExampleReport",
]
