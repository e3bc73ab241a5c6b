"""Authoring-convention checks over a schema collection."""

import logging
from typing import List, Optional, Tuple

from jsonschema.exceptions import SchemaError

from biomodel.codes import ValidationCode
from biomodel.contracts import ValidationIssue
from .document import DocumentStructureError, ResolutionError, collect_link_targets
from .mixins import CycleError, MixinResolver
from .validator import build_validator_class

logger = logging.getLogger(__name__)

BASIC_ITEM_REF = "mixins.json#/basic_item"


def lint_store(
    store,
    custom_keywords: List[str],
    resolver: Optional[MixinResolver] = None,
) -> Tuple[List[ValidationIssue], List[ValidationIssue]]:
    """Lint every schema document of a store.

    Returns:
        (errors, warnings), unsorted.
    """
    resolver = resolver or MixinResolver(store)
    validator_class = build_validator_class(custom_keywords)
    titles = store.titles()
    errors: List[ValidationIssue] = []
    warnings: List[ValidationIssue] = []

    for name in store.schema_names():
        # 1. Structure (ERROR)
        try:
            document = store.document(name)
            refs = document.mixin_refs()
        except (DocumentStructureError, ResolutionError) as e:
            errors.append(ValidationIssue(
                code=ValidationCode.INVALID_STRUCTURE.value,
                message=str(e),
                element_id=name,
            ))
            continue

        # 2. Every document starts from basic_item (ERROR)
        if not refs or refs[0].ref != BASIC_ITEM_REF:
            errors.append(ValidationIssue(
                code=ValidationCode.MISSING_BASIC_ITEM.value,
                message=f"First mixinProperties entry of '{name}' must be '{BASIC_ITEM_REF}'",
                element_id=name,
            ))

        # 3. Mixin resolution (ERROR); nothing else can be checked without it
        try:
            resolved = resolver.resolve(name)
        except ResolutionError as e:
            errors.append(ValidationIssue(
                code=ValidationCode.UNRESOLVED_REF.value,
                message=str(e),
                element_id=name,
                ref=e.ref,
            ))
            continue
        except CycleError as e:
            errors.append(ValidationIssue(
                code=ValidationCode.CYCLE_DETECTED.value,
                message=str(e),
                element_id=name,
                cycle_path=e.cycle,
            ))
            continue
        except DocumentStructureError as e:
            # A parent document reached through the chain is malformed
            errors.append(ValidationIssue(
                code=ValidationCode.INVALID_STRUCTURE.value,
                message=str(e),
                element_id=name,
            ))
            continue

        effective = resolved.properties

        # 4. Required fields (ERROR)
        seen = set()
        for field_name in document.required:
            if field_name in seen:
                errors.append(ValidationIssue(
                    code=ValidationCode.DUPLICATE_REQUIRED.value,
                    message=f"'{field_name}' is listed more than once in required",
                    element_id=f"{name}:{field_name}",
                ))
                continue
            seen.add(field_name)
            if field_name not in effective:
                errors.append(ValidationIssue(
                    code=ValidationCode.MISSING_REQUIRED_PROPERTY.value,
                    message=f"Required field '{field_name}' is not a property of '{name}'",
                    element_id=f"{name}:{field_name}",
                ))

        # 5. Dependent schemas only mention real properties (ERROR)
        for trigger, fragment in sorted(document.dependent_schemas.items()):
            if trigger not in effective:
                errors.append(ValidationIssue(
                    code=ValidationCode.UNKNOWN_DEPENDENT_TRIGGER.value,
                    message=f"dependentSchemas trigger '{trigger}' is not a property of '{name}'",
                    element_id=f"{name}:{trigger}",
                ))
            for dependent in fragment.get("required", []):
                if dependent not in effective:
                    errors.append(ValidationIssue(
                        code=ValidationCode.UNKNOWN_DEPENDENT_TRIGGER.value,
                        message=(
                            f"dependentSchemas['{trigger}'] requires '{dependent}', "
                            f"which is not a property of '{name}'"
                        ),
                        element_id=f"{name}:{dependent}",
                    ))

        # 6. linkTo targets exist (ERROR)
        for prop_name, targets in sorted(collect_link_targets(effective).items()):
            for target in targets:
                if target not in titles:
                    errors.append(ValidationIssue(
                        code=ValidationCode.UNKNOWN_LINK_TARGET.value,
                        message=f"'{prop_name}' links to unknown schema '{target}'",
                        element_id=f"{name}:{prop_name}",
                    ))

        # 7. Flattened schema is a valid Draft 2020-12 schema (ERROR)
        try:
            validator_class.check_schema(resolver.resolve_schema(name))
        except SchemaError as e:
            errors.append(ValidationIssue(
                code=ValidationCode.INVALID_SCHEMA.value,
                message=f"Flattened schema '{name}' is invalid: {e.message}",
                element_id=name,
            ))

        # 8. Local redefinitions of inherited properties (WARNING)
        for prop_name, source in sorted(resolved.shadowed.items()):
            warnings.append(ValidationIssue(
                code=ValidationCode.SHADOWED_PROPERTY.value,
                message=f"'{prop_name}' is redefined locally but already inherited from '{source}'",
                element_id=f"{name}:{prop_name}",
                ref=source,
            ))

        # 9. Leaves keep their parents' required and dependent fields (WARNING)
        for parent_name in resolved.parents:
            parent = store.document(parent_name)
            for field_name in parent.required:
                if field_name not in document.required:
                    warnings.append(ValidationIssue(
                        code=ValidationCode.REQUIRED_NOT_INHERITED.value,
                        message=f"'{parent_name}' requires '{field_name}' but '{name}' does not",
                        element_id=f"{name}:{field_name}",
                    ))
            for trigger in parent.dependent_schemas:
                if trigger not in document.dependent_schemas:
                    warnings.append(ValidationIssue(
                        code=ValidationCode.DEPENDENCY_NOT_INHERITED.value,
                        message=(
                            f"'{parent_name}' declares dependentSchemas['{trigger}'] "
                            f"but '{name}' does not"
                        ),
                        element_id=f"{name}:{trigger}",
                    ))

    logger.debug("Linted %d schemas: %d errors, %d warnings",
                 len(store.schema_names()), len(errors), len(warnings))
    return errors, warnings
