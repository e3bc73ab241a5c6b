"""Instance validation delegated to the jsonschema library.

Every schema and fragment file is registered in a `referencing.Registry`
under its file name, so relative `"<File>.json#/<pointer>"` refs resolve
locally. Validation always runs against the flattened schema produced by
the mixin resolver.
"""

import logging
from typing import Any, Dict, Iterable, Iterator, List, Optional

from jsonschema import Draft202012Validator, FormatChecker, validators
from pydantic import BaseModel
from referencing import Registry, Resource
from referencing.jsonschema import DRAFT202012

from biomodel.config import BiomodelSettings, get_settings
from .mixins import MixinResolver

logger = logging.getLogger(__name__)


class InstanceError(BaseModel):
    """A single validation failure: where, which rule, and why."""
    path: str  # JSON pointer into the instance, "" for the root
    rule: str  # failing keyword, e.g. "required", "enum", "dependentSchemas"
    message: str


def _ignore_keyword(validator, value, instance, schema):
    """No-op keyword: tooling metadata that never constrains instances."""
    return None


def build_validator_class(custom_keywords: Iterable[str]):
    """Draft 2020-12 validator with the custom keywords registered as no-ops."""
    return validators.extend(
        Draft202012Validator,
        validators={keyword: _ignore_keyword for keyword in custom_keywords},
    )


def build_registry(store) -> Registry:
    """Register every file of the store under its file name."""
    resources = [
        (name, Resource.from_contents(store.raw(name), default_specification=DRAFT202012))
        for name in store.file_names()
    ]
    return Registry().with_resources(resources)


def _json_pointer(parts: Iterable[Any]) -> str:
    tokens = [str(part).replace("~", "~0").replace("/", "~1") for part in parts]
    return "".join(f"/{token}" for token in tokens)


class InstanceValidator:
    """Validates instance records against the effective schemas of a store.

    All errors are collected; validation never stops at the first failure.
    """

    def __init__(
        self,
        store,
        settings: Optional[BiomodelSettings] = None,
        resolver: Optional[MixinResolver] = None,
    ):
        self.store = store
        self.settings = settings or get_settings()
        self.resolver = resolver or MixinResolver(store)
        self.validator_class = build_validator_class(self.settings.custom_keywords)
        self.registry = build_registry(store)
        self.format_checker = FormatChecker() if self.settings.validate_formats else None
        self._validators: Dict[str, Any] = {}

    def validator_for(self, schema_name: str):
        file_name = self.store.lookup(schema_name)
        if file_name not in self._validators:
            schema = self.resolver.resolve_schema(file_name)
            self._validators[file_name] = self.validator_class(
                schema,
                registry=self.registry,
                format_checker=self.format_checker,
            )
            logger.debug("Built validator for %s", file_name)
        return self._validators[file_name]

    def iter_errors(self, schema_name: str, instance: Any) -> Iterator[InstanceError]:
        validator = self.validator_for(schema_name)
        for error in validator.iter_errors(instance):
            yield InstanceError(
                path=_json_pointer(error.absolute_path),
                rule=str(error.validator),
                message=error.message,
            )

    def validate(self, schema_name: str, instance: Any) -> List[InstanceError]:
        """Return all errors, sorted by (path, rule, message)."""
        errors = list(self.iter_errors(schema_name, instance))
        return sorted(errors, key=lambda e: (e.path, e.rule, e.message))

    def is_valid(self, schema_name: str, instance: Any) -> bool:
        return self.validator_for(schema_name).is_valid(instance)
