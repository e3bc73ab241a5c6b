"""Example fixture round trip: valid-* must pass, invalid-* must fail."""

import json
import logging
from pathlib import Path
from typing import List, Union

from pydantic import BaseModel, Field

from .validator import InstanceError, InstanceValidator

logger = logging.getLogger(__name__)

VALID_PREFIX = "valid-"
INVALID_PREFIX = "invalid-"


class ExampleCase(BaseModel):
    """One fixture file: `<root>/<SchemaTitle>/(valid|invalid)-*.json`."""
    path: Path
    schema_name: str
    expected_valid: bool


class ExampleOutcome(BaseModel):
    """Result of validating one fixture."""
    case: ExampleCase
    errors: List[InstanceError] = Field(default_factory=list)

    @property
    def matched(self) -> bool:
        return self.case.expected_valid == (not self.errors)


class ExampleReport(BaseModel):
    """Round-trip result over a fixture tree."""
    ok: bool
    outcomes: List[ExampleOutcome]
    mismatches: List[str]  # sorted fixture paths, relative to the root


def discover_examples(root: Union[str, Path]) -> List[ExampleCase]:
    """Find fixture files under `root`, sorted by path.

    The parent directory names the schema; the file name prefix says whether
    the record is expected to validate. Files with neither prefix are skipped.
    """
    root = Path(root)
    if not root.is_dir():
        raise FileNotFoundError(f"Examples directory not found: {root}")
    cases = []
    for path in sorted(root.glob("*/*.json")):
        if path.name.startswith(VALID_PREFIX):
            expected_valid = True
        elif path.name.startswith(INVALID_PREFIX):
            expected_valid = False
        else:
            logger.warning("Ignoring fixture without valid-/invalid- prefix: %s", path)
            continue
        cases.append(ExampleCase(path=path, schema_name=path.parent.name, expected_valid=expected_valid))
    return cases


def check_examples(validator: InstanceValidator, root: Union[str, Path]) -> ExampleReport:
    """Validate every fixture under `root` against its schema."""
    root = Path(root)
    outcomes = []
    mismatches = []
    for case in discover_examples(root):
        with open(case.path, "r", encoding="utf-8") as f:
            instance = json.load(f)
        outcome = ExampleOutcome(case=case, errors=validator.validate(case.schema_name, instance))
        outcomes.append(outcome)
        if not outcome.matched:
            mismatches.append(case.path.relative_to(root).as_posix())
    return ExampleReport(ok=not mismatches, outcomes=outcomes, mismatches=sorted(mismatches))
