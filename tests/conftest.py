"""Pytest configuration for tests.

No sys.path hacks - tests should import from installed biomodel package.
"""

import json
from pathlib import Path

import pytest

from biomodel._internal.io.schema_store import SchemaStore
from biomodel.config import get_settings

DRAFT = "https://json-schema.org/draft/2020-12/schema"


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch):
    """Isolate tests from BIOMODEL_* variables and the settings cache."""
    for var in ("BIOMODEL_SCHEMAS_DIR", "BIOMODEL_EXAMPLES_DIR", "BIOMODEL_VALIDATE_FORMATS",
                "BIOMODEL_CUSTOM_KEYWORDS", "BIOMODEL_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(scope="session")
def store():
    """The schema collection shipped with the package."""
    return SchemaStore.default()


def make_schema(title, properties=None, mixins=None, required=None, **extra):
    """Build a minimal schema document."""
    schema = {
        "$schema": DRAFT,
        "title": title,
        "type": "object",
        "required": required or [],
        "additionalProperties": False,
        "mixinProperties": [{"$ref": ref} for ref in (mixins or ["mixins.json#/basic_item"])],
        "properties": properties or {},
    }
    schema.update(extra)
    return schema


BASIC_MIXINS = {
    "basic_item": {
        "uuid": {"type": "string"},
        "schema_version": {"type": "string"},
    },
    "attribution": {
        "lab": {"type": "string", "linkTo": "Lab"},
    },
}


@pytest.fixture
def write_schemas(tmp_path):
    """Factory writing an ad-hoc schema collection and returning its directory.

    `mixins.json` defaults to a small basic_item/attribution fragment file.
    """
    def _write(documents, mixins=None):
        schemas_dir = tmp_path / "schemas"
        schemas_dir.mkdir(exist_ok=True)
        (schemas_dir / "mixins.json").write_text(
            json.dumps(BASIC_MIXINS if mixins is None else mixins), encoding="utf-8"
        )
        for file_name, document in documents.items():
            content = document if isinstance(document, str) else json.dumps(document, indent=2)
            (schemas_dir / file_name).write_text(content, encoding="utf-8")
        return schemas_dir
    return _write


@pytest.fixture
def schema_doc():
    """Access to the `make_schema` builder from tests."""
    return make_schema
