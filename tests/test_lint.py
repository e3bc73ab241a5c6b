"""Tests for schema collection lint checks."""

import json

from biomodel.api import lint
from biomodel.codes import ValidationCode


def codes(issues):
    return [issue.code for issue in issues]


def test_shipped_schemas_lint_clean():
    result = lint()
    assert result.ok
    assert result.errors == []
    assert result.warnings == []


def test_clean_collection(write_schemas, schema_doc):
    schemas_dir = write_schemas({
        "Lab.json": schema_doc("Lab", properties={"name": {"type": "string"}}, required=["name"]),
        "Thing.json": schema_doc(
            "Thing",
            mixins=["mixins.json#/basic_item", "mixins.json#/attribution"],
            required=["lab"],
        ),
    })
    result = lint(schemas_dir)
    assert result.ok
    assert result.warnings == []


def test_missing_basic_item(write_schemas, schema_doc):
    schemas_dir = write_schemas({
        "Thing.json": schema_doc("Thing", mixins=["mixins.json#/attribution", "mixins.json#/basic_item"]),
        "Lab.json": schema_doc("Lab"),
    })
    result = lint(schemas_dir)
    assert codes(result.errors) == [ValidationCode.MISSING_BASIC_ITEM.value]
    assert result.errors[0].element_id == "Thing.json"


def test_unresolved_ref(write_schemas, schema_doc):
    schemas_dir = write_schemas({
        "Thing.json": schema_doc("Thing", mixins=["mixins.json#/basic_item", "mixins.json#/nope"]),
    })
    result = lint(schemas_dir)
    assert not result.ok
    assert codes(result.errors) == [ValidationCode.UNRESOLVED_REF.value]
    assert result.errors[0].ref == "mixins.json#/nope"


def test_cycle_detected(write_schemas, schema_doc):
    schemas_dir = write_schemas({
        "A.json": schema_doc("A", mixins=["mixins.json#/basic_item", "B.json#/properties"]),
        "B.json": schema_doc("B", mixins=["mixins.json#/basic_item", "A.json#/properties"]),
    })
    result = lint(schemas_dir)
    assert codes(result.errors) == [ValidationCode.CYCLE_DETECTED.value] * 2
    by_element = {issue.element_id: issue.cycle_path for issue in result.errors}
    assert by_element["A.json"] == ["A.json", "B.json", "A.json"]
    assert by_element["B.json"] == ["B.json", "A.json", "B.json"]


def test_required_field_must_exist(write_schemas, schema_doc):
    schemas_dir = write_schemas({
        "Thing.json": schema_doc("Thing", required=["name", "uuid", "name"]),
    })
    result = lint(schemas_dir)
    # Draft 2020-12 also demands unique entries in required
    assert codes(result.errors) == [
        ValidationCode.DUPLICATE_REQUIRED.value,
        ValidationCode.INVALID_SCHEMA.value,
        ValidationCode.MISSING_REQUIRED_PROPERTY.value,
    ]
    assert [issue.element_id for issue in result.errors] == [
        "Thing.json:name",
        "Thing.json",
        "Thing.json:name",
    ]


def test_unknown_dependent_trigger(write_schemas, schema_doc):
    schemas_dir = write_schemas({
        "Thing.json": schema_doc(
            "Thing",
            properties={"amount": {"type": "number"}},
            dependentSchemas={
                "amount": {"required": ["amount_units"]},
                "ghost": {"required": ["amount"]},
            },
        ),
    })
    result = lint(schemas_dir)
    assert codes(result.errors) == [ValidationCode.UNKNOWN_DEPENDENT_TRIGGER.value] * 2
    assert [issue.element_id for issue in result.errors] == [
        "Thing.json:amount_units",
        "Thing.json:ghost",
    ]


def test_unknown_link_target(write_schemas, schema_doc):
    # attribution.lab links to Lab, which this collection lacks
    schemas_dir = write_schemas({
        "Thing.json": schema_doc(
            "Thing",
            mixins=["mixins.json#/basic_item", "mixins.json#/attribution"],
            properties={"parts": {"type": "array", "items": {"type": "string", "linkTo": ["Thing", "Widget"]}}},
        ),
    })
    result = lint(schemas_dir)
    assert codes(result.errors) == [ValidationCode.UNKNOWN_LINK_TARGET.value] * 2
    assert [issue.element_id for issue in result.errors] == ["Thing.json:lab", "Thing.json:parts"]


def test_invalid_flattened_schema(write_schemas, schema_doc):
    schemas_dir = write_schemas({
        "Thing.json": schema_doc("Thing", properties={"size": {"type": "size"}}),
    })
    result = lint(schemas_dir)
    assert codes(result.errors) == [ValidationCode.INVALID_SCHEMA.value]
    assert result.errors[0].element_id == "Thing.json"


def test_invalid_structure_in_document(write_schemas, schema_doc):
    schemas_dir = write_schemas({
        "Thing.json": schema_doc("Thing", required="uuid"),
    })
    result = lint(schemas_dir)
    assert codes(result.errors) == [ValidationCode.INVALID_STRUCTURE.value]


def test_invalid_json_file(write_schemas):
    schemas_dir = write_schemas({"Broken.json": "{not json"})
    result = lint(schemas_dir)
    assert not result.ok
    assert codes(result.errors) == [ValidationCode.INVALID_STRUCTURE.value]
    assert result.errors[0].element_id == "Broken.json"


def test_shadowed_property_warning(write_schemas, schema_doc):
    schemas_dir = write_schemas({
        "Thing.json": schema_doc("Thing", properties={"uuid": {"type": "string", "format": "uuid"}}),
    })
    result = lint(schemas_dir)
    assert result.ok
    assert codes(result.warnings) == [ValidationCode.SHADOWED_PROPERTY.value]
    assert result.warnings[0].element_id == "Thing.json:uuid"
    assert result.warnings[0].ref == "mixins.json#/basic_item"


def test_leaf_dropping_parent_requirements_warns(write_schemas, schema_doc):
    schemas_dir = write_schemas({
        "Base.json": schema_doc(
            "Base",
            properties={"amount": {"type": "number"}, "amount_units": {"type": "string"}},
            required=["amount"],
            dependentSchemas={"amount": {"required": ["amount_units"]}},
        ),
        "Leaf.json": schema_doc("Leaf", mixins=["mixins.json#/basic_item", "Base.json#/properties"]),
    })
    result = lint(schemas_dir)
    assert result.ok
    assert codes(result.warnings) == [
        ValidationCode.DEPENDENCY_NOT_INHERITED.value,
        ValidationCode.REQUIRED_NOT_INHERITED.value,
    ]
    assert {issue.element_id for issue in result.warnings} == {"Leaf.json:amount"}


def test_lint_is_read_only(write_schemas, schema_doc):
    schemas_dir = write_schemas({"Thing.json": schema_doc("Thing", required=["ghost"])})
    before = {p.name: p.read_text(encoding="utf-8") for p in schemas_dir.iterdir()}
    lint(schemas_dir)
    after = {p.name: p.read_text(encoding="utf-8") for p in schemas_dir.iterdir()}
    assert before == after


def test_issues_sorted_by_code_then_element(write_schemas, schema_doc):
    schemas_dir = write_schemas({
        "B.json": schema_doc("B", required=["ghost"]),
        "A.json": schema_doc("A", required=["ghost"], properties={"x": {"linkTo": "Nowhere"}}),
    })
    result = lint(schemas_dir)
    keys = [(issue.code, issue.element_id, issue.message) for issue in result.errors]
    assert keys == sorted(keys)
    assert json.loads(result.model_dump_json())["ok"] is False


def test_non_ascii_pointer_index_is_unresolved(write_schemas, schema_doc):
    mixins = {"basic_item": {}, "lst": [{"a": {"type": "string"}}]}
    schemas_dir = write_schemas({
        "Thing.json": schema_doc("Thing", mixins=["mixins.json#/basic_item", "mixins.json#/lst/²"]),
    }, mixins=mixins)
    result = lint(schemas_dir)
    assert codes(result.errors) == [ValidationCode.UNRESOLVED_REF.value]
    assert result.errors[0].ref == "mixins.json#/lst/²"
