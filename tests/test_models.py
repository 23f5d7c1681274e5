import pytest
from datahub_mcp.core.models import (
    Database,
    FieldConfig,
    FieldInput,
    FieldValueInput,
    RecordInput,
    Space,
    field_values,
)
from pydantic import ValidationError


def test_field_input_flattens_config():
    field = FieldInput.model_validate(
        {
            "title": "Status",
            "type": "singleSelect",
            "config": {
                "allowedEnumValues": [
                    {"name": "Open", "color": "Green"},
                    {"name": "Closed"},
                ]
            },
        }
    )

    assert field.to_payload() == {
        "title": "Status",
        "type": "singleSelect",
        "allowedEnumValues": [{"name": "Open", "color": "Green"}, {"name": "Closed"}],
    }


def test_field_input_without_config():
    assert FieldInput(title="Notes", type="text").to_payload() == {
        "title": "Notes",
        "type": "text",
    }


def test_field_config_link_and_formula_members():
    link = FieldConfig.model_validate(
        {
            "databaseId": "DB2",
            "allowMultipleEntries": True,
            "mirrorFields": [{"title": "Owner", "fieldId": "FI3"}],
        }
    )
    assert link.to_payload() == {
        "databaseId": "DB2",
        "allowMultipleEntries": True,
        "mirrorFields": [{"title": "Owner", "fieldId": "FI3"}],
    }

    formula = FieldConfig(formula="FI1 * 2", format="number")
    assert formula.to_payload() == {"formula": "FI1 * 2", "format": "number"}


def test_field_config_keeps_unknown_members():
    config = FieldConfig.model_validate({"currencyCode": "EUR"})
    assert config.to_payload() == {"currencyCode": "EUR"}


def test_field_input_rejects_unknown_type_and_color():
    with pytest.raises(ValidationError):
        FieldInput(title="x", type="spreadsheet")
    with pytest.raises(ValidationError):
        FieldConfig.model_validate(
            {"allowedEnumValues": [{"name": "a", "color": "Pink"}]}
        )


def test_record_input_flattens_field_values():
    record = RecordInput.model_validate(
        {
            "title": "Row",
            "fields": [
                {"fieldId": "FI1", "value": 3},
                {"fieldId": "FI2", "value": ["RE1", "RE2"]},
            ],
        }
    )
    assert record.to_payload() == {
        "title": "Row",
        "fieldValues": {"FI1": 3, "FI2": ["RE1", "RE2"]},
    }
    bare = RecordInput(title="Bare").to_payload()
    assert bare == {"title": "Bare", "fieldValues": {}}


def test_field_values_last_entry_wins():
    fields = [
        FieldValueInput(field_id="FI1", value="a"),
        FieldValueInput(field_id="FI1", value="b"),
    ]
    assert field_values(fields) == {"FI1": "b"}
    assert field_values(None) == {}


def test_output_models_dump_with_aliases():
    space = Space(root_folder_id="FO1", title="S", type="Public")
    assert space.model_dump(by_alias=True) == {
        "rootFolderId": "FO1",
        "title": "S",
        "type": "Public",
    }

    database = Database(database_id="DB1", title="D", root_folder_id="FO1")
    assert database.model_dump(by_alias=True, exclude_none=True) == {
        "databaseId": "DB1",
        "title": "D",
        "rootFolderId": "FO1",
    }
