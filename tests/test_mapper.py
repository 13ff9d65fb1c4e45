import pytest

from rims.mapper import (
    build_insert,
    build_update,
    entity_to_row,
    placeholders,
    row_to_entity,
    rows_to_entities,
    to_program_name,
    to_storage_name,
)


def test_storage_and_program_names():
    assert to_storage_name("unitValue") == "unit_value"
    assert to_storage_name("emailVerificationTokenExpiresAt") == "email_verification_token_expires_at"
    assert to_storage_name("id") == "id"
    assert to_program_name("reorder_point") == "reorderPoint"
    assert to_program_name("last_sign_in_ip") == "lastSignInIp"
    assert to_program_name("name") == "name"


def test_row_to_entity_unpacks_json_fields():
    row = {"id": 1, "name": "Kit", "items": '[{"itemId": 2, "quantity": 3}]', "created_at": "x"}
    entity = row_to_entity(row, ("items",))
    assert entity == {"id": 1, "name": "Kit", "items": [{"itemId": 2, "quantity": 3}], "createdAt": "x"}


def test_row_to_entity_keeps_unparseable_json_as_string():
    entity = row_to_entity({"default_fields": "{not json"}, ("defaultFields",))
    assert entity["defaultFields"] == "{not json"


def test_non_json_fields_are_left_alone():
    entity = row_to_entity({"notes": "[1, 2]"}, ())
    assert entity["notes"] == "[1, 2]"


def test_entity_to_row_packs_composites():
    row = entity_to_row({"defaultFields": {"location": "A1"}, "name": "T"}, ("defaultFields",))
    assert row == {"default_fields": '{"location": "A1"}', "name": "T"}


def test_build_insert_and_update():
    sql, params = build_insert("items", {"id": 4, "unitValue": 1.5})
    assert sql == "INSERT INTO items (id, unit_value) VALUES (?, ?)"
    assert params == [4, 1.5]

    sql, params = build_update("items", {"quantity": 2, "updatedAt": "t"}, "id = ?", [4])
    assert sql == "UPDATE items SET quantity = ?, updated_at = ? WHERE id = ?"
    assert params == [2, "t", 4]


def test_placeholders():
    assert placeholders(3) == "?, ?, ?"
    assert placeholders(0) == ""


def test_rows_to_entities():
    rows = [{"item_id": 1, "items": "[]"}, {"item_id": 2, "items": "[1]"}]
    assert rows_to_entities(rows, ["items"]) == [{"itemId": 1, "items": []}, {"itemId": 2, "items": [1]}]


def test_documented_name_cases():
    assert to_storage_name("emailVerificationToken") == "email_verification_token"
    assert to_program_name("created_at") == "createdAt"


@pytest.mark.parametrize(
    "name",
    ["id", "created_at", "email_verification_token_expires_at", "sign_in_count", "item_id", "reorder_point"],
)
def test_snake_case_names_survive_a_round_trip(name):
    assert to_storage_name(to_program_name(name)) == name


@pytest.mark.parametrize(
    ("entity", "json_fields"),
    [
        (
            {"id": 3, "name": "Robot", "items": [{"itemId": 7, "quantity": 2, "notes": ""}], "createdAt": "t"},
            ("items",),
        ),
        (
            {"id": 1, "category": "Passives", "defaultFields": {"location": "R1", "reorderPoint": 5}},
            ("defaultFields",),
        ),
        ({"id": 2, "items": [], "description": None}, ("items",)),
    ],
)
def test_entity_survives_row_round_trip(entity, json_fields):
    assert row_to_entity(entity_to_row(entity, json_fields), json_fields) == entity
