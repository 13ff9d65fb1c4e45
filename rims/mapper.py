"""Column mapping between program names (camelCase) and storage names (snake_case).

Composite values listed as JSON fields are packed into TEXT columns on the way
in and unpacked on the way out. Nothing here raises on bad data: a JSON column
that does not parse is handed back as the raw string.
"""

import json
import re
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

_UPPER = re.compile(r"[A-Z]")
_UNDERSCORE_LOWER = re.compile(r"_([a-z])")


def to_storage_name(name: str) -> str:
    return _UPPER.sub(lambda m: "_" + m.group().lower(), name)


def to_program_name(name: str) -> str:
    return _UNDERSCORE_LOWER.sub(lambda m: m.group(1).upper(), name)


def row_to_entity(row: Mapping[str, Any], json_fields: Iterable[str] = ()) -> dict[str, Any]:
    json_fields = set(json_fields)
    entity: dict[str, Any] = {}
    for key, value in row.items():
        name = to_program_name(key)
        if name in json_fields and isinstance(value, str):
            try:
                value = json.loads(value)
            except ValueError:
                pass
        entity[name] = value
    return entity


def rows_to_entities(rows: Iterable[Mapping[str, Any]], json_fields: Iterable[str] = ()) -> list[dict[str, Any]]:
    json_fields = tuple(json_fields)
    return [row_to_entity(row, json_fields) for row in rows]


def entity_to_row(entity: Mapping[str, Any], json_fields: Iterable[str] = ()) -> dict[str, Any]:
    json_fields = set(json_fields)
    row: dict[str, Any] = {}
    for key, value in entity.items():
        if key in json_fields and isinstance(value, (dict, list)):
            value = json.dumps(value)
        row[to_storage_name(key)] = value
    return row


def build_insert(
    table: str, entity: Mapping[str, Any], json_fields: Iterable[str] = ()
) -> tuple[str, list[Any]]:
    row = entity_to_row(entity, json_fields)
    columns = ", ".join(row)
    placeholders = ", ".join("?" for _ in row)
    return f"INSERT INTO {table} ({columns}) VALUES ({placeholders})", list(row.values())


def build_update(
    table: str,
    entity: Mapping[str, Any],
    where_clause: str,
    where_params: Sequence[Any],
    json_fields: Iterable[str] = (),
) -> tuple[str, list[Any]]:
    row = entity_to_row(entity, json_fields)
    assignments = ", ".join(f"{column} = ?" for column in row)
    return f"UPDATE {table} SET {assignments} WHERE {where_clause}", [*row.values(), *where_params]


def placeholders(count: int) -> str:
    return ", ".join("?" for _ in range(count))
