import logging
from collections.abc import Mapping, Sequence
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from rims.database import Database
from rims.mapper import build_insert, build_update, placeholders, row_to_entity, to_program_name, to_storage_name
from rims.schema import table_columns

logger = logging.getLogger(__name__)

EntityT = TypeVar("EntityT", bound=BaseModel)


class ImmutableLedgerError(RuntimeError):
    pass


def as_fields(data: Mapping[str, Any] | BaseModel, exclude_unset: bool = False) -> dict[str, Any]:
    """Program-name (camelCase) attribute map from a schema object or a plain mapping.

    Plain mappings may use either naming convention.
    """
    if isinstance(data, BaseModel):
        return data.model_dump(by_alias=True, exclude_unset=exclude_unset)
    return {to_program_name(key): value for key, value in data.items()}


class BaseRepository(Generic[EntityT]):
    """Generic CRUD over one table whose rows map onto ``model``."""

    table_name: str
    model: type[EntityT]
    json_fields: tuple[str, ...] = ()

    def __init__(self, db: Database):
        self.db = db
        self.columns = table_columns(self.table_name)

    def _check_columns(self, fields: Mapping[str, Any]) -> None:
        unknown = [key for key in fields if to_storage_name(key) not in self.columns]
        if unknown:
            raise ValueError(f"Unknown column(s) for {self.table_name}: {', '.join(unknown)}")

    def to_entity(self, row: Mapping[str, Any]) -> EntityT:
        return self.model.model_validate(row_to_entity(row, self.json_fields))

    def query(self, sql: str, params: Sequence[Any] = ()) -> list[EntityT]:
        return [self.to_entity(row) for row in self.db.query(sql, params)]

    def query_one(self, sql: str, params: Sequence[Any] = ()) -> EntityT | None:
        results = self.query(sql, params)
        return results[0] if results else None

    def get_all(self) -> list[EntityT]:
        return self.query(f"SELECT * FROM {self.table_name}")

    def get_by_id(self, entity_id: int) -> EntityT | None:
        return self.query_one(f"SELECT * FROM {self.table_name} WHERE id = ?", [entity_id])

    def create(self, data: Mapping[str, Any] | BaseModel) -> EntityT | None:
        """Insert with the next free id and return the row as stored.

        Returns None only while the database is not open yet.
        """
        fields = as_fields(data)
        fields.pop("id", None)
        self._check_columns(fields)
        entity_id = self.db.next_id(self.table_name)
        sql, params = build_insert(self.table_name, {"id": entity_id, **fields}, self.json_fields)
        self.db.transaction([(sql, params), self.db.id_watermark_statement(self.table_name, entity_id)])
        return self.get_by_id(entity_id)

    def update(self, entity_id: int, data: Mapping[str, Any] | BaseModel) -> EntityT | None:
        existing = self.get_by_id(entity_id)
        if existing is None:
            return None
        fields = as_fields(data, exclude_unset=True)
        fields.pop("id", None)
        if not fields:
            return existing
        self._check_columns(fields)
        sql, params = build_update(self.table_name, fields, "id = ?", [entity_id], self.json_fields)
        self.db.execute(sql, params)
        return self.get_by_id(entity_id)

    def delete(self, entity_id: int) -> bool:
        return self.db.execute(f"DELETE FROM {self.table_name} WHERE id = ?", [entity_id]) > 0

    def delete_many(self, ids: Sequence[int]) -> int:
        if not ids:
            return 0
        ids = list(ids)
        return self.db.execute(f"DELETE FROM {self.table_name} WHERE id IN ({placeholders(len(ids))})", ids)

    def count(self) -> int:
        return int(self.db.scalar(f"SELECT COUNT(*) AS count FROM {self.table_name}", default=0))


class LedgerRepository(BaseRepository[EntityT]):
    """Append-only table: rows can be added and bulk-cleared, never edited."""

    def update(self, entity_id: int, data: Mapping[str, Any] | BaseModel) -> EntityT | None:
        raise ImmutableLedgerError(f"{self.table_name} entries cannot be updated")

    def delete(self, entity_id: int) -> bool:
        raise ImmutableLedgerError(f"{self.table_name} entries cannot be deleted individually")

    def delete_many(self, ids: Sequence[int]) -> int:
        raise ImmutableLedgerError(f"{self.table_name} entries cannot be deleted individually")
