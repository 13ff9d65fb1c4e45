import asyncio
import base64
import sqlite3

import pytest
from sqlalchemy.exc import IntegrityError

import rims.database
from rims.database import Database
from rims.repositories.registry import Repositories
from rims.schema import SCHEMA_VERSION, create_schema, read_schema_version, table_names, upgrade_schema
from rims.storage import MemoryStore


def test_fresh_database_creates_schema_and_snapshot(store, open_db):
    db = open_db(store)
    assert db.is_initialized
    assert store.get("rims_sqlite_db")
    tables = {row["name"] for row in db.query("SELECT name FROM sqlite_master WHERE type = 'table'")}
    assert set(table_names()) <= tables
    assert db.scalar("SELECT value FROM app_metadata WHERE key = 'schema_version'") == str(SCHEMA_VERSION)


def test_snapshot_reload_keeps_data(store, open_db):
    db = open_db(store)
    Repositories(db).items.create({"name": "Capacitor", "quantity": 4, "unitValue": 0.5})
    db.close()
    assert not db.is_initialized

    reopened = open_db(store)
    items = Repositories(reopened).items.get_all()
    assert [(i.name, i.quantity, i.value) for i in items] == [("Capacitor", 4, 2.0)]


def test_corrupt_snapshot_falls_back_to_fresh_database(caplog, open_db):
    store = MemoryStore({"rims_sqlite_db": "this is not base64!"})
    db = open_db(store)
    assert db.is_initialized
    assert Repositories(db).items.get_all() == []
    assert "Failed to load database from storage" in caplog.text
    # The broken snapshot is replaced by a valid one
    base64.b64decode(store.get("rims_sqlite_db"), validate=True)


def test_not_initialized_database_is_inert(caplog):
    store = MemoryStore()
    db = Database(store)
    assert not db.is_initialized
    assert db.query("SELECT 1") == []
    assert db.execute("DELETE FROM items") == 0
    assert db.transaction([("DELETE FROM items", ())]) == []
    assert db.persist() is False
    assert store.keys() == []
    assert "not initialized" in caplog.text

    repos = Repositories(db)
    assert repos.items.get_all() == []
    assert repos.items.create({"name": "Nothing"}) is None


def test_transaction_rolls_back_on_failure(db):
    statements = [
        ("INSERT INTO app_metadata (key, value) VALUES (?, ?)", ("a", "1")),
        ("INSERT INTO app_metadata (key, value) VALUES (?, ?)", ("a", "2")),
    ]
    with pytest.raises(IntegrityError):
        db.transaction(statements)
    assert db.query("SELECT * FROM app_metadata WHERE key = 'a'") == []


def test_execute_returns_changed_rows(db, make_item):
    make_item("A")
    make_item("B")
    assert db.execute("UPDATE items SET location = ?", ["Shelf 1"]) == 2
    assert db.execute("UPDATE items SET location = ? WHERE id = ?", ["Shelf 2", 99]) == 0


def _v1_snapshot() -> str:
    conn = sqlite3.connect(":memory:")
    conn.executescript(
        """
        CREATE TABLE app_metadata (key TEXT PRIMARY KEY, value TEXT NOT NULL);
        INSERT INTO app_metadata VALUES ('schema_version', '1');
        CREATE TABLE users (
            id INTEGER PRIMARY KEY,
            email TEXT UNIQUE NOT NULL,
            password TEXT NOT NULL,
            role TEXT NOT NULL DEFAULT 'user',
            sign_in_count INTEGER NOT NULL DEFAULT 0,
            last_sign_in_at TEXT,
            last_sign_in_ip TEXT,
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL
        );
        INSERT INTO users (id, email, password, role, created_at, updated_at)
        VALUES (1, 'old@example.com', 'x', 'admin', '2023-01-01T00:00:00.000Z', '2023-01-01T00:00:00.000Z');
        """
    )
    data = conn.serialize()
    conn.close()
    return base64.b64encode(data).decode("ascii")


def test_upgrade_from_version_one_adds_columns_and_tables(open_db):
    store = MemoryStore({"rims_sqlite_db": _v1_snapshot()})
    db = open_db(store)
    repos = Repositories(db)

    account = repos.accounts.get_by_id(1)
    assert account.email == "old@example.com"
    assert account.email_verified is False
    assert account.email_verification_token is None
    assert db.scalar("SELECT value FROM app_metadata WHERE key = 'schema_version'") == str(SCHEMA_VERSION)
    # Tables that did not exist in v1 are created
    assert repos.items.count() == 0
    assert repos.boms.count() == 0

    db.close()
    reopened = open_db(store)
    assert Repositories(reopened).accounts.get_by_id(1).role == "admin"


def test_upgrade_keeps_ids_of_existing_rows_reserved(open_db):
    db = open_db(MemoryStore({"rims_sqlite_db": _v1_snapshot()}))
    repos = Repositories(db)
    assert db.scalar("SELECT value FROM app_metadata WHERE key = 'max_id:users'") == "1"

    repos.accounts.delete(1)
    account = repos.accounts.create(
        {"email": "new@example.com", "password": "x", "createdAt": "t", "updatedAt": "t"}
    )
    assert account.id == 2


def test_schema_creation_is_idempotent(db, make_item):
    make_item("Kept")
    with db._engine.begin() as conn:
        create_schema(conn)
        create_schema(conn)
        assert upgrade_schema(conn, read_schema_version(conn)) is False
    assert [i.name for i in Repositories(db).items.get_all()] == ["Kept"]


def test_concurrent_initialize_opens_once(monkeypatch):
    opened = []
    real_create_engine = rims.database._create_engine

    def counting_create_engine(snapshot=None):
        opened.append(snapshot)
        return real_create_engine(snapshot)

    monkeypatch.setattr(rims.database, "_create_engine", counting_create_engine)
    db = Database(MemoryStore())

    async def main():
        return await asyncio.gather(db.initialize(), db.initialize(), db.initialize())

    results = asyncio.run(main())
    assert all(r is db for r in results)
    assert len(opened) == 1
    assert db.is_initialized


def test_ids_are_never_reused(store, make_item, repos, db, open_db):
    first = make_item("One")
    second = make_item("Two")
    assert (first.id, second.id) == (1, 2)

    repos.items.delete(second.id)
    assert make_item("Three").id == 3

    repos.items.delete(3)
    db.close()
    reopened = Repositories(open_db(store))
    assert reopened.items.create({"name": "Four"}).id == 4


def test_next_id_honors_explicit_ids(db, repos):
    db.execute(
        "INSERT INTO items (id, name, created_at, updated_at) VALUES (?, ?, ?, ?)",
        [7, "Imported", "2024-01-01T00:00:00.000Z", "2024-01-01T00:00:00.000Z"],
    )
    assert db.next_id("items") == 8
    assert repos.items.create({"name": "Next"}).id == 8
