import logging

from sqlalchemy import Connection, inspect

logger = logging.getLogger(__name__)

# v2: e-mail verification columns; v3: id high-water marks seeded from existing rows
SCHEMA_VERSION = 3

SCHEMA_VERSION_KEY = "schema_version"

ID_WATERMARK_PREFIX = "max_id:"

# Only ever raises the stored mark
ID_WATERMARK_UPSERT = (
    "INSERT INTO app_metadata (key, value) VALUES (?, ?) "
    "ON CONFLICT(key) DO UPDATE SET value = excluded.value "
    "WHERE CAST(excluded.value AS INTEGER) > CAST(app_metadata.value AS INTEGER)"
)

INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_items_category ON items(category)",
    "CREATE INDEX IF NOT EXISTS idx_items_barcode ON items(barcode)",
    "CREATE INDEX IF NOT EXISTS idx_stock_history_item_id ON stock_history(item_id)",
    "CREATE INDEX IF NOT EXISTS idx_stock_history_timestamp ON stock_history(timestamp)",
    "CREATE INDEX IF NOT EXISTS idx_cost_history_item_id ON cost_history(item_id)",
    "CREATE INDEX IF NOT EXISTS idx_vendor_cache_key ON vendor_price_cache(cache_key)",
    "CREATE INDEX IF NOT EXISTS idx_item_templates_category ON item_templates(category)",
]

# Columns introduced after a table first shipped, keyed by the schema version
# that introduced them. Upgrades only ever add columns.
ADDED_COLUMNS: dict[int, dict[str, dict[str, str]]] = {
    2: {
        "users": {
            "email_verified": "INTEGER NOT NULL DEFAULT 0",
            "email_verification_token": "TEXT",
            "email_verification_token_expires_at": "TEXT",
        },
    },
}


def _load_models():
    # Import all models so Base.metadata knows about them
    import rims.models.account  # noqa: F401
    import rims.models.app_metadata  # noqa: F401
    import rims.models.bom  # noqa: F401
    import rims.models.cost_history  # noqa: F401
    import rims.models.item  # noqa: F401
    import rims.models.item_template  # noqa: F401
    import rims.models.stock_history  # noqa: F401
    import rims.models.vendor_price_cache  # noqa: F401
    from rims.database import Base

    return Base.metadata


def table_names() -> list[str]:
    return [t.name for t in _load_models().sorted_tables]


def table_columns(table: str) -> frozenset[str]:
    return frozenset(_load_models().tables[table].columns.keys())


def create_schema(conn: Connection) -> None:
    """Create missing tables and indexes. Safe to run any number of times."""
    _load_models().create_all(conn, checkfirst=True)
    for ddl in INDEXES:
        conn.exec_driver_sql(ddl)


def read_schema_version(conn: Connection) -> int:
    if not inspect(conn).has_table("app_metadata"):
        return 0
    row = conn.exec_driver_sql(
        "SELECT value FROM app_metadata WHERE key = ?", (SCHEMA_VERSION_KEY,)
    ).first()
    return int(row[0]) if row else 0


def write_schema_version(conn: Connection, version: int = SCHEMA_VERSION) -> None:
    conn.exec_driver_sql(
        "INSERT OR REPLACE INTO app_metadata (key, value) VALUES (?, ?)",
        (SCHEMA_VERSION_KEY, str(version)),
    )


def _add_missing_columns(conn: Connection, version: int) -> None:
    inspector = inspect(conn)
    tables = inspector.get_table_names()
    for table, new_cols in ADDED_COLUMNS.get(version, {}).items():
        if table not in tables:
            continue
        existing = {col["name"] for col in inspector.get_columns(table)}
        for col_name, col_type in new_cols.items():
            if col_name not in existing:
                conn.exec_driver_sql(f"ALTER TABLE {table} ADD COLUMN {col_name} {col_type}")
                logger.info("Added column %s.%s (schema v%d)", table, col_name, version)


def seed_id_watermarks(conn: Connection) -> None:
    """Raise every table's id high-water mark to at least its current MAX(id).

    Rows written before marks existed, or inserted with explicit ids, would
    otherwise let a deleted top id be handed out again.
    """
    for table in _load_models().sorted_tables:
        if "id" not in table.columns:
            continue
        max_id = conn.exec_driver_sql(f"SELECT COALESCE(MAX(id), 0) FROM {table.name}").scalar()
        if max_id:
            conn.exec_driver_sql(ID_WATERMARK_UPSERT, (ID_WATERMARK_PREFIX + table.name, str(max_id)))


def upgrade_schema(conn: Connection, current_version: int) -> bool:
    """Bring a stored schema up to SCHEMA_VERSION. Returns True if anything ran."""
    if current_version >= SCHEMA_VERSION:
        return False
    logger.info("Migrating database from version %d to %d", current_version, SCHEMA_VERSION)
    create_schema(conn)
    for version in range(current_version + 1, SCHEMA_VERSION + 1):
        _add_missing_columns(conn, version)
    seed_id_watermarks(conn)
    write_schema_version(conn)
    return True
