import logging

from rims.config import settings
from rims.database import Database
from rims.migration import has_legacy_data, migrate_legacy_data, verify_migration
from rims.repositories.registry import Repositories
from rims.seed import is_empty, seed_database

logger = logging.getLogger(__name__)


async def initialize_app_data(db: Database, seed: bool | None = None) -> Repositories:
    """Startup sequence: open the database, then migrate legacy data or seed an empty store."""
    await db.initialize()
    repos = Repositories(db)

    if has_legacy_data(db.store):
        logger.info("Legacy key-value data found, migrating")
        migrate_legacy_data(repos, db.store)
        verification = verify_migration(repos)
        if not verification.valid:
            logger.warning("Legacy migration produced no rows: %s", verification.counts)
    elif (settings.SEED_DEMO_DATA if seed is None else seed) and is_empty(repos):
        seed_database(repos)

    return repos
