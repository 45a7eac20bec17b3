import logging
from unitycure.config import Settings
from unitycure.services.migration_service import MigrationService
from unitycure.services.seed_service import seed
from unitycure.store.handle import StoreHandle
from unitycure.store.initializer import initialize

logger = logging.getLogger(__name__)


async def bootstrap(settings: Settings) -> StoreHandle:
    """Open a store, import any legacy data, then seed empty tables."""
    store = await initialize(settings)
    try:
        await MigrationService(store).migrate_legacy(settings.legacy_db_path)
        await seed(store)
    except Exception:
        await store.dispose()
        raise
    logger.info("Database initialization completed (%s)", store.kind)
    return store
