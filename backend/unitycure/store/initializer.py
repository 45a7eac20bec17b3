import asyncio
import logging
from unitycure.config import Settings
from unitycure.exceptions import StoreUnavailableException
from unitycure.store.handle import MySQLStore, SQLiteStore, StoreHandle

logger = logging.getLogger(__name__)

PRIMARY_STORE = MySQLStore
FALLBACK_STORE = SQLiteStore


async def initialize(settings: Settings) -> StoreHandle:
    """
    Open the primary store, or the embedded fallback if the primary is
    unreachable for any reason. Call once per process and pass the handle down.
    """
    try:
        store = await asyncio.wait_for(
            PRIMARY_STORE.from_settings(settings),
            # Covers the database-create round trip on top of the connect itself
            timeout=settings.db_connect_timeout * 2,
        )
        logger.info("Primary %s store ready at %s", store.kind, store.location)
        return store
    except Exception as e:
        logger.warning(
            "Primary store unavailable (%s: %s), falling back to %s",
            type(e).__name__, e, settings.fallback_db_path,
        )
        primary_error = e

    try:
        store = await FALLBACK_STORE.from_settings(settings)
    except Exception as e:
        logger.critical("Fallback store failed to open: %s", e)
        raise StoreUnavailableException(
            "primary and fallback stores both failed",
            details={"primary": repr(primary_error), "fallback": repr(e)},
        ) from e

    logger.info("Fallback %s store ready at %s", store.kind, store.location)
    return store
