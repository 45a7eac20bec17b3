import logging
from contextlib import asynccontextmanager
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from unitycure.bootstrap import bootstrap
from unitycure.config import get_settings
from unitycure.database import get_store
from unitycure.logging_config import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    configure_logging(settings.log_level)
    # Startup: StoreUnavailableException propagates so the server never serves traffic
    try:
        app.state.store = await bootstrap(settings)
    except Exception:
        logger.critical("Database initialization failed, refusing to start", exc_info=True)
        raise
    yield
    # Shutdown
    await app.state.store.dispose()


app = FastAPI(
    title="UnityCure",
    description="Healthcare directory backend",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/api/health")
async def health_check(store=Depends(get_store)):
    return {"status": "healthy", "service": "unitycure", "store": store.kind}
