import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from api.errors import register_exception_handlers
from api.health import router as health_router
from api.movies import router as movies_router
from config import settings
from core.database import engine
from models import Base

logger = logging.getLogger("uvicorn.error")


@asynccontextmanager
async def lifespan(app: FastAPI):
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info(
        "Catalog ready: environment=%s database=%s query_timeout=%ss",
        settings.ENVIRONMENT,
        engine.dialect.name,
        settings.DB_QUERY_TIMEOUT,
    )

    yield
    await engine.dispose()


app = FastAPI(title="Movie Catalog", version=settings.VERSION, lifespan=lifespan)

register_exception_handlers(app)

app.include_router(health_router)
app.include_router(movies_router)


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)
