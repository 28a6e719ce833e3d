# storefront/main.py
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from storefront.api import create_app
from storefront.api.deps import open_storage
from storefront.data.database import init_db
from storefront.data.seed import seed
from storefront.utils.settings import SEED_DEMO_DATA, STORAGE_BACKEND
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting storefront, storage backend: {STORAGE_BACKEND}")

    if STORAGE_BACKEND == "sql":
        try:
            init_db()
            logger.info("Database tables created")
        except Exception as e:
            logger.error(f"Failed to create tables: {e}")
            raise

    if SEED_DEMO_DATA:
        with open_storage() as storage:
            seed(storage)

    yield


app = create_app(lifespan=lifespan)

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
