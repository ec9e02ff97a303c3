from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.v1 import index
from app.api.v1 import eco_score
from app.api.v1 import products
from app.api.v1 import alternatives
from app.api.v1 import search

from app.core.cache import TTLCache
from app.core.config import settings
from app.core.logging import setup_logging
from app.db.core import create_db_and_tables

setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.auto_create_tables:
        create_db_and_tables()
    yield


app = FastAPI(title=settings.app_name, lifespan=lifespan)

app.state.cache = TTLCache(default_ttl=settings.cache_ttl_seconds)

# Middlewares
origins = []

if settings.allowed_hosts:
    origins = settings.allowed_hosts.split(",")

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routes
app.include_router(index.router, prefix="/api/v1")
app.include_router(
    eco_score.router, prefix="/api/v1/eco-score", tags=["Eco Score"])
app.include_router(
    products.router, prefix="/api/v1/products", tags=["Products"])
app.include_router(alternatives.router,
                   prefix="/api/v1/alternatives", tags=["Alternatives"])
app.include_router(search.router, prefix="/api/v1/search", tags=["Search"])

if __name__ == "__main__":
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_config=None,
        log_level=None,
    )
