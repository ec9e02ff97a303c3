import os
from datetime import datetime, timedelta

# Settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_FILE", "")
os.environ.setdefault("AUTO_CREATE_TABLES", "false")

import pytest
from fastapi.testclient import TestClient
from sqlmodel import SQLModel, Session, create_engine
from sqlmodel.pool import StaticPool

from app.core.cache import TTLCache
from app.db import schema  # noqa: F401
from app.db.core import get_session
from app.db.schema import Product
from app.main import app
from app.models.eco_score import EnvironmentalProfile
from app.services.product import apply_eco_score


@pytest.fixture(name="engine")
def engine_fixture():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="session")
def session_fixture(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture(name="cache")
def cache_fixture():
    return TTLCache(default_ttl=300)


@pytest.fixture(name="client")
def client_fixture(session: Session, cache: TTLCache):
    def get_session_override():
        return session

    app.dependency_overrides[get_session] = get_session_override
    app.state.cache = cache

    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture(name="make_product")
def make_product_fixture(session: Session):
    """
    Inserts a product straight into the database, scored like the service
    does. Each call is one second newer than the previous one so creation
    order is unambiguous.
    """
    base_time = datetime(2026, 1, 1, 12, 0, 0)
    counter = {"n": 0}

    def _make(name, category=None, score=True, **environmental):
        profile = EnvironmentalProfile.model_validate(environmental)
        created_at = base_time + timedelta(seconds=counter["n"])
        counter["n"] += 1

        product = Product(
            name=name,
            category=category,
            created_at=created_at,
            updated_at=created_at,
            **profile.model_dump(),
        )
        if score:
            apply_eco_score(product)
        session.add(product)
        session.commit()
        session.refresh(product)
        return product

    return _make
