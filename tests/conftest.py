import os

# db.py refuses to import without a DATABASE_URL
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

import models  # noqa: F401
from cache import PathCache, get_view_cache
from db import enable_sqlite_foreign_keys, get_session
from main import app
from models import Customer


@pytest.fixture
def engine():
  eng = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
  )
  enable_sqlite_foreign_keys(eng)
  SQLModel.metadata.create_all(eng)
  yield eng
  eng.dispose()


@pytest.fixture
def session(engine):
  with Session(engine) as s:
    yield s


@pytest.fixture
def cache():
  return PathCache()


@pytest.fixture
def customer_id(session):
  session.add(Customer(id="c1", name="Ada Lovelace", email="ada@example.com"))
  session.add(Customer(id="c2", name="Grace Hopper", email="grace@example.com"))
  session.commit()
  return "c1"


@pytest.fixture
def client(engine, cache):
  def _session():
    with Session(engine) as s:
      yield s

  app.dependency_overrides[get_session] = _session
  app.dependency_overrides[get_view_cache] = lambda: cache
  yield TestClient(app)
  app.dependency_overrides.clear()
