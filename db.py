# db.py
import logging
import os

from dotenv import load_dotenv
from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine, Session

load_dotenv()

logger = logging.getLogger(__name__)

DATABASE_URL = os.getenv("DATABASE_URL", "").strip()
if not DATABASE_URL:
  raise RuntimeError("DATABASE_URL is not set in backend .env")

DB_ECHO = os.getenv("DB_ECHO", "0").strip().lower() in ("1", "true", "yes")


def enable_sqlite_foreign_keys(target: Engine) -> None:
  # sqlite ships with FK enforcement off; invoices.customer_id relies on it
  @event.listens_for(target, "connect")
  def _fk_pragma(dbapi_conn, _record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _make_engine(url: str) -> Engine:
  if url.startswith("sqlite"):
    eng = create_engine(url, echo=DB_ECHO, connect_args={"check_same_thread": False})
    enable_sqlite_foreign_keys(eng)
    return eng
  return create_engine(url, echo=DB_ECHO, pool_pre_ping=True)


engine = _make_engine(DATABASE_URL)

def init_db() -> None:
  import models  # noqa: F401  registers tables on SQLModel.metadata

  SQLModel.metadata.create_all(engine)
  logger.info("database tables ensured")

def get_session():
  with Session(engine) as session:
    yield session
