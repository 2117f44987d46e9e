import sqlite3
from pathlib import Path
from sqlalchemy import create_engine, event
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from spark2scale.config import settings


class Base(DeclarativeBase):
    pass


def _set_sqlite_pragmas(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def get_engine(db_path: Path | None = None):
    path = db_path or settings.db_path
    engine = create_engine(
        f"sqlite:///{path}",
        connect_args={"check_same_thread": False},
    )
    event.listen(engine, "connect", _set_sqlite_pragmas)
    return engine


engine = get_engine()
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


SCHEMA_SQL = """\
-- ============================================================
-- STARTUPS
-- ============================================================
CREATE TABLE IF NOT EXISTS startups (
    sid              TEXT PRIMARY KEY,
    startupname      TEXT NOT NULL,
    field            TEXT,
    idea_description TEXT,
    region           TEXT,
    startup_stage    TEXT,
    founder_id       TEXT,
    created_at       TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now'))
);

CREATE INDEX IF NOT EXISTS idx_startups_founder ON startups(founder_id);

-- ============================================================
-- DOCUMENTS
-- ============================================================
CREATE TABLE IF NOT EXISTS documents (
    did             TEXT PRIMARY KEY,
    startup_id      TEXT NOT NULL REFERENCES startups(sid) ON DELETE CASCADE,
    document_name   TEXT NOT NULL,
    type            TEXT NOT NULL,
    current_path    TEXT,
    current_version INTEGER NOT NULL DEFAULT 1,
    canaccess       INTEGER NOT NULL DEFAULT 1,
    is_current      INTEGER NOT NULL DEFAULT 1 CHECK(is_current IN (0, 1)),
    file_hash       TEXT,
    mime_type       TEXT,
    updated_at      TEXT NOT NULL,
    created_at      TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now'))
);

CREATE INDEX IF NOT EXISTS idx_documents_startup ON documents(startup_id);
CREATE INDEX IF NOT EXISTS idx_documents_type ON documents(startup_id, type);
CREATE INDEX IF NOT EXISTS idx_documents_updated ON documents(updated_at);

-- ============================================================
-- DOCUMENT VERSIONS
-- ============================================================
CREATE TABLE IF NOT EXISTS document_versions (
    vid            TEXT PRIMARY KEY,
    document_id    TEXT NOT NULL REFERENCES documents(did) ON DELETE CASCADE,
    startup_id     TEXT NOT NULL,
    version_number INTEGER NOT NULL,
    path           TEXT NOT NULL,
    stored_path    TEXT NOT NULL,
    generated_by   TEXT NOT NULL DEFAULT 'manual'
                   CHECK(generated_by IN ('manual','AI')),
    created_at     TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_versions_document ON document_versions(document_id);

-- ============================================================
-- WORKFLOW
-- ============================================================
CREATE TABLE IF NOT EXISTS startup_workflow (
    startup_id      TEXT PRIMARY KEY REFERENCES startups(sid) ON DELETE CASCADE,
    idea_check      INTEGER NOT NULL DEFAULT 0,
    market_research INTEGER NOT NULL DEFAULT 0,
    evaluation      INTEGER NOT NULL DEFAULT 0,
    recommendation  INTEGER NOT NULL DEFAULT 0,
    documents       INTEGER NOT NULL DEFAULT 0,
    pitch_deck      INTEGER NOT NULL DEFAULT 0,
    updated_at      TEXT NOT NULL
);
"""


def init_db(db_path: Path | None = None):
    path = db_path or settings.db_path
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(path))
    conn.executescript(SCHEMA_SQL)
    conn.close()
