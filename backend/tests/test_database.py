import sqlite3

from spark2scale.database import init_db


def _columns(db_path, table):
    conn = sqlite3.connect(str(db_path))
    try:
        return {row[1] for row in conn.execute(f"PRAGMA table_info({table})")}
    finally:
        conn.close()


class TestInitDb:
    def test_creates_tables(self, tmp_path):
        db_path = tmp_path / "nested" / "db.sqlite"
        init_db(db_path)

        conn = sqlite3.connect(str(db_path))
        tables = {row[0] for row in conn.execute("SELECT name FROM sqlite_master WHERE type='table'")}
        conn.close()
        assert {"startups", "documents", "document_versions", "startup_workflow"} <= tables

    def test_documents_carry_archive_flag(self, tmp_path):
        db_path = tmp_path / "db.sqlite"
        init_db(db_path)
        assert {"is_current", "file_hash", "mime_type"} <= _columns(db_path, "documents")

    def test_rerun_keeps_data(self, tmp_path):
        db_path = tmp_path / "db.sqlite"
        init_db(db_path)
        conn = sqlite3.connect(str(db_path))
        conn.execute("INSERT INTO startups (sid, startupname) VALUES ('s1', 'Acme')")
        conn.commit()
        conn.close()

        init_db(db_path)

        conn = sqlite3.connect(str(db_path))
        names = [row[0] for row in conn.execute("SELECT startupname FROM startups")]
        conn.close()
        assert names == ["Acme"]
