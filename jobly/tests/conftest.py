import os
import sys
import sqlite3
import pytest
from pathlib import Path

# Ensure project root on sys.path
_THIS_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _THIS_DIR.parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))


@pytest.fixture(scope="session", autouse=True)
def tmp_db_path(tmp_path_factory):
    path = tmp_path_factory.mktemp("db") / "jobly_test.db"
    # Point the app to this temp DB
    os.environ["JOBLY_DB_PATH"] = str(path)
    schema = Path(_PROJECT_ROOT / "schema.sql").read_text(encoding="utf-8")
    conn = sqlite3.connect(str(path))
    try:
        conn.executescript(schema)
        conn.commit()
    finally:
        conn.close()
    from jobly.logs import ensure_log_schema
    ensure_log_schema()
    return str(path)


@pytest.fixture()
def client(tmp_db_path):
    # Import app after DB ready so startup hooks can use it
    from jobly.api import app
    from fastapi.testclient import TestClient
    return TestClient(app)


@pytest.fixture(autouse=True)
def _clean_db(tmp_db_path):
    # Safety: ensure we only ever wipe the temp DB, never a real one
    assert os.environ.get("JOBLY_DB_PATH") == tmp_db_path, "Refusing to clean non-temp DB"
    conn = sqlite3.connect(tmp_db_path)
    try:
        for t in ("jobs", "companies", "operation_log"):
            conn.execute(f"DELETE FROM {t}")
        conn.commit()
    finally:
        conn.close()
    yield


@pytest.fixture()
def seeded(tmp_db_path):
    """c1..c3 companies plus two jobs at c3, mirroring the common search fixtures."""
    conn = sqlite3.connect(tmp_db_path)
    try:
        conn.executemany(
            "INSERT INTO companies(handle, name, num_employees, description, logo_url) VALUES(?,?,?,?,?)",
            [
                ("c1", "C1", 1, "Desc1", "http://c1.img"),
                ("c2", "C2", 2, "Desc2", "http://c2.img"),
                ("c3", "C3", 3, "Desc3", "http://c3.img"),
            ],
        )
        cur = conn.execute(
            "INSERT INTO jobs(title, salary, equity, company_handle) VALUES('job', 50000, 0.3, 'c3')"
        )
        job1 = cur.lastrowid
        cur = conn.execute(
            "INSERT INTO jobs(title, salary, equity, company_handle) VALUES('job2', 30000, 0.5, 'c3')"
        )
        job2 = cur.lastrowid
        conn.commit()
    finally:
        conn.close()
    return {"job_ids": [job1, job2]}
