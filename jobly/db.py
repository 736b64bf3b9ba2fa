from __future__ import annotations

# jobly/db.py
import sqlite3
from contextlib import contextmanager
from typing import Any, Iterator, Sequence
import os
import yaml

# DB path resolution order:
# 1) JOBLY_DB_PATH env var (highest priority)
# 2) config.yaml test_db_path (when running under tests)
# 3) config.yaml db_path
# 4) fallback: jobly.db at the project root
_PROJECT_ROOT = os.path.dirname(os.path.dirname(__file__))
_ROOT_DB = os.path.join(_PROJECT_ROOT, "jobly.db")


def read_config_yaml() -> dict:
    cfg_path = os.environ.get("JOBLY_CONFIG") or os.path.join(_PROJECT_ROOT, "config.yaml")
    if not os.path.exists(cfg_path):
        return {}
    try:
        with open(cfg_path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError):
        return {}
    if not isinstance(cfg, dict):
        return {}
    out: dict = {}
    for k in ("db_path", "test_db_path"):
        v = cfg.get(k)
        if isinstance(v, str) and v.strip():
            out[k] = v.strip()
    origins = cfg.get("cors_origins")
    if isinstance(origins, list):
        out["cors_origins"] = [str(o) for o in origins]
    return out


def get_db_path() -> str:
    env_path = os.environ.get("JOBLY_DB_PATH")
    cfg = read_config_yaml()
    is_test = (os.environ.get("APP_ENV") == "test") or (os.environ.get("PYTEST_CURRENT_TEST") is not None)

    if env_path:
        path = env_path
    elif is_test and cfg.get("test_db_path"):
        path = cfg["test_db_path"]
    elif cfg.get("db_path"):
        path = cfg["db_path"]
    else:
        path = _ROOT_DB

    dirn = os.path.dirname(path) or "."
    os.makedirs(dirn, exist_ok=True)
    return path


@contextmanager
def get_conn(db_path: str | None = None) -> Iterator[sqlite3.Connection]:
    """
    Open a SQLite connection. An explicit db_path wins over get_db_path().
    Foreign keys are enforced and rows come back as sqlite3.Row.
    """
    path = db_path or get_db_path()
    conn = sqlite3.connect(
        path,
        detect_types=sqlite3.PARSE_DECLTYPES | sqlite3.PARSE_COLNAMES,
        check_same_thread=False,
        isolation_level=None,
    )
    try:
        conn.execute("PRAGMA foreign_keys = ON;")
        conn.row_factory = sqlite3.Row
        yield conn
    finally:
        conn.close()


def query(conn: sqlite3.Connection, sql: str, values: Sequence[Any] = ()) -> list[sqlite3.Row]:
    """Run `sql` with `$1, $2, ...` placeholders bound to `values` in order.

    SQLite reads `$1` as a named parameter called "1", so the positional
    list is handed over as a mapping keyed by position.
    """
    params = {str(i): v for i, v in enumerate(values, start=1)}
    return conn.execute(sql, params).fetchall()


def ensure_schema(conn: sqlite3.Connection, schema_path: str | None = None):
    path = schema_path or os.path.join(_PROJECT_ROOT, "schema.sql")
    with open(path, "r", encoding="utf-8") as f:
        conn.executescript(f.read())
