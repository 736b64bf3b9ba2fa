import json, time, uuid, datetime as dt
from typing import Optional

from .db import get_conn, query
from .helpers.sql import WhereClause, sql_for_filters

DDL = """
CREATE TABLE IF NOT EXISTS operation_log (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  ts TEXT NOT NULL,
  user TEXT NOT NULL,
  action TEXT NOT NULL,
  entity_type TEXT,
  entity_id TEXT,
  request_id TEXT,
  before_json TEXT,
  after_json TEXT,
  payload_json TEXT,
  result TEXT,
  err_msg TEXT,
  latency_ms INTEGER
);
CREATE INDEX IF NOT EXISTS idx_log_ts ON operation_log(ts);
CREATE INDEX IF NOT EXISTS idx_log_action ON operation_log(action);
"""

def ensure_log_schema():
    with get_conn() as conn:
        conn.executescript(DDL)
        conn.commit()

class LogContext:
    """One operation_log row per mutation: who, what, before/after, outcome."""

    def __init__(self, action: str, user: str = "anonymous"):
        self.action = action
        self.user = user
        self.request_id = str(uuid.uuid4())
        self.start = time.perf_counter()
        self.before = None
        self.after = None
        self.payload = None
        self.entity_type = None
        self.entity_id = None

    def set_entity(self, etype: str, eid):
        self.entity_type = etype
        self.entity_id = str(eid)

    def set_before(self, obj): self.before = obj
    def set_after(self, obj): self.after = obj
    def set_payload(self, obj): self.payload = obj

    def write(self, result: str = "OK", err: Optional[str] = None):
        elapsed_ms = int((time.perf_counter() - self.start) * 1000)
        rec = [
            dt.datetime.now(dt.timezone.utc).isoformat(),
            self.user,
            self.action,
            self.entity_type,
            self.entity_id,
            self.request_id,
            json.dumps(self.before, ensure_ascii=False, default=str) if self.before is not None else None,
            json.dumps(self.after, ensure_ascii=False, default=str) if self.after is not None else None,
            json.dumps(self.payload, ensure_ascii=False, default=str) if self.payload is not None else None,
            result,
            err,
            elapsed_ms,
        ]
        with get_conn() as conn:
            query(
                conn,
                """INSERT INTO operation_log
                (ts,user,action,entity_type,entity_id,request_id,before_json,after_json,payload_json,result,err_msg,latency_ms)
                VALUES($1,$2,$3,$4,$5,$6,$7,$8,$9,$10,$11,$12)""",
                rec,
            )
            conn.commit()

def search_logs(q: str|None, action: str|None, ts_from: str|None, ts_to: str|None, page:int, size:int):
    where = WhereClause()
    if q:
        like = f"%{q}%"
        where.add("(payload_json LIKE {} OR before_json LIKE {} OR after_json LIKE {})", like, like, like)
    if action:
        where.add("action = {}", action)
    if ts_from:
        where.add("ts >= {}", ts_from)
    if ts_to:
        where.add("ts <= {}", ts_to)
    count_sql, values = sql_for_filters("SELECT COUNT(1) AS cnt FROM operation_log", where)
    page_sql, _ = sql_for_filters("SELECT * FROM operation_log", where, "ts DESC, id DESC")
    limit_idx = len(values) + 1
    page_sql += f" LIMIT ${limit_idx} OFFSET ${limit_idx + 1}"
    with get_conn() as conn:
        total = query(conn, count_sql, values)[0]["cnt"]
        rows = query(conn, page_sql, [*values, size, (page - 1) * size])
        return total, [dict(r) for r in rows]
