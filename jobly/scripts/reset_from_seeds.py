"""
Reset companies and jobs from seeds CSV.

WARNING: This will DELETE all rows in `jobs` and `companies`, then re-create
them from the provided CSVs. The operation log is left untouched.

Usage:
  python -m jobly.scripts.reset_from_seeds \
      --companies seeds/companies.csv \
      --jobs seeds/jobs.csv
"""
from __future__ import annotations

import argparse
import logging

from jobly.db import get_conn, ensure_schema
from jobly.logs import LogContext, ensure_log_schema
from jobly.services.seed_svc import seed_load


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    ap = argparse.ArgumentParser()
    ap.add_argument("--companies", default="seeds/companies.csv")
    ap.add_argument("--jobs", default="seeds/jobs.csv")
    args = ap.parse_args()

    # destructive reset
    with get_conn() as conn:
        ensure_schema(conn)
        conn.execute("DELETE FROM jobs")
        conn.execute("DELETE FROM companies")
        conn.commit()
    ensure_log_schema()

    log = LogContext("RESET_FROM_SEEDS")
    res = seed_load(args.companies, args.jobs, log)
    log.write("OK")
    print({"message": "ok", **res})


if __name__ == "__main__":
    main()
