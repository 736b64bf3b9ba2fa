"""Repository layer: DB access helpers (SQLite).

Keep functions thin and focused, so services and routes avoid SQL strings.
Each function takes an open connection; committing is the caller's job.
"""
from __future__ import annotations
