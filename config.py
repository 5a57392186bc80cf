"""
HarnessDB - Centralised configuration.

All tunables live here.  Every other module imports from config
instead of reading os.environ directly.
"""

from __future__ import annotations
import os
from pathlib import Path


# ── Paths ──────────────────────────────────────────────────────────────
BASE_DIR    = Path(__file__).resolve().parent
CATALOG_DIR = Path(os.environ.get("HARNESSDB_CATALOG_DIR", BASE_DIR / "catalog"))

# Seed files imported into an empty database, in dependency-free order.
# (file name, catalog kind, forced contact type)
CATALOG_SEED_FILES = (
    ("pins.csv",          "contacts",      "Pin"),
    ("sockets.csv",       "contacts",      "Socket"),
    ("arrangements.csv",  "arrangements",  None),
    ("wire_contacts.csv", "wire_contacts", None),
)

# ── Database ───────────────────────────────────────────────────────────
DB_URL = os.environ.get("HARNESSDB_DB", f"sqlite:///{BASE_DIR / 'harnessdb.sqlite'}")

# ── Server ─────────────────────────────────────────────────────────────
HOST   = os.environ.get("HARNESSDB_HOST", "127.0.0.1")
PORT   = int(os.environ.get("HARNESSDB_PORT", "5000"))
DEBUG  = os.environ.get("HARNESSDB_DEBUG", "0") == "1"
SECRET = os.environ.get("HARNESSDB_SECRET", "harnessdb-dev-key-change-in-prod")

# ── Logging ────────────────────────────────────────────────────────────
LOG_LEVEL = os.environ.get("HARNESSDB_LOG_LEVEL", "INFO").upper()

# ── Connector builder ──────────────────────────────────────────────────
# Seconds to wait for the contact/arrangement lookups; unset = no limit
_timeout = os.environ.get("HARNESSDB_QUERY_TIMEOUT", "").strip()
QUERY_TIMEOUT = float(_timeout) if _timeout else None

# Seconds a builder session may sit idle before it is dropped; 0 = never
SESSION_TTL = float(os.environ.get("HARNESSDB_SESSION_TTL", "3600")) or None

# Derive wire mappings from contact AWG/mm² ranges after seeding
DERIVE_WIRE_MAPPINGS = os.environ.get("HARNESSDB_DERIVE_WIRE_MAPPINGS", "1") == "1"
