from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.access_log.access_log.database.bootstrap import ensure_indexes, list_collections
from src.access_log.access_log.database.connection import DatabaseConnection, MongoConfig


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    conn = DatabaseConnection(MongoConfig(uri=settings.MONGO_URI, database=settings.MONGO_DB_NAME))
    if not conn.connect():
        raise SystemExit("No MongoDB URI configured. Set MONGO_URI (or MONGODB_URI / ATLAS_URL).")

    try:
        ensure_indexes(conn.db)
        print(f"OK: Indexes ready -> {conn.db.name} (collections={list_collections(conn.db)})")
    finally:
        conn.close()


if __name__ == "__main__":
    main()
