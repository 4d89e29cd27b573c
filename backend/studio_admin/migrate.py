# backend/studio_admin/migrate.py
"""
Plain SQL migrations for SQLite.

Files in migrations/ are named "<version>_<name>.sql" and applied in
version order; applied versions are recorded in schema_migrations.
"""

import glob
import logging
import os
import sqlite3

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = os.path.join(os.path.dirname(__file__), "migrations")


def _sqlite_path(database_url: str) -> str:
    if not database_url.startswith("sqlite:///"):
        raise ValueError(f"SQL migrations support SQLite only, got {database_url}")
    return database_url[len("sqlite:///"):]


def current_version(db_path: str) -> int:
    conn = sqlite3.connect(db_path)
    try:
        cur = conn.cursor()
        cur.execute("""
            CREATE TABLE IF NOT EXISTS schema_migrations (
                version INTEGER PRIMARY KEY,
                applied_at TEXT DEFAULT CURRENT_TIMESTAMP
            );
        """)
        cur.execute("SELECT COALESCE(MAX(version), 0) FROM schema_migrations;")
        version = cur.fetchone()[0]
        conn.commit()
        return version
    finally:
        conn.close()


def apply_migrations(db_path: str, migrations_dir: str = MIGRATIONS_DIR) -> list[str]:
    """
    Apply pending migrations to the SQLite file at db_path.

    Returns:
        File names applied in this run.
    """
    version_now = current_version(db_path)
    logger.info(f"Current schema version: {version_now}")

    applied = []
    for path in sorted(glob.glob(os.path.join(migrations_dir, "*.sql"))):
        filename = os.path.basename(path)
        version = int(filename.split("_")[0])
        if version <= version_now:
            continue

        with open(path, "r", encoding="utf-8") as f:
            sql = f.read()

        conn = sqlite3.connect(db_path)
        try:
            conn.executescript(sql)
            conn.execute("INSERT INTO schema_migrations(version) VALUES (?)", (version,))
            conn.commit()
        finally:
            conn.close()

        logger.info(f"Applied migration {filename}")
        applied.append(filename)

    return applied


if __name__ == "__main__":
    from .config import settings

    logging.basicConfig(level=logging.INFO)
    apply_migrations(_sqlite_path(settings.resolved_database_url))
