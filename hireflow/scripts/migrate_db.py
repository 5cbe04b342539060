"""
Rewrite legacy application statuses (screening, interview, offer) to the
canonical vocabulary. Reads already map them; this makes the stored rows match.
Timeline events are left as written.
"""
from sqlalchemy import text

from hireflow.core.statuses import LEGACY_STATUS_ALIASES
from hireflow.database import engine, init_db

UPDATE_SQL = text("UPDATE applications SET status = :canonical WHERE status = :legacy")


def main():
    init_db()  # Create any missing tables first
    total = 0
    with engine.connect() as conn:
        for legacy, canonical in LEGACY_STATUS_ALIASES.items():
            try:
                result = conn.execute(UPDATE_SQL, {"canonical": canonical.value, "legacy": legacy})
                conn.commit()
                total += result.rowcount or 0
                print(f"OK: {legacy} -> {canonical.value} ({result.rowcount} rows)")
            except Exception as e:
                print("Skip:", e)
                conn.rollback()
    print(f"Migration done. {total} applications updated.")
    return total


if __name__ == "__main__":
    main()
