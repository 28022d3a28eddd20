"""Create the TokenTransaction table, its indexes and foreign keys if missing."""
from database import close_db, get_db
from logger import get_logger

logger = get_logger(__name__)


def main() -> int:
    print("🔧 Creating table TokenTransaction...")
    try:
        created = get_db().ensure_token_transaction_table()
        if created:
            print("✅ Table TokenTransaction is in place")
        else:
            print("✅ Table TokenTransaction already exists")
    except Exception as e:
        logger.error(f"Failed to create table: {e}", exc_info=True)
        return 1
    finally:
        close_db()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
