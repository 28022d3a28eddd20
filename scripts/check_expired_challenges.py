"""Close active challenges whose end date/time has passed.

Meant to be triggered externally (cron or similar):
  python -m scripts.check_expired_challenges
"""
from challenges import update_expired_challenges
from database import close_db, get_db
from logger import get_logger

logger = get_logger(__name__)


def check_expired_challenges():
    print("🕐 Checking for expired challenges...")
    db = get_db()
    with db.session() as session:
        updated = update_expired_challenges(session)

    if updated:
        print(f"🎯 {len(updated)} expired challenges updated")
    else:
        print("✅ No expired challenges found")
    return updated


def main() -> int:
    try:
        check_expired_challenges()
        print("✅ Expired challenge check finished")
    except Exception as e:
        logger.error(f"Expired challenge check failed: {e}", exc_info=True)
        return 1
    finally:
        close_db()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
