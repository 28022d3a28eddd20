"""List users and their challenge stats (read-only)."""
from sqlalchemy import select
from sqlalchemy.orm import selectinload

import reports
from database import close_db, get_db
from logger import get_logger
from models import User, UserChallengeStats

logger = get_logger(__name__)


def check_users():
    print("🔍 Checking users...")
    db = get_db()
    with db.session() as session:
        users = session.scalars(select(User)).all()
        print(f"📊 Total users: {len(users)}")
        if users:
            print("\n👥 Users found:")
            for line in reports.user_lines(users):
                print(line)
        else:
            print("❌ No users found")

        print("\n🏆 Checking challenge stats...")
        stats = session.scalars(
            select(UserChallengeStats).options(selectinload(UserChallengeStats.user))
        ).all()
        print(f"📈 Users with challenge stats: {len(stats)}")
        if stats:
            print("\n📊 Stats found:")
            for line in reports.stats_lines(stats):
                print(line)
        else:
            print("❌ No challenge stats found")
            print("💡 Run the seed script: python -m scripts.seed_challenge_stats")


def main() -> int:
    try:
        check_users()
    except Exception as e:
        logger.error(f"User check failed: {e}", exc_info=True)
        return 1
    finally:
        close_db()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
