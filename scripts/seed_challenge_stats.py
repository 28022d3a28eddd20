"""Seed random challenge stats for users that do not have any yet."""
import random

from sqlalchemy import select

from database import close_db, get_db
from logger import get_logger
from models import User, UserChallengeStats
from seeds import random_challenge_stats
from tokens import get_stats

logger = get_logger(__name__)


def seed_challenge_stats(rng=None):
    rng = rng or random.Random()
    print("🌱 Seeding challenge stats...")
    db = get_db()
    created = 0
    with db.session() as session:
        users = session.scalars(select(User)).all()
        print(f"📊 Found {len(users)} users")
        for user in users:
            if get_stats(session, user.id) is not None:
                print(f"⏭️  Stats already exist for {user.name}")
                continue

            values = random_challenge_stats(rng)
            session.add(UserChallengeStats(user_id=user.id, **values))
            session.flush()
            created += 1
            print(
                f"✅ Stats created for {user.name}: "
                f"{values['total_wins']}W/{values['total_losses']}L ({values['win_rate']:.1f}%)"
            )
    print("🎉 Challenge stats seed finished!")
    return created


def main() -> int:
    try:
        seed_challenge_stats()
    except Exception as e:
        logger.error(f"Seed failed: {e}", exc_info=True)
        return 1
    finally:
        close_db()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
