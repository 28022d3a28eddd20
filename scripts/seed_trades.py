"""Insert sample trades for the first user and print trade counts."""
from sqlalchemy import func, select

from database import close_db, get_db
from logger import get_logger
from models import Bot, Trade, User
from seeds import sample_trades

logger = get_logger(__name__)


def seed_trades():
    db = get_db()
    with db.session() as session:
        user = session.scalars(select(User).limit(1)).first()
        if user is None:
            print("No users found. Start the backend once to create the admin user.")
            return 0

        print(f"Inserting trades for user: {user.name} ({user.email})")
        rows = sample_trades(user.id)
        for data in rows:
            if data.get("bot_name"):
                data["bot_id"] = session.scalar(select(Bot.id).where(Bot.name == data["bot_name"]).limit(1))
            session.add(Trade(**data))
        session.flush()
        print(f"✅ {len(rows)} trades inserted!")

        def count(*criteria):
            return session.scalar(select(func.count()).select_from(Trade).where(Trade.user_id == user.id, *criteria))

        print("📊 Stats:")
        print(f"   Total trades: {count()}")
        print(f"   Closed trades: {count(Trade.status == 'closed')}")
        print(f"   Open trades: {count(Trade.status == 'open')}")
    return len(rows)


def main() -> int:
    try:
        seed_trades()
    except Exception as e:
        logger.error(f"Failed to insert trades: {e}", exc_info=True)
        return 1
    finally:
        close_db()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
