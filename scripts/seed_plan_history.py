"""Insert sample plan-history rows for the first user and set their current plan."""
from sqlalchemy import select

from database import close_db, get_db
from logger import get_logger
from models import PlanHistory, User
from seeds import CURRENT_PLAN, plan_history_entries

logger = get_logger(__name__)


def seed_plan_history():
    db = get_db()
    with db.session() as session:
        user = session.scalars(select(User).limit(1)).first()
        if user is None:
            print("No users found. Create a user first.")
            return None

        for entry in plan_history_entries(user.id):
            session.add(PlanHistory(**entry))
        session.flush()
        print("✅ Sample plan history inserted!")

        for field, value in CURRENT_PLAN.items():
            setattr(user, field, value)
        print("✅ User's current plan updated!")
    return user


def main() -> int:
    try:
        seed_plan_history()
    except Exception as e:
        logger.error(f"Failed to insert sample data: {e}", exc_info=True)
        return 1
    finally:
        close_db()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
