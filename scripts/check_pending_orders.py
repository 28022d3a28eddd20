"""Show pending orders and the status distribution of all orders."""
from sqlalchemy import select
from sqlalchemy.orm import selectinload

import reports
from database import close_db, get_db
from logger import get_logger
from models import PendingOrder
from trades import status_counts

logger = get_logger(__name__)


def check_pending_orders():
    print("🔍 Checking pending orders...")
    db = get_db()
    with db.session() as session:
        pending = session.scalars(
            select(PendingOrder)
            .where(PendingOrder.status == "pending")
            .options(selectinload(PendingOrder.user))
            .order_by(PendingOrder.created_at.desc())
        ).all()

        print(f"📊 Pending orders found: {len(pending)}")
        if pending:
            print("\n📋 Pending order details:")
            for line in reports.pending_order_lines(pending):
                print(line)
        else:
            print("❌ No pending orders in the database.")

        all_orders = session.scalars(select(PendingOrder).order_by(PendingOrder.created_at.desc())).all()
        print(f"\n📊 Orders in the database: {len(all_orders)}")
        print("📊 Status distribution:", status_counts(all_orders))


def main() -> int:
    try:
        check_pending_orders()
    except Exception as e:
        logger.error(f"Pending order check failed: {e}", exc_info=True)
        return 1
    finally:
        close_db()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
