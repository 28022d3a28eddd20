"""Print every trade, split into open and closed."""
from sqlalchemy import select

import reports
from database import close_db, get_db
from logger import get_logger
from models import Trade

logger = get_logger(__name__)


def list_trades():
    print("🔍 Listing trades...")
    db = get_db()
    with db.session() as session:
        trades = session.scalars(select(Trade).order_by(Trade.created_at.desc())).all()
    print(f"📊 Trades found: {len(trades)}")

    open_trades = [t for t in trades if t.status == "open"]
    print(f"📈 Open trades: {len(open_trades)}")
    for trade in open_trades:
        print(f"  - {reports.open_trade_line(trade)}")

    closed_trades = [t for t in trades if t.status == "closed"]
    print(f"📉 Closed trades: {len(closed_trades)}")
    for trade in closed_trades:
        print(f"  - {reports.closed_trade_line(trade)}")


def main() -> int:
    try:
        list_trades()
    except Exception as e:
        logger.error(f"Trade listing failed: {e}", exc_info=True)
        return 1
    finally:
        close_db()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
