"""Reproduce the frontend's open-simulated-trades view and look for duplicates."""
from sqlalchemy import select

import reports
from database import close_db, get_db
from logger import get_logger
from models import Trade
from trades import group_by_symbol

logger = get_logger(__name__)


def check_user_trades():
    print("🔍 Checking user trades...")
    db = get_db()
    with db.session() as session:
        trades = session.scalars(select(Trade).order_by(Trade.created_at.desc())).all()
    print(f"📊 Trades found: {len(trades)}")

    # Same filter the frontend applies
    open_trades = [t for t in trades if t.status == "open" and t.environment == "simulated"]
    print(f"📈 Open simulated trades: {len(open_trades)}")
    for i, trade in enumerate(open_trades, start=1):
        print(f"  {i}. {reports.open_trade_line(trade)}")

    grouped = group_by_symbol(open_trades)
    print(f"🔍 Unique symbols: {len(grouped)}")
    print(f"🔍 Symbols: {', '.join(grouped)}")
    print("📊 Trades per symbol:")
    for line in reports.symbol_group_lines(grouped):
        print(line)


def main() -> int:
    try:
        check_user_trades()
    except Exception as e:
        logger.error(f"User trade check failed: {e}", exc_info=True)
        return 1
    finally:
        close_db()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
