"""Close the first open simulated trade at a given price and record its PnL."""
import argparse

from sqlalchemy import select

from database import close_db, get_db
from logger import get_logger
from models import Trade
from trades import close_trade

logger = get_logger(__name__)

DEFAULT_EXIT_PRICE = 117000


def close_first_open_trade(exit_price, fees=0.1):
    print("🔍 Looking for an open simulated trade...")
    db = get_db()
    with db.session() as session:
        trade = session.scalars(
            select(Trade).where(Trade.status == "open", Trade.environment == "simulated").limit(1)
        ).first()
        if trade is None:
            print("❌ No open trade found")
            return None

        print(f"📊 Trade found: id={trade.id} {trade.symbol} {trade.side} @ {trade.price} ({trade.status})")
        close_trade(trade, exit_price, fees=fees)
        print(f"💰 PnL: {trade.pnl:.2f} ({trade.pnl_percent:.2f}%) at {exit_price}")

    print(f"✅ Trade {trade.id} closed: status={trade.status}, pnl={trade.pnl}, exitPrice={trade.exit_price}")
    return trade


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--price", type=float, default=DEFAULT_EXIT_PRICE, help="Simulated exit price")
    parser.add_argument("--fees", type=float, default=0.1)
    args = parser.parse_args(argv)

    try:
        close_first_open_trade(args.price, args.fees)
    except Exception as e:
        logger.error(f"Failed to close trade: {e}", exc_info=True)
        return 1
    finally:
        close_db()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
