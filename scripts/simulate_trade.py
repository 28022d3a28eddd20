"""Record a random mock trade on the first active challenge and update its balance."""
import random

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from challenges import apply_trade_result
from database import close_db, get_db
from logger import get_logger
from models import Challenge, ChallengeTrade

logger = get_logger(__name__)


def simulate_trade(rng=None):
    rng = rng or random.Random()
    print("🎯 Simulating a trade...")
    db = get_db()
    with db.session() as session:
        challenge = session.scalars(
            select(Challenge)
            .where(Challenge.status == "active")
            .options(selectinload(Challenge.challenger), selectinload(Challenge.challenged))
            .limit(1)
        ).first()
        if challenge is None:
            print("❌ No active challenge found")
            return None

        print(f"📊 Challenge found: {challenge.title}")
        print(f"👤 Challenger: {challenge.challenger.name}")
        print(f"👤 Challenged: {challenge.challenged.name}")

        trade = ChallengeTrade(
            challenge_id=challenge.id,
            user_id=challenge.challenger_id,
            symbol="BTCUSDT",
            side="buy",
            quantity=0.001,
            price=50000,
            profit=rng.random() * 100 - 50,
        )
        session.add(trade)
        session.flush()

        print("✅ Simulated trade saved:")
        print(f"   ID: {trade.id}")
        print(f"   Symbol: {trade.symbol}")
        print(f"   Side: {trade.side}")
        print(f"   Quantity: {trade.quantity}")
        print(f"   Price: {trade.price}")
        print(f"   Profit: {trade.profit}")
        print(f"   User: {challenge.challenger.name}")
        print(f"   Challenge: {challenge.title}")

        balance, ret = apply_trade_result(challenge, trade.user_id, trade.profit)
        print(f"💰 Balance updated: {balance:.2f} ({ret:.2f}%)")
    return trade


def main() -> int:
    try:
        simulate_trade()
    except Exception as e:
        logger.error(f"Trade simulation failed: {e}", exc_info=True)
        return 1
    finally:
        close_db()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
