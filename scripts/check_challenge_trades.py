"""List challenge trades and the balances of active challenges."""
from sqlalchemy import select
from sqlalchemy.orm import selectinload

import reports
from database import close_db, get_db
from logger import get_logger
from models import Challenge, ChallengeTrade

logger = get_logger(__name__)


def check_challenge_trades():
    print("🔍 Checking challenge trades...")
    db = get_db()
    with db.session() as session:
        trades = session.scalars(
            select(ChallengeTrade).options(
                selectinload(ChallengeTrade.challenge), selectinload(ChallengeTrade.user)
            )
        ).all()
        print(f"📊 Trades found: {len(trades)}")
        if trades:
            print("\n📋 Trade details:")
            for line in reports.challenge_trade_lines(trades):
                print(line)
        else:
            print("❌ No trades found in the database")

        active = session.scalars(
            select(Challenge)
            .where(Challenge.status == "active")
            .options(selectinload(Challenge.challenger), selectinload(Challenge.challenged))
        ).all()
        print(f"\n🏆 Active challenges: {len(active)}")
        for line in reports.active_challenge_lines(active):
            print(line)


def main() -> int:
    try:
        check_challenge_trades()
    except Exception as e:
        logger.error(f"Challenge trade check failed: {e}", exc_info=True)
        return 1
    finally:
        close_db()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
