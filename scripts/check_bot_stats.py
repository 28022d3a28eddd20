"""Compare each bot's stored counters with its real trade rows."""
from sqlalchemy import func, select
from sqlalchemy.orm import selectinload

import reports
from database import close_db, get_db
from logger import get_logger
from models import Bot, Trade

logger = get_logger(__name__)


def check_bot_stats():
    print("🔍 Checking bot stats...")
    db = get_db()
    with db.session() as session:
        bots = session.scalars(select(Bot).options(selectinload(Bot.trades))).all()
        for bot in bots:
            unlinked = session.scalar(
                select(func.count()).select_from(Trade).where(Trade.bot_name == bot.name, Trade.bot_id.is_(None))
            )
            for line in reports.bot_lines(bot, unlinked):
                print(line)

        orphans = session.scalar(
            select(func.count()).select_from(Trade).where(Trade.trade_type == "bot", Trade.bot_id.is_(None))
        )
        if orphans:
            print(f"\n⚠️ WARNING: {orphans} orphan trades found (tradeType='bot' but botId=null)")


def main() -> int:
    try:
        check_bot_stats()
    except Exception as e:
        logger.error(f"Bot stats check failed: {e}", exc_info=True)
        return 1
    finally:
        close_db()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
