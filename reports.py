"""Console line formatting for the diagnostic scripts.

Each function takes ORM rows (or anything with the same attributes) and
returns a list of lines; the scripts only print them.
"""

from typing import Dict, Iterable, List, Sequence


def _or_na(value) -> str:
    return "N/A" if value in (None, 0) else str(value)


def user_lines(users: Sequence) -> List[str]:
    return [
        f"{i}. {u.name} ({u.email}) - Active: {u.active} - Profile: {u.perfil}"
        for i, u in enumerate(users, start=1)
    ]


def stats_lines(stats_rows: Sequence) -> List[str]:
    return [
        f"{i}. {s.user.name}: {s.tokens:g} tokens, {s.total_wins}W/{s.total_losses}L ({s.win_rate:.1f}%)"
        for i, s in enumerate(stats_rows, start=1)
    ]


def pending_order_lines(orders: Sequence) -> List[str]:
    lines = []
    for i, order in enumerate(orders, start=1):
        lines.extend([
            "",
            f"{i}. Order ID: {order.id}",
            f"   User: {order.user.name} ({order.user.email})",
            f"   Symbol: {order.symbol}",
            f"   Side: {order.side}",
            f"   Type: {order.type}",
            f"   Quantity: {order.quantity}",
            f"   Price: {order.price}",
            f"   Total: {order.total}",
            f"   Status: {order.status}",
            f"   Take Profit: {_or_na(order.take_profit)}",
            f"   Stop Loss: {_or_na(order.stop_loss)}",
            f"   Created: {order.created_at}",
            f"   Updated: {order.updated_at}",
        ])
    return lines


def bot_lines(bot, unlinked_trades: int = 0) -> List[str]:
    """Stored counters next to the bot's real trade rows."""
    trades = list(bot.trades)
    open_count = sum(1 for t in trades if t.status == "open")
    closed_count = sum(1 for t in trades if t.status == "closed")
    lines = [
        "",
        f"📊 Bot: {bot.name} (ID: {bot.id})",
        f"   - Total trades (field): {bot.total_trades}",
        f"   - Trades in database: {len(trades)}",
        f"   - Open trades: {open_count}",
        f"   - Closed trades: {closed_count}",
        f"   - Net profit: {bot.net_profit}",
        f"   - Win rate: {bot.win_rate * 100:.2f}%",
    ]
    if unlinked_trades:
        lines.append(
            f"   ⚠️ WARNING: {unlinked_trades} trades found with botName=\"{bot.name}\" but no botId!"
        )
    return lines


def challenge_trade_lines(trades: Sequence) -> List[str]:
    lines = []
    for i, trade in enumerate(trades, start=1):
        lines.extend([
            f"{i}. Trade ID: {trade.id}",
            f"   Challenge: {trade.challenge.title} ({trade.challenge.status})",
            f"   User: {trade.user.name}",
            f"   Symbol: {trade.symbol}",
            f"   Side: {trade.side}",
            f"   Quantity: {trade.quantity}",
            f"   Price: {trade.price}",
            f"   Profit: {trade.profit}",
            f"   Timestamp: {trade.timestamp}",
            "---",
        ])
    return lines


def active_challenge_lines(challenges: Sequence) -> List[str]:
    lines = []
    for i, challenge in enumerate(challenges, start=1):
        lines.extend([
            f"{i}. {challenge.title}",
            f"   Challenger: {challenge.challenger.name}",
            f"   Challenged: {challenge.challenged.name}",
            f"   Challenger balance: {challenge.challenger_current_balance}",
            f"   Challenged balance: {challenge.challenged_current_balance}",
            "---",
        ])
    return lines


def open_trade_line(trade) -> str:
    return f"{trade.symbol} {trade.side} {trade.quantity} @ {trade.price} ({trade.environment})"


def closed_trade_line(trade) -> str:
    return f"{trade.symbol} {trade.side} {trade.quantity} @ {trade.price} -> {trade.exit_price} PnL: {trade.pnl}"


def symbol_group_lines(grouped: Dict[str, Iterable]) -> List[str]:
    lines = []
    for symbol, trades in grouped.items():
        trades = list(trades)
        lines.append(f"  {symbol}: {len(trades)} trades")
        lines.extend(f"    - {t.side} {t.quantity} @ {t.price}" for t in trades)
    return lines
