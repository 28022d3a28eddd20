"""Trade PnL math and small grouping helpers used by the trade scripts."""

from collections import Counter
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Tuple

from models import Trade


def compute_pnl(side: str, entry_price: float, exit_price: float, quantity: float) -> Tuple[float, float]:
    """Return (pnl, pnl_percent) for closing a position at `exit_price`."""
    if side == "buy":
        pnl = (exit_price - entry_price) * quantity
    else:
        pnl = (entry_price - exit_price) * quantity
    pnl_percent = pnl / (entry_price * quantity) * 100
    return pnl, pnl_percent


def close_trade(trade: Trade, exit_price: float, fees: float = 0.1, now: Optional[datetime] = None) -> Trade:
    """Mark an open trade closed at `exit_price`."""
    pnl, pnl_percent = compute_pnl(trade.side, trade.price, exit_price, trade.quantity)
    trade.status = "closed"
    trade.exit_time = now or datetime.now()
    trade.exit_price = exit_price
    trade.pnl = pnl
    trade.pnl_percent = pnl_percent
    trade.fees = fees
    return trade


def group_by_symbol(trades: Iterable) -> Dict[str, List]:
    grouped: Dict[str, List] = {}
    for trade in trades:
        grouped.setdefault(trade.symbol, []).append(trade)
    return grouped


def status_counts(rows: Iterable) -> Dict[str, int]:
    return dict(Counter(row.status for row in rows))
