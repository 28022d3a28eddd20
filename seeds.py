"""Sample data for development databases.

Everything here is pure: the seed scripts decide which users to target and
persist the rows.
"""

import random
from datetime import datetime
from typing import Dict, List, Optional

BASE_TOKENS = 1000
TOKENS_PER_RESULT = 50
MIN_TOKENS = 100


def random_challenge_stats(rng: Optional[random.Random] = None) -> Dict:
    """Plausible-looking challenge stats; tokens follow the win/loss balance."""
    rng = rng or random.Random()
    total_wins = rng.randint(1, 20)
    total_losses = rng.randint(1, 15)
    total_challenges = total_wins + total_losses
    win_rate = total_wins / total_challenges * 100

    profit_tokens = (total_wins - total_losses) * TOKENS_PER_RESULT
    tokens = max(MIN_TOKENS, BASE_TOKENS + profit_tokens)

    if rng.random() > 0.5:
        current_streak = rng.randint(1, 5)
    else:
        current_streak = -rng.randint(1, 3)

    return {
        "tokens": tokens,
        "total_wins": total_wins,
        "total_losses": total_losses,
        "win_rate": win_rate,
        "total_profit": profit_tokens,
        "total_challenges": total_challenges,
        "active_challenges": rng.randint(0, 2),
        "rank": rng.randint(1, 100),
        "best_win_streak": rng.randint(1, 8),
        "current_streak": current_streak,
        "average_return": rng.random() * 20 - 10,
        "best_return": rng.random() * 30 + 5,
        "worst_return": -(rng.random() * 25 + 5),
        "auto_accept": rng.random() > 0.8,
        "min_bet_amount": 10,
        "max_bet_amount": min(500, tokens * 0.5),
    }


def plan_history_entries(user_id: str) -> List[Dict]:
    """Four plan changes ending on an annual ENTUSIASTA BLACK downgrade."""
    return [
        {
            "user_id": user_id,
            "plan_name": "INICIANTE BLACK",
            "change_type": "new",
            "price": 5.00,
            "billing_cycle": "mensal",
            "date": datetime(2024, 1, 15, 10, 30),
        },
        {
            "user_id": user_id,
            "plan_name": "ENTUSIASTA BLACK",
            "old_plan": "INICIANTE BLACK",
            "change_type": "upgrade",
            "price": 59.00,
            "billing_cycle": "anual",
            "date": datetime(2024, 2, 20, 14, 15),
        },
        {
            "user_id": user_id,
            "plan_name": "ESTRATEGISTA BLACK",
            "old_plan": "ENTUSIASTA BLACK",
            "change_type": "upgrade",
            "price": 99.00,
            "billing_cycle": "anual",
            "date": datetime(2024, 3, 10, 9, 45),
        },
        {
            "user_id": user_id,
            "plan_name": "ENTUSIASTA BLACK",
            "old_plan": "ESTRATEGISTA BLACK",
            "change_type": "downgrade",
            "price": 59.00,
            "billing_cycle": "anual",
            "date": datetime(2024, 4, 5, 16, 20),
        },
    ]


# Applied to the user after the history above is inserted
CURRENT_PLAN = {
    "current_plan": "ENTUSIASTA BLACK",
    "billing_cycle": "anual",
    "plan_activated_at": datetime(2024, 4, 5, 16, 20),
    "plan_expires_at": datetime(2025, 4, 5, 16, 20),
}


def _closed(symbol, side, type_, quantity, price, trade_type, environment, pnl, pnl_percent,
            entry, exit_, fees, notes, bot_name=None):
    return {
        "symbol": symbol, "side": side, "type": type_, "quantity": quantity, "price": price,
        "total": round(quantity * price, 2), "trade_type": trade_type, "environment": environment,
        "bot_name": bot_name, "pnl": pnl, "pnl_percent": pnl_percent, "status": "closed",
        "entry_time": entry, "exit_time": exit_, "fees": fees, "notes": notes,
    }


def sample_trades(user_id: str) -> List[Dict]:
    """Eight trades across manual/automated/bot and real/simulated/paper.

    Bot trades carry only the bot name; the seed script resolves bot ids.
    """
    trades = [
        _closed("BTCUSDT", "buy", "market", 0.001, 45000.00, "manual", "real", 2.50, 5.56,
                datetime(2024, 1, 15, 10, 30), datetime(2024, 1, 15, 14, 45), 0.10,
                "Manual trade based on technical analysis"),
        _closed("ETHUSDT", "sell", "limit", 0.01, 3200.00, "manual", "real", -1.20, -3.75,
                datetime(2024, 1, 16, 9, 15), datetime(2024, 1, 16, 11, 30), 0.08,
                "Stop loss hit"),
        _closed("ADAUSDT", "buy", "market", 100, 0.45, "automated", "simulated", 3.75, 8.33,
                datetime(2024, 1, 17, 8, 0), datetime(2024, 1, 17, 16, 0), 0.05,
                "Executed by the RSI bot", bot_name="RSI Strategy Bot"),
        _closed("DOTUSDT", "sell", "market", 5, 7.20, "automated", "simulated", -0.90, -2.50,
                datetime(2024, 1, 18, 12, 30), datetime(2024, 1, 18, 15, 45), 0.04,
                "MACD sell signal", bot_name="MACD Crossover Bot"),
        _closed("SOLUSDT", "buy", "limit", 0.5, 95.00, "bot", "paper", 4.25, 8.95,
                datetime(2024, 1, 19, 10, 0), datetime(2024, 1, 19, 18, 0), 0.06,
                "Lower band touched", bot_name="Bollinger Bands Bot"),
        _closed("LINKUSDT", "sell", "market", 2, 15.50, "bot", "paper", 1.80, 5.81,
                datetime(2024, 1, 20, 14, 0), datetime(2024, 1, 20, 20, 0), 0.04,
                "Moving average crossover", bot_name="Moving Average Bot"),
        {
            "symbol": "MATICUSDT", "side": "buy", "type": "market", "quantity": 50, "price": 0.85,
            "total": 42.50, "trade_type": "manual", "environment": "real", "status": "open",
            "entry_time": datetime(2024, 1, 21, 9, 0), "stop_loss": 0.80, "take_profit": 0.95,
            "notes": "Open trade, waiting for exit",
        },
        {
            "symbol": "AVAXUSDT", "side": "buy", "type": "limit", "quantity": 0.2, "price": 35.00,
            "total": 7.00, "trade_type": "automated", "environment": "simulated",
            "bot_name": "Stochastic Bot", "status": "open",
            "entry_time": datetime(2024, 1, 21, 11, 30), "stop_loss": 33.50, "take_profit": 37.00,
            "notes": "Bot active, monitoring",
        },
    ]
    for trade in trades:
        trade["user_id"] = user_id
    return trades
