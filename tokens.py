"""Token balance maintenance: bulk grants, resets and bet settlement."""

from typing import Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

import config
from models import User, UserChallengeStats


def default_stats(user_id: str, tokens: float) -> Dict:
    """Column values for a freshly created stats row."""
    return {
        "user_id": user_id,
        "tokens": tokens,
        "total_wins": 0,
        "total_losses": 0,
        "win_rate": 0,
        "total_profit": 0,
        "total_challenges": 0,
        "active_challenges": 0,
        "best_win_streak": 0,
        "current_streak": 0,
        "average_return": 0,
        "best_return": 0,
        "worst_return": 0,
        "auto_accept": False,
        "min_bet_amount": config.DEFAULT_MIN_BET,
        "max_bet_amount": config.DEFAULT_MAX_BET,
    }


def grant_tokens(session: Session, amount: float = config.TOKEN_GRANT_AMOUNT) -> int:
    """Add `amount` tokens to every stats row, committing row by row.

    A failure leaves the rows already processed committed. Returns the
    number of rows updated.
    """
    rows = session.scalars(select(UserChallengeStats)).all()
    for stats in rows:
        stats.tokens = (stats.tokens or 0) + amount
        session.commit()
    return len(rows)


def get_stats(session: Session, user_id: str) -> Optional[UserChallengeStats]:
    return session.scalar(select(UserChallengeStats).where(UserChallengeStats.user_id == user_id))


def ensure_stats(session: Session, user_id: str, tokens: float = config.TOKEN_GRANT_AMOUNT) -> UserChallengeStats:
    """Return the user's stats row, creating it with defaults if missing.

    An existing row is left untouched.
    """
    stats = get_stats(session, user_id)
    if stats is None:
        stats = UserChallengeStats(**default_stats(user_id, tokens))
        session.add(stats)
        session.flush()
    return stats


def reset_tokens(session: Session, amount: float = config.TOKEN_GRANT_AMOUNT) -> List[User]:
    """Set every active user's balance to `amount`, creating missing stats rows.

    Each user is committed on its own.
    """
    users = session.scalars(select(User).where(User.active.is_(True))).all()
    for user in users:
        stats = get_stats(session, user.id)
        if stats is None:
            session.add(UserChallengeStats(**default_stats(user.id, amount)))
        else:
            stats.tokens = amount
        session.commit()
    return list(users)


def adjust_tokens(session: Session, user_id: str, delta: float) -> float:
    """Apply a signed change to a user's balance and return the new balance."""
    stats = get_stats(session, user_id)
    if stats is None:
        raise LookupError(f"No challenge stats for user {user_id}")
    stats.tokens = stats.tokens + delta
    session.flush()
    return stats.tokens


def settle_bet(challenger_balance: float, challenged_balance: float, bet: float, challenger_wins: bool = True):
    """Balances after both sides staked `bet` and the challenge was settled.

    Both stakes are deducted up front; settlement then credits the winner
    with the bet and debits the loser once more.
    """
    challenger_balance -= bet
    challenged_balance -= bet
    if challenger_wins:
        return challenger_balance + bet, challenged_balance - bet
    return challenger_balance - bet, challenged_balance + bet
