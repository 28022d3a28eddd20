"""Challenge expiry and balance bookkeeping."""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from logger import get_logger
from models import Challenge

logger = get_logger(__name__)


def end_datetime(end_date: datetime, end_time: str) -> datetime:
    """Combine the stored end date with its "HH:MM" time of day.

    Raises ValueError when `end_time` is empty or not a valid time.
    """
    if not end_time:
        raise ValueError("end time is empty")
    hours, minutes = (int(part) for part in end_time.split(":")[:2])
    return end_date.replace(hour=hours, minute=minutes, second=0, microsecond=0)


def is_challenge_expired(
    end_date: datetime, end_time: str, now: Optional[datetime] = None, challenge_id: Optional[str] = None
) -> bool:
    """True once `now` is strictly past the end moment.

    A malformed end time never expires; it is logged and skipped.
    """
    now = now or datetime.now()
    try:
        end = end_datetime(end_date, end_time)
    except ValueError as e:
        logger.warning(
            f"Skipping challenge with invalid end time {end_time!r}: {e}",
            extra={"context": {"challenge_id": challenge_id}},
        )
        return False
    return now > end


def update_expired_challenges(session: Session, now: Optional[datetime] = None) -> List[str]:
    """Mark active challenges whose end moment has passed as completed.

    Each challenge is committed on its own. Returns the ids of the
    challenges that were updated.
    """
    now = now or datetime.now()
    candidates = session.scalars(
        select(Challenge).where(Challenge.status == "active", Challenge.end_date < now)
    ).all()

    updated = []
    for challenge in candidates:
        if not is_challenge_expired(challenge.end_date, challenge.end_time, now, challenge_id=challenge.id):
            continue
        challenge.status = "completed"
        challenge.updated_at = now
        session.commit()
        logger.info(
            f"Challenge {challenge.title} marked as expired", extra={"context": {"challenge_id": challenge.id}}
        )
        updated.append(challenge.id)
    return updated


def apply_trade_result(challenge: Challenge, user_id: str, profit: float):
    """Fold a trade's profit into the trading side's balance and return %.

    Returns (new_balance, new_return_percent).
    """
    is_challenger = challenge.challenger_id == user_id
    current = challenge.challenger_current_balance if is_challenger else challenge.challenged_current_balance
    # An unset (or zero) balance means the side has not traded yet
    new_balance = (current or challenge.initial_balance) + profit
    new_return = (new_balance - challenge.initial_balance) / challenge.initial_balance * 100

    if is_challenger:
        challenge.challenger_current_balance = new_balance
        challenge.challenger_current_return = new_return
    else:
        challenge.challenged_current_balance = new_balance
        challenge.challenged_current_return = new_return
    return new_balance, new_return
