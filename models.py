"""ORM mappings for the web backend's tables.

The schema is owned by the backend's migrations; these classes only map the
columns the maintenance scripts read or write. Table and column names keep
the backend's quoted PascalCase/camelCase spelling.
"""

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, Float, ForeignKey, Integer, String, Text, JSON
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


def _new_id() -> str:
    return str(uuid.uuid4())


def _now() -> datetime:
    return datetime.now()


class Base(DeclarativeBase):
    """Base class for all mapped tables"""
    pass


class User(Base):
    __tablename__ = "User"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String)
    email: Mapped[str] = mapped_column(String, unique=True)
    active: Mapped[bool] = mapped_column(Boolean, default=True)
    perfil: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    current_plan: Mapped[Optional[str]] = mapped_column("currentPlan", String, nullable=True)
    billing_cycle: Mapped[Optional[str]] = mapped_column("billingCycle", String, nullable=True)
    plan_activated_at: Mapped[Optional[datetime]] = mapped_column("planActivatedAt", DateTime, nullable=True)
    plan_expires_at: Mapped[Optional[datetime]] = mapped_column("planExpiresAt", DateTime, nullable=True)
    created_at: Mapped[datetime] = mapped_column("createdAt", DateTime, default=_now)

    challenge_stats: Mapped[Optional["UserChallengeStats"]] = relationship(back_populates="user")


class UserChallengeStats(Base):
    __tablename__ = "UserChallengeStats"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=_new_id)
    user_id: Mapped[str] = mapped_column("userId", ForeignKey("User.id"), unique=True)
    tokens: Mapped[float] = mapped_column(Float, default=1000)
    total_wins: Mapped[int] = mapped_column("totalWins", Integer, default=0)
    total_losses: Mapped[int] = mapped_column("totalLosses", Integer, default=0)
    win_rate: Mapped[float] = mapped_column("winRate", Float, default=0)
    total_profit: Mapped[float] = mapped_column("totalProfit", Float, default=0)
    total_challenges: Mapped[int] = mapped_column("totalChallenges", Integer, default=0)
    active_challenges: Mapped[int] = mapped_column("activeChallenges", Integer, default=0)
    rank: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    best_win_streak: Mapped[int] = mapped_column("bestWinStreak", Integer, default=0)
    current_streak: Mapped[int] = mapped_column("currentStreak", Integer, default=0)
    average_return: Mapped[float] = mapped_column("averageReturn", Float, default=0)
    best_return: Mapped[float] = mapped_column("bestReturn", Float, default=0)
    worst_return: Mapped[float] = mapped_column("worstReturn", Float, default=0)
    auto_accept: Mapped[bool] = mapped_column("autoAccept", Boolean, default=False)
    min_bet_amount: Mapped[float] = mapped_column("minBetAmount", Float, default=10)
    max_bet_amount: Mapped[float] = mapped_column("maxBetAmount", Float, default=500)

    user: Mapped[User] = relationship(back_populates="challenge_stats")


class Challenge(Base):
    __tablename__ = "Challenge"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=_new_id)
    title: Mapped[str] = mapped_column(String)
    challenger_id: Mapped[str] = mapped_column("challengerId", ForeignKey("User.id"))
    challenged_id: Mapped[str] = mapped_column("challengedId", ForeignKey("User.id"))
    status: Mapped[str] = mapped_column(String, default="pending")
    bet_amount: Mapped[float] = mapped_column("betAmount", Float, default=0)
    initial_balance: Mapped[float] = mapped_column("initialBalance", Float, default=10000)
    challenger_current_balance: Mapped[Optional[float]] = mapped_column("challengerCurrentBalance", Float, nullable=True)
    challenged_current_balance: Mapped[Optional[float]] = mapped_column("challengedCurrentBalance", Float, nullable=True)
    challenger_current_return: Mapped[Optional[float]] = mapped_column("challengerCurrentReturn", Float, nullable=True)
    challenged_current_return: Mapped[Optional[float]] = mapped_column("challengedCurrentReturn", Float, nullable=True)
    end_date: Mapped[datetime] = mapped_column("endDate", DateTime)
    end_time: Mapped[str] = mapped_column("endTime", String)
    created_at: Mapped[datetime] = mapped_column("createdAt", DateTime, default=_now)
    updated_at: Mapped[datetime] = mapped_column("updatedAt", DateTime, default=_now)

    challenger: Mapped[User] = relationship(foreign_keys=[challenger_id])
    challenged: Mapped[User] = relationship(foreign_keys=[challenged_id])
    trades: Mapped[list["ChallengeTrade"]] = relationship(back_populates="challenge")


class ChallengeTrade(Base):
    __tablename__ = "ChallengeTrade"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=_new_id)
    challenge_id: Mapped[str] = mapped_column("challengeId", ForeignKey("Challenge.id"))
    user_id: Mapped[str] = mapped_column("userId", ForeignKey("User.id"))
    symbol: Mapped[str] = mapped_column(String)
    side: Mapped[str] = mapped_column(String)
    quantity: Mapped[float] = mapped_column(Float)
    price: Mapped[float] = mapped_column(Float)
    profit: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    timestamp: Mapped[datetime] = mapped_column(DateTime, default=_now)

    challenge: Mapped[Challenge] = relationship(back_populates="trades")
    user: Mapped[User] = relationship()


class Bot(Base):
    __tablename__ = "Bot"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String)
    symbol: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    is_active: Mapped[bool] = mapped_column("isActive", Boolean, default=False)
    total_trades: Mapped[int] = mapped_column("totalTrades", Integer, default=0)
    net_profit: Mapped[float] = mapped_column("netProfit", Float, default=0)
    # Stored as a fraction (0.55 == 55%)
    win_rate: Mapped[float] = mapped_column("winRate", Float, default=0)
    primary_indicator: Mapped[Optional[str]] = mapped_column("primaryIndicator", String, nullable=True)
    timeframe: Mapped[Optional[str]] = mapped_column(String, nullable=True)

    trades: Mapped[list["Trade"]] = relationship(back_populates="bot")


class Trade(Base):
    __tablename__ = "Trade"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=_new_id)
    user_id: Mapped[str] = mapped_column("userId", ForeignKey("User.id"))
    bot_id: Mapped[Optional[str]] = mapped_column("botId", ForeignKey("Bot.id"), nullable=True)
    bot_name: Mapped[Optional[str]] = mapped_column("botName", String, nullable=True)
    symbol: Mapped[str] = mapped_column(String)
    side: Mapped[str] = mapped_column(String)
    type: Mapped[str] = mapped_column(String, default="market")
    quantity: Mapped[float] = mapped_column(Float)
    price: Mapped[float] = mapped_column(Float)
    total: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    trade_type: Mapped[str] = mapped_column("tradeType", String, default="manual")
    environment: Mapped[str] = mapped_column(String, default="simulated")
    status: Mapped[str] = mapped_column(String, default="open")
    pnl: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    pnl_percent: Mapped[Optional[float]] = mapped_column("pnlPercent", Float, nullable=True)
    entry_time: Mapped[Optional[datetime]] = mapped_column("entryTime", DateTime, nullable=True)
    exit_time: Mapped[Optional[datetime]] = mapped_column("exitTime", DateTime, nullable=True)
    exit_price: Mapped[Optional[float]] = mapped_column("exitPrice", Float, nullable=True)
    fees: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    stop_loss: Mapped[Optional[float]] = mapped_column("stopLoss", Float, nullable=True)
    take_profit: Mapped[Optional[float]] = mapped_column("takeProfit", Float, nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column("createdAt", DateTime, default=_now)

    bot: Mapped[Optional[Bot]] = relationship(back_populates="trades")


class PendingOrder(Base):
    __tablename__ = "PendingOrder"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=_new_id)
    user_id: Mapped[str] = mapped_column("userId", ForeignKey("User.id"))
    symbol: Mapped[str] = mapped_column(String)
    side: Mapped[str] = mapped_column(String)
    type: Mapped[str] = mapped_column(String)
    quantity: Mapped[float] = mapped_column(Float)
    price: Mapped[float] = mapped_column(Float)
    total: Mapped[float] = mapped_column(Float)
    status: Mapped[str] = mapped_column(String, default="pending")
    take_profit: Mapped[Optional[float]] = mapped_column("takeProfit", Float, nullable=True)
    stop_loss: Mapped[Optional[float]] = mapped_column("stopLoss", Float, nullable=True)
    created_at: Mapped[datetime] = mapped_column("createdAt", DateTime, default=_now)
    updated_at: Mapped[datetime] = mapped_column("updatedAt", DateTime, default=_now)

    user: Mapped[User] = relationship()


class PlanHistory(Base):
    __tablename__ = "PlanHistory"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=_new_id)
    user_id: Mapped[str] = mapped_column("userId", ForeignKey("User.id"))
    plan_name: Mapped[str] = mapped_column("planName", String)
    old_plan: Mapped[Optional[str]] = mapped_column("oldPlan", String, nullable=True)
    change_type: Mapped[str] = mapped_column("changeType", String)
    price: Mapped[float] = mapped_column(Float)
    billing_cycle: Mapped[str] = mapped_column("billingCycle", String)
    date: Mapped[datetime] = mapped_column(DateTime, default=_now)


class TokenTransaction(Base):
    """Token ledger row; the table itself is created by the schema patch."""
    __tablename__ = "TokenTransaction"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=_new_id)
    user_id: Mapped[str] = mapped_column("userId", ForeignKey("User.id", ondelete="RESTRICT"), index=True)
    type: Mapped[str] = mapped_column(String)
    amount: Mapped[float] = mapped_column(Float)
    balance_after: Mapped[float] = mapped_column("balanceAfter", Float)
    challenge_id: Mapped[Optional[str]] = mapped_column(
        "challengeId", ForeignKey("Challenge.id", ondelete="SET NULL"), nullable=True, index=True
    )
    description: Mapped[str] = mapped_column(Text)
    metadata_: Mapped[Optional[dict]] = mapped_column(
        "metadata", JSON().with_variant(JSONB(), "postgresql"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column("createdAt", DateTime, default=_now)
