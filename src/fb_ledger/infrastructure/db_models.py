"""SQLAlchemy ORM models for fb_ledger.

These map to tables created by Alembic migrations (alembic/versions/001-003).
DO NOT add/remove columns here without a corresponding migration.
"""

from datetime import datetime

from sqlalchemy import (
    BigInteger,
    Boolean,
    CheckConstraint,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    func,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column

from src.fb_common.database import Base

# SQLite only autoincrements INTEGER PRIMARY KEY
_BigSerial = BigInteger().with_variant(Integer, "sqlite")

_SETTLEMENT_REASONS_SQL = "reason IN ('BET_WON', 'BET_LOST', 'BET_PUSH')"


class ParticipantORM(Base):
    __tablename__ = "participants"
    __table_args__ = (
        CheckConstraint("balance >= 0", name="ck_participants_balance_gte_0"),
    )

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    display_name: Mapped[str] = mapped_column(String(128), nullable=False)
    balance: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    version: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )


class WagerORM(Base):
    __tablename__ = "wagers"
    __table_args__ = (
        CheckConstraint("stake > 0", name="ck_wagers_stake_gt_0"),
        CheckConstraint(
            "bet_type IN ('spread', 'total', 'moneyline')", name="ck_wagers_bet_type"
        ),
        CheckConstraint(
            "status IN ('PENDING', 'WON', 'LOST', 'PUSH')", name="ck_wagers_status"
        ),
        Index("idx_wagers_participant", "participant_id", "placed_at"),
        Index("idx_wagers_matchup_status", "matchup_id", "status"),
        Index("idx_wagers_week", "week"),
    )

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    participant_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("participants.id"), nullable=False
    )
    matchup_id: Mapped[str] = mapped_column(String(64), nullable=False)
    week: Mapped[int] = mapped_column(Integer, nullable=False)
    bet_type: Mapped[str] = mapped_column(String(16), nullable=False)
    selection: Mapped[str] = mapped_column(String(64), nullable=False)
    stake: Mapped[int] = mapped_column(BigInteger, nullable=False)
    odds: Mapped[int] = mapped_column(Integer, nullable=False)
    line_value: Mapped[float | None] = mapped_column(Float, nullable=True)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default="PENDING")
    payout: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    placed_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    settled_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)


class LedgerTransactionORM(Base):
    __tablename__ = "ledger_transactions"
    __table_args__ = (
        CheckConstraint("balance_after >= 0", name="ck_ledger_balance_after_gte_0"),
        CheckConstraint(
            "reason IN ('STARTING_BALANCE', 'BET_PLACED', 'BET_WON', 'BET_LOST', 'BET_PUSH')",
            name="ck_ledger_reason",
        ),
        Index("idx_ledger_participant", "participant_id", "id"),
        # At most one settlement entry per wager
        Index(
            "uq_ledger_settlement_per_wager",
            "wager_id",
            unique=True,
            postgresql_where=text(_SETTLEMENT_REASONS_SQL),
            sqlite_where=text(_SETTLEMENT_REASONS_SQL),
        ),
    )

    id: Mapped[int] = mapped_column(_BigSerial, primary_key=True, autoincrement=True)
    participant_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("participants.id"), nullable=False
    )
    amount: Mapped[int] = mapped_column(BigInteger, nullable=False)
    balance_after: Mapped[int] = mapped_column(BigInteger, nullable=False)
    reason: Mapped[str] = mapped_column(String(30), nullable=False)
    wager_id: Mapped[str | None] = mapped_column(
        String(64), ForeignKey("wagers.id"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    # NOTE: No updated_at; ledger_transactions is append-only
