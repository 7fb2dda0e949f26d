"""003: create ledger_transactions table (append-only)

Revision ID: 003
Revises: 002
Create Date: 2026-09-01
"""
from typing import Sequence, Union
from alembic import op

revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE ledger_transactions (
            id              BIGSERIAL    PRIMARY KEY,
            participant_id  VARCHAR(64)  NOT NULL REFERENCES participants(id),
            amount          BIGINT       NOT NULL,
            balance_after   BIGINT       NOT NULL,
            reason          VARCHAR(30)  NOT NULL,
            wager_id        VARCHAR(64)  REFERENCES wagers(id),
            created_at      TIMESTAMPTZ  NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_ledger_balance_after_gte_0 CHECK (balance_after >= 0),
            CONSTRAINT ck_ledger_reason CHECK (
                reason IN ('STARTING_BALANCE', 'BET_PLACED', 'BET_WON', 'BET_LOST', 'BET_PUSH')
            )
        );
    """)
    op.execute(
        "CREATE INDEX idx_ledger_participant ON ledger_transactions (participant_id, id);"
    )
    op.execute("""
        CREATE UNIQUE INDEX uq_ledger_settlement_per_wager
            ON ledger_transactions (wager_id)
            WHERE reason IN ('BET_WON', 'BET_LOST', 'BET_PUSH');
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS ledger_transactions CASCADE;")
