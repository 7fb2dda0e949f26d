"""002: create wagers table

Revision ID: 002
Revises: 001
Create Date: 2026-09-01
"""
from typing import Sequence, Union
from alembic import op

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE wagers (
            id              VARCHAR(64)      PRIMARY KEY,
            participant_id  VARCHAR(64)      NOT NULL REFERENCES participants(id),
            matchup_id      VARCHAR(64)      NOT NULL,
            week            INTEGER          NOT NULL,
            bet_type        VARCHAR(16)      NOT NULL,
            selection       VARCHAR(64)      NOT NULL,
            stake           BIGINT           NOT NULL,
            odds            INTEGER          NOT NULL,
            line_value      DOUBLE PRECISION,
            status          VARCHAR(16)      NOT NULL DEFAULT 'PENDING',
            payout          BIGINT,
            placed_at       TIMESTAMPTZ      NOT NULL,
            settled_at      TIMESTAMPTZ,
            CONSTRAINT ck_wagers_stake_gt_0 CHECK (stake > 0),
            CONSTRAINT ck_wagers_bet_type CHECK (bet_type IN ('spread', 'total', 'moneyline')),
            CONSTRAINT ck_wagers_status CHECK (status IN ('PENDING', 'WON', 'LOST', 'PUSH'))
        );
    """)
    op.execute("CREATE INDEX idx_wagers_participant ON wagers (participant_id, placed_at);")
    op.execute("CREATE INDEX idx_wagers_matchup_status ON wagers (matchup_id, status);")
    op.execute("CREATE INDEX idx_wagers_week ON wagers (week);")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS wagers CASCADE;")
