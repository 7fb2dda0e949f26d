"""001: create participants table

Revision ID: 001
Revises:
Create Date: 2026-09-01
"""
from typing import Sequence, Union
from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE participants (
            id              VARCHAR(64)  PRIMARY KEY,
            display_name    VARCHAR(128) NOT NULL,
            balance         BIGINT       NOT NULL DEFAULT 0,
            is_active       BOOLEAN      NOT NULL DEFAULT TRUE,
            version         BIGINT       NOT NULL DEFAULT 0,
            created_at      TIMESTAMPTZ  NOT NULL DEFAULT NOW(),
            updated_at      TIMESTAMPTZ  NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_participants_balance_gte_0 CHECK (balance >= 0)
        );
    """)
    op.execute(
        "COMMENT ON TABLE participants IS "
        "'League members with a FAAB betting balance, in faab cents (1/100 FAAB)';"
    )


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS participants CASCADE;")
