"""contract state record

Revision ID: 0001_contract_state
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""

from __future__ import annotations

from alembic import op


revision = "0001_contract_state"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.execute("CREATE SCHEMA IF NOT EXISTS app;")
    op.execute(
        """
        CREATE TABLE IF NOT EXISTS app.contract_state (
            namespace text PRIMARY KEY,
            value jsonb NOT NULL,
            created_at timestamptz NOT NULL DEFAULT now(),
            updated_at timestamptz NOT NULL DEFAULT now(),
            CONSTRAINT contract_state_released_bounds CHECK (
                (value->>'released_tokens')::bigint >= 0
                AND (value->>'released_tokens')::bigint <= (value->>'total_tokens')::bigint
            )
        );
        """
    )


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS app.contract_state;")
