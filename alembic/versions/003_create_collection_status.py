"""003: create collection_status table

Revision ID: 003
Revises: 002
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE collection_status (
            collection_id       VARCHAR(42)     PRIMARY KEY,
            emergency_mode      BOOLEAN         NOT NULL DEFAULT FALSE,
            last_crash_at       NUMERIC(78, 0)  NOT NULL DEFAULT 0,
            last_crash_price    NUMERIC(78, 0)  NOT NULL DEFAULT 0,
            crash_count         BIGINT          NOT NULL DEFAULT 0,
            created_at          TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at          TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_status_crash_count_gte_0 CHECK (crash_count >= 0),
            CONSTRAINT ck_status_last_price_gte_0 CHECK (last_crash_price >= 0)
        );
    """)
    op.execute("""
        CREATE TRIGGER trg_collection_status_updated_at
            BEFORE UPDATE ON collection_status
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)
    op.execute("COMMENT ON TABLE collection_status IS 'Per-collection emergency flag and last crash; prices are uint256 in NUMERIC(78,0)';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS collection_status CASCADE;")
