"""004: create crash_records table

Revision ID: 004
Revises: 003
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "004"
down_revision: Union[str, None] = "003"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE crash_records (
            seq             BIGSERIAL       PRIMARY KEY,
            collection_id   VARCHAR(42)     NOT NULL,
            detected_at     NUMERIC(78, 0)  NOT NULL,
            current_price   NUMERIC(78, 0)  NOT NULL,
            baseline_price  NUMERIC(78, 0)  NOT NULL,
            crash_kind      SMALLINT        NOT NULL,
            severity_bps    NUMERIC(78, 0)  NOT NULL,
            reporter_tag    VARCHAR(64)     NOT NULL,
            reporter        VARCHAR(42)     NOT NULL,
            recorded_at     TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_crash_kind CHECK (crash_kind BETWEEN 1 AND 4),
            CONSTRAINT ck_crash_prices_gt_0 CHECK (current_price > 0 AND baseline_price > 0),
            CONSTRAINT ck_crash_tag_not_empty CHECK (LENGTH(reporter_tag) > 0)
        );
    """)
    op.execute("CREATE INDEX idx_crash_collection_seq ON crash_records (collection_id, seq DESC);")
    op.execute("""
        CREATE TRIGGER trg_crash_records_append_only
            BEFORE UPDATE OR DELETE ON crash_records
            FOR EACH ROW EXECUTE FUNCTION fn_reject_mutation();
    """)
    op.execute("COMMENT ON TABLE crash_records IS 'Crash history - Append-Only, never updated or deleted';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS crash_records CASCADE;")
