"""005: create emergency_mode_events table

Revision ID: 005
Revises: 004
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "005"
down_revision: Union[str, None] = "004"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE emergency_mode_events (
            id              BIGSERIAL       PRIMARY KEY,
            collection_id   VARCHAR(42)     NOT NULL,
            emergency_mode  BOOLEAN         NOT NULL,
            trigger         VARCHAR(20)     NOT NULL,
            reason          TEXT            NOT NULL,
            actor           VARCHAR(42)     NOT NULL,
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_emergency_trigger CHECK (trigger IN ('ESCALATION', 'OVERRIDE'))
        );
    """)
    op.execute("CREATE INDEX idx_emergency_collection ON emergency_mode_events (collection_id, id DESC);")
    op.execute("""
        CREATE TRIGGER trg_emergency_mode_events_append_only
            BEFORE UPDATE OR DELETE ON emergency_mode_events
            FOR EACH ROW EXECUTE FUNCTION fn_reject_mutation();
    """)
    op.execute("COMMENT ON TABLE emergency_mode_events IS 'Emergency mode transitions: automatic escalations and owner overrides';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS emergency_mode_events CASCADE;")
