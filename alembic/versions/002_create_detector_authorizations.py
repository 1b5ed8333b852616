"""002: create detector_authorizations table

Revision ID: 002
Revises: 001
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE detector_authorizations (
            identity        VARCHAR(42)     PRIMARY KEY,
            authorized      BOOLEAN         NOT NULL DEFAULT FALSE,
            updated_by      VARCHAR(42)     NOT NULL,
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_detector_identity_lower CHECK (identity = LOWER(identity))
        );
    """)
    op.execute("""
        CREATE TRIGGER trg_detector_authorizations_updated_at
            BEFORE UPDATE ON detector_authorizations
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)
    op.execute("COMMENT ON TABLE detector_authorizations IS 'Callers allowed to submit crash responses; edited by the owner only';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS detector_authorizations CASCADE;")
