"""seed default form configs
Revision ID: 0002_seed_form_configs
Revises: 0001_init
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.orm import Session

from outreach.data.default_forms import DEFAULT_FORM_CONFIGS, DEFAULT_SETTINGS
from outreach.scripts.seed_forms import seed_default_form_configs

revision = "0002_seed_form_configs"
down_revision = "0001_init"
branch_labels = None
depends_on = None

def upgrade():
    session = Session(bind=op.get_bind())
    try:
        seed_default_form_configs(session)
    finally:
        session.close()

def downgrade():
    # Only untouched defaults without submissions are removed.
    conn = op.get_bind()
    for item in DEFAULT_FORM_CONFIGS:
        conn.execute(
            sa.text(
                """
                DELETE FROM form_configs
                WHERE form_type = :form_type
                  AND NOT EXISTS (SELECT 1 FROM form_submissions s WHERE s.form_type = :form_type)
                """
            ),
            {"form_type": item["form_type"]},
        )
    for key in DEFAULT_SETTINGS:
        conn.execute(sa.text("DELETE FROM settings WHERE key = :key"), {"key": key})
