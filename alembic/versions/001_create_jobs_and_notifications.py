"""Create jobs and notifications tables

Revision ID: 001
Revises:
Create Date: 2026-10-18 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    """Create the job queue and notification inbox tables."""
    
    op.create_table(
        'jobs',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('status', sa.String(20), nullable=False, server_default='pending'),
        sa.Column('cv_content', sa.Text(), nullable=False),
        sa.Column('target_role', sa.String(255), nullable=False),
        sa.Column('result', sa.Text(), nullable=True),
        sa.Column('error', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.current_timestamp()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.current_timestamp()),
    )
    # Worker polls pending jobs oldest first
    op.create_index('idx_jobs_status_created_at', 'jobs', ['status', 'created_at'])
    
    op.create_table(
        'notifications',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('job_id', sa.String(36), sa.ForeignKey('jobs.id'), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('is_read', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.current_timestamp()),
    )
    op.create_index('ix_notifications_job_id', 'notifications', ['job_id'])
    op.create_index('idx_notifications_is_read_created_at', 'notifications', ['is_read', 'created_at'])


def downgrade() -> None:
    """Drop the job queue and notification inbox tables."""
    
    op.drop_index('idx_notifications_is_read_created_at', table_name='notifications')
    op.drop_index('ix_notifications_job_id', table_name='notifications')
    op.drop_table('notifications')
    
    op.drop_index('idx_jobs_status_created_at', table_name='jobs')
    op.drop_table('jobs')
