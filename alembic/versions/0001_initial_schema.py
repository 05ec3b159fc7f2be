"""initial analytics schema

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-18
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'user',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('username', sa.String(255), nullable=False),
        sa.Column('role', sa.String(50), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
        sa.Column('deleted_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_user_username', 'user', ['username'], unique=True)

    op.create_table(
        'team',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(50), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
    )

    op.create_table(
        'team_user',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('team_id', sa.String(36), sa.ForeignKey('team.id'), nullable=False),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('user.id'), nullable=False),
        sa.Column('role', sa.String(50), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index('ix_team_user_team_id', 'team_user', ['team_id'])
    op.create_index('ix_team_user_user_id', 'team_user', ['user_id'])

    op.create_table(
        'api_key',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('user.id'), nullable=False),
        sa.Column('name', sa.String(255), nullable=True),
        sa.Column('key_hash', sa.String(64), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index('ix_api_key_user_id', 'api_key', ['user_id'])
    op.create_index('ix_api_key_key_hash', 'api_key', ['key_hash'], unique=True)

    op.create_table(
        'website',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('domain', sa.String(500), nullable=True),
        sa.Column('share_id', sa.String(50), nullable=True, unique=True),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('user.id'), nullable=True),
        sa.Column('team_id', sa.String(36), sa.ForeignKey('team.id'), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
        sa.Column('deleted_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_website_user_id', 'website', ['user_id'])
    op.create_index('ix_website_team_id', 'website', ['team_id'])

    op.create_table(
        'session',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('website_id', sa.String(36), sa.ForeignKey('website.id'), nullable=False),
        sa.Column('hostname', sa.String(100), nullable=True),
        sa.Column('browser', sa.String(20), nullable=True),
        sa.Column('os', sa.String(20), nullable=True),
        sa.Column('device', sa.String(20), nullable=True),
        sa.Column('screen', sa.String(11), nullable=True),
        sa.Column('language', sa.String(35), nullable=True),
        sa.Column('country', sa.String(2), nullable=True),
        sa.Column('region', sa.String(20), nullable=True),
        sa.Column('city', sa.String(50), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_session_website_id', 'session', ['website_id'])
    op.create_index('ix_session_created_at', 'session', ['created_at'])

    op.create_table(
        'website_event',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('website_id', sa.String(36), sa.ForeignKey('website.id'), nullable=False),
        sa.Column('session_id', sa.String(36), sa.ForeignKey('session.id'), nullable=False),
        sa.Column('visit_id', sa.String(36), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('url_path', sa.String(500), nullable=False),
        sa.Column('url_query', sa.String(500), nullable=True),
        sa.Column('referrer_domain', sa.String(500), nullable=True),
        sa.Column('page_title', sa.String(500), nullable=True),
        sa.Column('hostname', sa.String(100), nullable=True),
        sa.Column('event_type', sa.Integer(), nullable=False),
        sa.Column('event_name', sa.String(50), nullable=True),
    )
    op.create_index('ix_website_event_website_id_created_at', 'website_event', ['website_id', 'created_at'])
    op.create_index(
        'ix_website_event_website_id_session_id_created_at',
        'website_event',
        ['website_id', 'session_id', 'created_at'],
    )

    op.create_table(
        'report',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('user.id'), nullable=False),
        sa.Column('website_id', sa.String(36), sa.ForeignKey('website.id'), nullable=False),
        sa.Column('type', sa.String(200), nullable=False),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('description', sa.String(500), nullable=True),
        sa.Column('parameters', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index('ix_report_user_id', 'report', ['user_id'])
    op.create_index('ix_report_website_id', 'report', ['website_id'])


def downgrade():
    op.drop_table('report')
    op.drop_table('website_event')
    op.drop_table('session')
    op.drop_table('website')
    op.drop_table('api_key')
    op.drop_table('team_user')
    op.drop_table('team')
    op.drop_table('user')
