"""initial_schema

Revision ID: 001
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    # Create admins table
    op.create_table(
        'admins',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('name', sa.String(50), nullable=False),
        sa.Column('role', sa.Enum('admin', 'superadmin', name='admin_role'), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('login_attempts', sa.Integer(), nullable=False),
        sa.Column('lock_until', sa.DateTime(), nullable=True),
        sa.Column('refresh_token', sa.Text(), nullable=True),
        sa.Column('last_login', sa.DateTime(), nullable=True),
        sa.Column('password_changed_at', sa.DateTime(), nullable=True),
        sa.Column('created_by', sa.String(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_admins_email'), 'admins', ['email'], unique=True)
    op.create_index(op.f('ix_admins_id'), 'admins', ['id'], unique=False)

    # Create properties table
    op.create_table(
        'properties',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('address', sa.String(300), nullable=False),
        sa.Column('images', sa.JSON(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_properties_id'), 'properties', ['id'], unique=False)

    # Create contacts table
    op.create_table(
        'contacts',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('phone', sa.String(20), nullable=True),
        sa.Column('subject', sa.String(200), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('status', sa.Enum('new', 'read', 'replied', name='contact_status'), nullable=False),
        sa.Column('reply', sa.Text(), nullable=True),
        sa.Column('reply_date', sa.DateTime(), nullable=True),
        sa.Column('ip_address', sa.String(45), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_contacts_id'), 'contacts', ['id'], unique=False)
    op.create_index(op.f('ix_contacts_email'), 'contacts', ['email'], unique=False)
    op.create_index(op.f('ix_contacts_status'), 'contacts', ['status'], unique=False)

    # Create page content singletons
    op.create_table(
        'home_content',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('hero_title', sa.String(200), nullable=False),
        sa.Column('hero_subtitle', sa.String(300), nullable=True),
        sa.Column('hero_description', sa.String(1000), nullable=True),
        sa.Column('hero_image', sa.String(500), nullable=True),
        sa.Column('hero_cta_text', sa.String(50), nullable=True),
        sa.Column('hero_cta_link', sa.String(500), nullable=True),
        sa.Column('featured_property_ids', sa.JSON(), nullable=False),
        sa.Column('sections', sa.JSON(), nullable=False),
        sa.Column('testimonials', sa.JSON(), nullable=False),
        sa.Column('stats', sa.JSON(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_home_content_id'), 'home_content', ['id'], unique=False)

    op.create_table(
        'about_content',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('subtitle', sa.String(300), nullable=True),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('mission', sa.String(1000), nullable=True),
        sa.Column('vision', sa.String(1000), nullable=True),
        sa.Column('values', sa.JSON(), nullable=False),
        sa.Column('team_members', sa.JSON(), nullable=False),
        sa.Column('company_stats', sa.JSON(), nullable=False),
        sa.Column('images', sa.JSON(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_about_content_id'), 'about_content', ['id'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(op.f('ix_about_content_id'), table_name='about_content')
    op.drop_table('about_content')
    op.drop_index(op.f('ix_home_content_id'), table_name='home_content')
    op.drop_table('home_content')
    op.drop_index(op.f('ix_contacts_status'), table_name='contacts')
    op.drop_index(op.f('ix_contacts_email'), table_name='contacts')
    op.drop_index(op.f('ix_contacts_id'), table_name='contacts')
    op.drop_table('contacts')
    op.drop_index(op.f('ix_properties_id'), table_name='properties')
    op.drop_table('properties')
    op.drop_index(op.f('ix_admins_id'), table_name='admins')
    op.drop_index(op.f('ix_admins_email'), table_name='admins')
    op.drop_table('admins')
    sa.Enum(name='contact_status').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='admin_role').drop(op.get_bind(), checkfirst=True)
