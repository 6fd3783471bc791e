"""Create PlantPal tables

Revision ID: 001
Revises:
Create Date: 2026-10-17 10:00:00.000000

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create user, plant, diagnosis and community tables"""

    # 1. Users and their linked OAuth identities
    op.create_table('users',
        sa.Column('user_id', sa.String(36), nullable=False),
        sa.Column('username', sa.String(100), nullable=False),
        sa.Column('email', sa.String(254), nullable=True),
        sa.Column('password_hash', sa.String(255), nullable=True),
        sa.Column('provider', sa.String(20), nullable=False, server_default='local'),
        sa.Column('avatar', sa.String(500), nullable=True),
        sa.Column('role', sa.String(20), nullable=False, server_default='user'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),

        sa.PrimaryKeyConstraint('user_id'),
        sa.CheckConstraint("provider IN ('local', 'google', 'facebook')", name='ck_users_provider'),
        sa.CheckConstraint("role IN ('user', 'admin')", name='ck_users_role'),
    )

    op.create_index('ix_users_username', 'users', ['username'], unique=True)
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table('user_identities',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.String(36), nullable=False),
        sa.Column('provider', sa.String(20), nullable=False),
        sa.Column('provider_id', sa.String(255), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),

        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['user_id'], ['users.user_id'], ondelete='CASCADE'),
        sa.UniqueConstraint('provider', 'provider_id', name='uq_user_identities_provider'),
    )

    op.create_index('ix_user_identities_user_id', 'user_identities', ['user_id'])

    # 2. Plants and their append-only diagnosis history
    op.create_table('plants',
        sa.Column('plant_id', sa.String(36), nullable=False),
        sa.Column('owner_id', sa.String(36), nullable=False),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('species', sa.String(200), nullable=False, server_default='Unknown'),
        sa.Column('location', sa.String(200), nullable=False, server_default='Unknown'),
        sa.Column('planted_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('notes', sa.Text(), nullable=False, server_default=''),
        sa.Column('health_status', sa.String(20), nullable=False, server_default='Unknown'),
        sa.Column('last_diagnosis_id', sa.String(36), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),

        sa.PrimaryKeyConstraint('plant_id'),
        sa.ForeignKeyConstraint(['owner_id'], ['users.user_id'], ondelete='CASCADE'),
        sa.CheckConstraint(
            "health_status IN ('Unknown', 'Healthy', 'Diseased', 'Suspicious')",
            name='ck_plants_health_status',
        ),
    )

    op.create_index('ix_plants_owner_id', 'plants', ['owner_id'])
    op.create_index('ix_plants_health_status', 'plants', ['health_status'])

    op.create_table('plant_diagnoses',
        sa.Column('entry_id', sa.String(36), nullable=False),
        sa.Column('plant_id', sa.String(36), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('disease', sa.String(200), nullable=False),
        sa.Column('confidence', sa.Float(), nullable=False),
        sa.Column('image_url', sa.String(500), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),

        sa.PrimaryKeyConstraint('entry_id'),
        sa.ForeignKeyConstraint(['plant_id'], ['plants.plant_id'], ondelete='CASCADE'),
        sa.CheckConstraint('confidence >= 0 AND confidence <= 1', name='ck_plant_diagnoses_confidence'),
    )

    op.create_index('ix_plant_diagnoses_plant_id', 'plant_diagnoses', ['plant_id'])

    # 3. Saved classification results
    op.create_table('diagnosis_records',
        sa.Column('record_id', sa.String(36), nullable=False),
        sa.Column('user_id', sa.String(36), nullable=False),
        sa.Column('disease', sa.String(200), nullable=False),
        sa.Column('confidence', sa.Float(), nullable=False),
        sa.Column('predictions', sa.JSON(), nullable=False),
        sa.Column('recommendations', sa.JSON(), nullable=False),
        sa.Column('plant_info', sa.JSON(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('image_url', sa.String(500), nullable=True),
        sa.Column('timestamp', sa.DateTime(timezone=True), nullable=False),

        sa.PrimaryKeyConstraint('record_id'),
    )

    op.create_index('ix_diagnosis_records_user_id', 'diagnosis_records', ['user_id'])
    op.create_index('ix_diagnosis_records_timestamp', 'diagnosis_records', ['timestamp'])

    # 4. Community feed
    op.create_table('community_posts',
        sa.Column('post_id', sa.String(36), nullable=False),
        sa.Column('author_id', sa.String(36), nullable=False),
        sa.Column('author_name', sa.String(100), nullable=False),
        sa.Column('title', sa.String(300), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('tags', sa.JSON(), nullable=False),
        sa.Column('category', sa.String(100), nullable=False, server_default='general'),
        sa.Column('likes', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('comment_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),

        sa.PrimaryKeyConstraint('post_id'),
        sa.CheckConstraint('likes >= 0', name='ck_community_posts_likes'),
    )

    op.create_index('ix_community_posts_author_id', 'community_posts', ['author_id'])
    op.create_index('ix_community_posts_category', 'community_posts', ['category'])
    op.create_index('ix_community_posts_created_at', 'community_posts', ['created_at'])

    op.create_table('post_comments',
        sa.Column('comment_id', sa.String(36), nullable=False),
        sa.Column('post_id', sa.String(36), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('author_id', sa.String(36), nullable=False),
        sa.Column('author_name', sa.String(100), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),

        sa.PrimaryKeyConstraint('comment_id'),
        sa.ForeignKeyConstraint(['post_id'], ['community_posts.post_id'], ondelete='CASCADE'),
    )

    op.create_index('ix_post_comments_post_id', 'post_comments', ['post_id'])


def downgrade() -> None:
    """Drop PlantPal tables"""
    op.drop_table('post_comments')
    op.drop_table('community_posts')
    op.drop_table('diagnosis_records')
    op.drop_table('plant_diagnoses')
    op.drop_table('plants')
    op.drop_table('user_identities')
    op.drop_table('users')
