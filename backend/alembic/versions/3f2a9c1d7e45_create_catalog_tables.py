"""create catalog tables

Revision ID: 3f2a9c1d7e45
Revises:
Create Date: 2025-07-14 09:12:40.118302

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f2a9c1d7e45'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'videos',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('title', sa.String(length=500), nullable=False),
        sa.Column('thumbnail_url', sa.String(length=512), nullable=False),
        sa.Column('duration', sa.Integer(), nullable=False),
        sa.Column('views', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.CheckConstraint('duration >= 1', name='ck_videos_duration_positive'),
        sa.CheckConstraint('views >= 0', name='ck_videos_views_non_negative'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_videos_created_at', 'videos', ['created_at'], unique=False)
    op.create_index('idx_videos_views', 'videos', ['views'], unique=False)

    op.create_table(
        'tags',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('color', sa.String(length=7), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_tags_name'), 'tags', ['name'], unique=True)

    op.create_table(
        'video_tags',
        sa.Column('video_id', sa.String(length=36), nullable=False),
        sa.Column('tag_id', sa.String(length=36), nullable=False),
        sa.ForeignKeyConstraint(['tag_id'], ['tags.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['video_id'], ['videos.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('video_id', 'tag_id'),
    )
    op.create_index('idx_video_tags_tag_id', 'video_tags', ['tag_id'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('idx_video_tags_tag_id', table_name='video_tags')
    op.drop_table('video_tags')
    op.drop_index(op.f('ix_tags_name'), table_name='tags')
    op.drop_table('tags')
    op.drop_index('idx_videos_views', table_name='videos')
    op.drop_index('idx_videos_created_at', table_name='videos')
    op.drop_table('videos')
