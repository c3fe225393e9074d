"""initial schema

Revision ID: 5c1d3e7a9b20
Revises:
Create Date: 2025-11-02 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5c1d3e7a9b20'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'images',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('filename', sa.String(length=255), nullable=False),
        sa.Column('filepath', sa.String(length=512), nullable=False),
        sa.Column('mime_type', sa.String(length=100), nullable=False),
        sa.Column('size', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
    )
    op.create_table(
        'llm_interactions',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('image_id', sa.Integer(), nullable=True),
        sa.Column('model', sa.String(length=255), nullable=False),
        sa.Column('prompt', sa.Text(), nullable=False),
        sa.Column('response', sa.Text(), nullable=False),
        sa.Column('tokens_used', sa.Integer(), nullable=True),
        sa.Column('cost', sa.Float(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(['image_id'], ['images.id'], ondelete='CASCADE'),
    )
    op.create_index(op.f('ix_llm_interactions_image_id'), 'llm_interactions', ['image_id'], unique=False)
    op.create_table(
        'interaction_images',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('interaction_id', sa.Integer(), nullable=False),
        sa.Column('image_id', sa.Integer(), nullable=False),
        sa.Column('order_index', sa.Integer(), server_default='0', nullable=False),
        sa.ForeignKeyConstraint(['interaction_id'], ['llm_interactions.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['image_id'], ['images.id'], ondelete='CASCADE'),
        sa.UniqueConstraint('interaction_id', 'image_id', name='uq_interaction_images_interaction_image'),
    )
    op.create_index(op.f('ix_interaction_images_interaction_id'), 'interaction_images', ['interaction_id'], unique=False)
    op.create_index(op.f('ix_interaction_images_image_id'), 'interaction_images', ['image_id'], unique=False)
    op.create_table(
        'flashcard_sets',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('llm_interaction_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(['llm_interaction_id'], ['llm_interactions.id'], ondelete='CASCADE'),
    )
    op.create_index(op.f('ix_flashcard_sets_llm_interaction_id'), 'flashcard_sets', ['llm_interaction_id'], unique=False)
    op.create_table(
        'flashcards',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('set_id', sa.Integer(), nullable=False),
        sa.Column('question', sa.Text(), nullable=False),
        sa.Column('answer', sa.Text(), nullable=False),
        sa.Column('order_index', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(['set_id'], ['flashcard_sets.id'], ondelete='CASCADE'),
    )
    op.create_index(op.f('ix_flashcards_set_id'), 'flashcards', ['set_id'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(op.f('ix_flashcards_set_id'), table_name='flashcards')
    op.drop_table('flashcards')
    op.drop_index(op.f('ix_flashcard_sets_llm_interaction_id'), table_name='flashcard_sets')
    op.drop_table('flashcard_sets')
    op.drop_index(op.f('ix_interaction_images_image_id'), table_name='interaction_images')
    op.drop_index(op.f('ix_interaction_images_interaction_id'), table_name='interaction_images')
    op.drop_table('interaction_images')
    op.drop_index(op.f('ix_llm_interactions_image_id'), table_name='llm_interactions')
    op.drop_table('llm_interactions')
    op.drop_table('images')
