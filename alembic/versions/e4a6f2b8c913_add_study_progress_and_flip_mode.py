"""add study progress, flip mode, soft delete and custom instructions

Revision ID: e4a6f2b8c913
Revises: 5c1d3e7a9b20
Create Date: 2025-11-20 18:30:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'e4a6f2b8c913'
down_revision: Union[str, Sequence[str], None] = '5c1d3e7a9b20'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # the startup schema manager may already have added some of these
    bind = op.get_bind()
    inspector = sa.inspect(bind)

    def columns(table: str) -> set[str]:
        return {col["name"] for col in inspector.get_columns(table)}

    if 'flip_mode' not in columns('flashcard_sets'):
        with op.batch_alter_table('flashcard_sets', schema=None) as batch_op:
            batch_op.add_column(sa.Column('flip_mode', sa.Integer(), server_default='0', nullable=False))

    if 'deleted_at' not in columns('flashcards'):
        with op.batch_alter_table('flashcards', schema=None) as batch_op:
            batch_op.add_column(sa.Column('deleted_at', sa.DateTime(), nullable=True))

    if 'custom_instructions' not in columns('llm_interactions'):
        with op.batch_alter_table('llm_interactions', schema=None) as batch_op:
            batch_op.add_column(sa.Column('custom_instructions', sa.Text(), nullable=True))

    if not inspector.has_table('study_progress'):
        op.create_table(
            'study_progress',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('set_id', sa.Integer(), nullable=False),
            sa.Column('flashcard_id', sa.Integer(), nullable=False),
            sa.Column('dont_know', sa.Integer(), server_default='0', nullable=False),
            sa.Column('marked_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
            sa.ForeignKeyConstraint(['set_id'], ['flashcard_sets.id'], ondelete='CASCADE'),
            sa.ForeignKeyConstraint(['flashcard_id'], ['flashcards.id'], ondelete='CASCADE'),
            sa.UniqueConstraint('set_id', 'flashcard_id', name='uq_study_progress_set_flashcard'),
        )
        op.create_index(op.f('ix_study_progress_set_id'), 'study_progress', ['set_id'], unique=False)
        op.create_index(op.f('ix_study_progress_flashcard_id'), 'study_progress', ['flashcard_id'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(op.f('ix_study_progress_flashcard_id'), table_name='study_progress')
    op.drop_index(op.f('ix_study_progress_set_id'), table_name='study_progress')
    op.drop_table('study_progress')
    with op.batch_alter_table('llm_interactions', schema=None) as batch_op:
        batch_op.drop_column('custom_instructions')
    with op.batch_alter_table('flashcards', schema=None) as batch_op:
        batch_op.drop_column('deleted_at')
    with op.batch_alter_table('flashcard_sets', schema=None) as batch_op:
        batch_op.drop_column('flip_mode')
