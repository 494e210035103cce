"""Initial schema: users, foods, food_servings, food_sets, food_entries

Revision ID: initial_schema
Revises:
Create Date: 2026-10-17

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = 'initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('password_hash', sa.String(), nullable=False),
        sa.Column('gender', sa.String(), nullable=False),
        sa.Column('birthday', sa.String(length=10), nullable=False),
        sa.Column('weight', sa.Integer(), nullable=True),
        sa.Column('height', sa.Integer(), nullable=True),
        sa.Column('waist', sa.Integer(), nullable=True),
        sa.Column('neck', sa.Integer(), nullable=True),
        sa.Column('hip', sa.Integer(), nullable=True),
        sa.Column('goal', sa.String(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)')),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)')),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_users_id'), 'users', ['id'], unique=False)
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)

    op.create_table(
        'foods',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('calories', sa.Integer(), nullable=False),
        sa.Column('protein', sa.Float(), server_default='0'),
        sa.Column('carbohydrates', sa.Float(), server_default='0'),
        sa.Column('fat', sa.Float(), server_default='0'),
        sa.Column('serving_size', sa.Float(), nullable=False),
        sa.Column('category', sa.String(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)')),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_foods_id'), 'foods', ['id'], unique=False)
    op.create_index(op.f('ix_foods_name'), 'foods', ['name'], unique=False)

    op.create_table(
        'food_servings',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('food_id', sa.Integer(), nullable=False),
        sa.Column('description', sa.String(), nullable=False),
        sa.Column('grams', sa.Float(), nullable=False),
        sa.ForeignKeyConstraint(['food_id'], ['foods.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_food_servings_id'), 'food_servings', ['id'], unique=False)
    op.create_index(op.f('ix_food_servings_food_id'), 'food_servings', ['food_id'], unique=False)

    op.create_table(
        'food_sets',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('description', sa.String(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)')),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_food_sets_id'), 'food_sets', ['id'], unique=False)
    op.create_index(op.f('ix_food_sets_user_id'), 'food_sets', ['user_id'], unique=False)

    op.create_table(
        'food_entries',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('food_id', sa.Integer(), nullable=False),
        sa.Column('serving_desc', sa.String(), nullable=False),
        sa.Column('quantity', sa.Float(), nullable=False),
        sa.Column('date', sa.String(length=10), nullable=False),
        sa.Column('calories', sa.Float(), nullable=False),
        sa.Column('food_set_id', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)')),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.ForeignKeyConstraint(['food_id'], ['foods.id']),
        sa.ForeignKeyConstraint(['food_set_id'], ['food_sets.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_food_entries_id'), 'food_entries', ['id'], unique=False)
    op.create_index(op.f('ix_food_entries_user_id'), 'food_entries', ['user_id'], unique=False)
    op.create_index(op.f('ix_food_entries_date'), 'food_entries', ['date'], unique=False)
    op.create_index(op.f('ix_food_entries_food_set_id'), 'food_entries', ['food_set_id'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_food_entries_food_set_id'), table_name='food_entries')
    op.drop_index(op.f('ix_food_entries_date'), table_name='food_entries')
    op.drop_index(op.f('ix_food_entries_user_id'), table_name='food_entries')
    op.drop_index(op.f('ix_food_entries_id'), table_name='food_entries')
    op.drop_table('food_entries')
    op.drop_index(op.f('ix_food_sets_user_id'), table_name='food_sets')
    op.drop_index(op.f('ix_food_sets_id'), table_name='food_sets')
    op.drop_table('food_sets')
    op.drop_index(op.f('ix_food_servings_food_id'), table_name='food_servings')
    op.drop_index(op.f('ix_food_servings_id'), table_name='food_servings')
    op.drop_table('food_servings')
    op.drop_index(op.f('ix_foods_name'), table_name='foods')
    op.drop_index(op.f('ix_foods_id'), table_name='foods')
    op.drop_table('foods')
    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_index(op.f('ix_users_id'), table_name='users')
    op.drop_table('users')
