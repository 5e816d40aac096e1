"""initial nutrilog tables

Revision ID: 3a7c91d2e4f0
Revises: 
Create Date: 2026-10-19 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3a7c91d2e4f0'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    conn = op.get_bind()
    insp = sa.inspect(conn)

    if not insp.has_table('users'):
        op.create_table(
            'users',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('name', sa.String(length=150), nullable=True),
            sa.Column('email', sa.String(length=255), nullable=False),
            sa.Column('password', sa.String(length=255), nullable=True),
            sa.Column('google_id', sa.String(length=255), nullable=True, unique=True),
            sa.Column('avatar', sa.String(length=500), nullable=True),
            sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
            sa.Column('last_login_at', sa.DateTime(), nullable=True),
        )
        op.create_index('ix_users_email', 'users', ['email'], unique=True)

    if not insp.has_table('food_entries'):
        op.create_table(
            'food_entries',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
            sa.Column('food_name', sa.String(length=255), nullable=False),
            sa.Column('meal', sa.String(length=20), nullable=False, server_default='snack'),
            sa.Column('date', sa.Date(), nullable=False),
            sa.Column('quantity', sa.Numeric(10, 2), nullable=True),
            sa.Column('unit', sa.String(length=20), nullable=True),
            sa.Column('calories', sa.Integer(), nullable=False, server_default='0'),
            sa.Column('carbs', sa.Numeric(10, 1), nullable=False, server_default='0'),
            sa.Column('fats', sa.Numeric(10, 1), nullable=False, server_default='0'),
            sa.Column('protein', sa.Numeric(10, 1), nullable=False, server_default='0'),
            sa.Column('sodium', sa.Numeric(10, 1), nullable=False, server_default='0'),
            sa.Column('sugar', sa.Numeric(10, 1), nullable=False, server_default='0'),
            sa.Column('fiber', sa.Numeric(10, 1), nullable=False, server_default='0'),
            sa.Column('micronutrients', sa.JSON(), nullable=True),
            sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        )
        op.create_index('ix_food_entries_user_id', 'food_entries', ['user_id'])
        op.create_index('ix_food_entries_date', 'food_entries', ['date'])

    if not insp.has_table('food_info'):
        op.create_table(
            'food_info',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
            sa.Column('food_name', sa.String(length=255), nullable=False),
            sa.Column('brand', sa.String(length=255), nullable=True),
            sa.Column('barcode', sa.String(length=32), nullable=True),
            sa.Column('source', sa.String(length=32), nullable=False, server_default='manual'),
            sa.Column('serving_size', sa.Numeric(10, 2), nullable=False, server_default='100'),
            sa.Column('serving_unit', sa.String(length=20), nullable=False, server_default='g'),
            sa.Column('calories', sa.Integer(), nullable=False, server_default='0'),
            sa.Column('carbs', sa.Numeric(10, 2), nullable=False, server_default='0'),
            sa.Column('fats', sa.Numeric(10, 2), nullable=False, server_default='0'),
            sa.Column('protein', sa.Numeric(10, 2), nullable=False, server_default='0'),
            sa.Column('sodium', sa.Numeric(10, 2), nullable=False, server_default='0'),
            sa.Column('sugar', sa.Numeric(10, 2), nullable=False, server_default='0'),
            sa.Column('fiber', sa.Numeric(10, 2), nullable=False, server_default='0'),
            sa.Column('micronutrients', sa.JSON(), nullable=True),
            sa.Column('per_gram', sa.JSON(), nullable=False),
            sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
            sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
            sa.UniqueConstraint('user_id', 'food_name', name='uq_food_info_user_name'),
        )
        op.create_index('ix_food_info_user_id', 'food_info', ['user_id'])
        op.create_index('ix_food_info_barcode', 'food_info', ['barcode'])

    if not insp.has_table('nutrition_goals'):
        op.create_table(
            'nutrition_goals',
            sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), primary_key=True),
            sa.Column('calories', sa.Integer(), nullable=False),
            sa.Column('carbs', sa.Integer(), nullable=False),
            sa.Column('protein', sa.Integer(), nullable=False),
            sa.Column('fats', sa.Integer(), nullable=False),
            sa.Column('sodium', sa.Integer(), nullable=False),
            sa.Column('sugar', sa.Integer(), nullable=False),
            sa.Column('fiber', sa.Integer(), nullable=False),
            sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        )


def downgrade():
    # Drop in reverse dependency order
    for tbl in (
        'nutrition_goals',
        'food_info',
        'food_entries',
        'users',
    ):
        op.drop_table(tbl)
