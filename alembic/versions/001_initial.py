"""Initial migration

Revision ID: 001
Revises: 
Create Date: 2026-02-01 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ACTIVE_STATUSES = "('pending', 'confirmed', 'restaurant_confirmed', 'preparing', 'ready')"


def upgrade() -> None:
    # Create restaurants table
    op.create_table(
        'restaurants',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('chat_id', sa.BigInteger(), unique=True, nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
    )

    # Create buildings table
    op.create_table(
        'buildings',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('address', sa.Text()),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
    )

    # Create restaurant_buildings table
    op.create_table(
        'restaurant_buildings',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('restaurant_id', sa.Integer(), sa.ForeignKey('restaurants.id', ondelete='CASCADE'), nullable=False),
        sa.Column('building_id', sa.Integer(), sa.ForeignKey('buildings.id', ondelete='CASCADE'), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
        sa.UniqueConstraint('restaurant_id', 'building_id', name='uq_restaurant_building'),
    )

    # Create users table
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('telegram_user_id', sa.BigInteger(), unique=True, nullable=False),
        sa.Column('username', sa.String(255)),
        sa.Column('first_name', sa.String(255)),
        sa.Column('last_name', sa.String(255)),
        sa.Column('building_id', sa.Integer(), sa.ForeignKey('buildings.id', ondelete='SET NULL')),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
    )

    # Create orders table
    op.create_table(
        'orders',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('restaurant_id', sa.Integer(), sa.ForeignKey('restaurants.id'), nullable=False),
        sa.Column('building_id', sa.Integer(), sa.ForeignKey('buildings.id'), nullable=False),
        sa.Column('delivery_slot', sa.String(5), nullable=False),
        sa.Column('order_date', sa.Date()),
        sa.Column('items', sa.JSON(), nullable=False),
        sa.Column('total_price', sa.Numeric(10, 2), nullable=False),
        sa.Column('status', sa.String(50), nullable=False, server_default='pending'),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now()),
    )

    # Create group_orders table
    op.create_table(
        'group_orders',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('restaurant_id', sa.Integer(), sa.ForeignKey('restaurants.id', ondelete='CASCADE'), nullable=False),
        sa.Column('building_id', sa.Integer(), sa.ForeignKey('buildings.id', ondelete='CASCADE'), nullable=False),
        sa.Column('delivery_slot', sa.String(5), nullable=False),
        sa.Column('order_date', sa.Date(), nullable=False),
        sa.Column('status', sa.String(50), nullable=False, server_default='pending_restaurant'),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
        sa.UniqueConstraint(
            'restaurant_id', 'building_id', 'delivery_slot', 'order_date',
            name='uq_group_orders_key',
        ),
    )

    # Create slot_lobby_reservations table
    op.create_table(
        'slot_lobby_reservations',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('building_id', sa.Integer(), sa.ForeignKey('buildings.id', ondelete='CASCADE'), nullable=False),
        sa.Column('restaurant_id', sa.Integer(), sa.ForeignKey('restaurants.id', ondelete='CASCADE'), nullable=False),
        sa.Column('delivery_slot', sa.String(5), nullable=False),
        sa.Column('order_date', sa.Date(), nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
        sa.UniqueConstraint(
            'building_id', 'restaurant_id', 'delivery_slot', 'order_date', 'user_id',
            name='uq_slot_lobby_user',
        ),
    )

    # Create indexes
    op.create_index(
        'uq_orders_active_user_slot',
        'orders',
        ['user_id', 'building_id', 'restaurant_id', 'delivery_slot', 'order_date'],
        unique=True,
        postgresql_where=sa.text(f"status IN {ACTIVE_STATUSES}"),
    )
    op.create_index('ix_orders_slot_status', 'orders', ['delivery_slot', 'status', 'order_date'])
    op.create_index('ix_group_orders_status', 'group_orders', ['status'])
    op.create_index(
        'ix_slot_lobby_slot',
        'slot_lobby_reservations',
        ['building_id', 'restaurant_id', 'delivery_slot', 'order_date'],
    )
    op.create_index('ix_slot_lobby_reservations_user_id', 'slot_lobby_reservations', ['user_id'])


def downgrade() -> None:
    op.drop_table('slot_lobby_reservations')
    op.drop_table('group_orders')
    op.drop_table('orders')
    op.drop_table('users')
    op.drop_table('restaurant_buildings')
    op.drop_table('buildings')
    op.drop_table('restaurants')
