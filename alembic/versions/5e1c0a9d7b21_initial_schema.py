"""initial_schema

Revision ID: 5e1c0a9d7b21
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = '5e1c0a9d7b21'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('first_name', sa.String(length=128), nullable=True),
        sa.Column('last_name', sa.String(length=128), nullable=True),
        sa.Column('hashed_password', sa.String(length=255), nullable=False),
        sa.Column('role', sa.String(length=32), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_users_id'), 'users', ['id'], unique=False)
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)

    op.create_table(
        'books',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('author', sa.String(length=255), nullable=False),
        sa.Column('isbn', sa.String(length=32), nullable=True),
        sa.Column('publisher', sa.String(length=255), nullable=True),
        sa.Column('reading_duration_minutes', sa.Integer(), nullable=True),
        sa.Column('description', sa.String(length=2000), nullable=True),
        sa.Column('available', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_books_id'), 'books', ['id'], unique=False)
    op.create_index(op.f('ix_books_title'), 'books', ['title'], unique=False)
    op.create_index(op.f('ix_books_author'), 'books', ['author'], unique=False)

    op.create_table(
        'statuses',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=128), nullable=False),
        sa.Column('description', sa.String(length=500), nullable=True),
        sa.Column('sort_order', sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
    )
    op.create_index(op.f('ix_statuses_id'), 'statuses', ['id'], unique=False)

    op.create_table(
        'orders',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('aveugle_id', sa.Integer(), nullable=False),
        sa.Column('catalogue_id', sa.Integer(), nullable=False),
        sa.Column('request_received_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('status_id', sa.Integer(), nullable=False),
        sa.Column('is_duplication', sa.Boolean(), nullable=False),
        sa.Column('lent_physical_book', sa.Boolean(), nullable=False),
        sa.Column(
            'delivery_method',
            sa.Enum('RETRAIT', 'ENVOI', 'NON_APPLICABLE', name='deliverymethod'),
            nullable=True,
        ),
        sa.Column(
            'billing_status',
            sa.Enum('UNBILLED', 'BILLED', 'PAID', name='billingstatus'),
            nullable=False,
        ),
        sa.Column('cost', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column('processed_by_staff_id', sa.Integer(), nullable=True),
        sa.Column('closure_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('notes', sa.String(length=2000), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['aveugle_id'], ['users.id']),
        sa.ForeignKeyConstraint(['catalogue_id'], ['books.id']),
        sa.ForeignKeyConstraint(['status_id'], ['statuses.id']),
        sa.ForeignKeyConstraint(['processed_by_staff_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_orders_id'), 'orders', ['id'], unique=False)
    op.create_index(op.f('ix_orders_aveugle_id'), 'orders', ['aveugle_id'], unique=False)
    op.create_index(op.f('ix_orders_catalogue_id'), 'orders', ['catalogue_id'], unique=False)
    op.create_index(op.f('ix_orders_status_id'), 'orders', ['status_id'], unique=False)

    op.create_table(
        'assignments',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('catalogue_id', sa.Integer(), nullable=False),
        sa.Column('order_id', sa.Integer(), nullable=True),
        sa.Column('status_id', sa.Integer(), nullable=False),
        sa.Column('reception_date', sa.Date(), nullable=True),
        sa.Column('sent_to_reader_date', sa.Date(), nullable=True),
        sa.Column('returned_to_eca_date', sa.Date(), nullable=True),
        sa.Column('notes', sa.String(length=2000), nullable=True),
        sa.ForeignKeyConstraint(['catalogue_id'], ['books.id']),
        sa.ForeignKeyConstraint(['order_id'], ['orders.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['status_id'], ['statuses.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_assignments_id'), 'assignments', ['id'], unique=False)
    op.create_index(op.f('ix_assignments_catalogue_id'), 'assignments', ['catalogue_id'], unique=False)
    op.create_index(op.f('ix_assignments_order_id'), 'assignments', ['order_id'], unique=False)
    op.create_index(op.f('ix_assignments_status_id'), 'assignments', ['status_id'], unique=False)

    op.create_table(
        'assignment_readers',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('assignment_id', sa.Integer(), nullable=False),
        sa.Column('reader_id', sa.Integer(), nullable=False),
        sa.Column('assigned_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('notes', sa.String(length=1000), nullable=True),
        sa.ForeignKeyConstraint(['assignment_id'], ['assignments.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['reader_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_assignment_readers_id'), 'assignment_readers', ['id'], unique=False)
    op.create_index(
        op.f('ix_assignment_readers_assignment_id'), 'assignment_readers', ['assignment_id'], unique=False
    )
    op.create_index(op.f('ix_assignment_readers_reader_id'), 'assignment_readers', ['reader_id'], unique=False)


def downgrade() -> None:
    op.drop_table('assignment_readers')
    op.drop_table('assignments')
    op.drop_table('orders')
    op.drop_table('statuses')
    op.drop_table('books')
    op.drop_table('users')
    # Drop the enum types (needed for PostgreSQL, no-op for SQLite)
    sa.Enum(name='billingstatus').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='deliverymethod').drop(op.get_bind(), checkfirst=True)
