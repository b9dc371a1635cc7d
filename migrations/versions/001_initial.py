
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001_initial'
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    op.create_table(
        'reservations',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('customer_name', sa.String(length=120), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('phone', sa.String(length=32), nullable=True),
        sa.Column('party_size', sa.Integer(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('meal_period', sa.String(length=16), nullable=False),
        sa.Column('time_identifier', sa.String(length=32), nullable=False),
        sa.Column('table_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.UniqueConstraint('date', 'meal_period', 'time_identifier', 'table_id', name='uq_reservation_slot_table'),
    )
    op.create_index('ix_reservations_slot', 'reservations', ['date', 'meal_period', 'time_identifier'])

def downgrade():
    op.drop_index('ix_reservations_slot', table_name='reservations')
    op.drop_table('reservations')
