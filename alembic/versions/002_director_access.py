"""director setup: access tables, channel config, entity types, wider percent columns

Revision ID: 002_director_access
Revises: 001_baseline
Create Date: 2026-10-19
"""
from alembic import op
import sqlalchemy as sa

revision = '002_director_access'
down_revision = '001_baseline'
branch_labels = None
depends_on = None

ACCESS_TABLES = (
    # (table, target column, target table)
    ('director_region_access', 'region_id', 'regions'),
    ('director_rep_access', 'rep_firm_id', 'rep_firms_master'),
    ('director_customer_access', 'customer_id', 'customers_master'),
)


def upgrade():
    op.add_column('directors', sa.Column(
        'uses_direct_customers', sa.Boolean(), nullable=False, server_default='false'
    ))
    op.add_column('rep_firms_master', sa.Column(
        'entity_type', sa.String(50), nullable=False, server_default='rep_firm'
    ))

    for table, column, target in ACCESS_TABLES:
        columns = [
            sa.Column('id', sa.String(36), primary_key=True),
            sa.Column('director_id', sa.String(36), sa.ForeignKey('directors.id', ondelete='CASCADE'), nullable=False),
            sa.Column(column, sa.String(36), sa.ForeignKey(f'{target}.id', ondelete='CASCADE'), nullable=False),
        ]
        if table == 'director_region_access':
            columns.append(sa.Column('is_primary', sa.Boolean(), nullable=False, server_default='false'))
        columns.append(sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()))

        op.create_table(table, *columns, sa.UniqueConstraint('director_id', column, name=f'uq_{table}'))
        op.create_index(f'ix_{table}_director_id', table, ['director_id'])
        op.create_index(f'ix_{table}_{column}', table, [column])

    op.create_table(
        'director_channel_config',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('director_id', sa.String(36), sa.ForeignKey('directors.id', ondelete='CASCADE'), nullable=False),
        sa.Column('channel_type', sa.String(50), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint('director_id', 'channel_type', name='uq_director_channel_config'),
    )
    op.create_index('ix_director_channel_config_director_id', 'director_channel_config', ['director_id'])

    # Percentages above 99,999.99 overflowed Numeric(7, 2)
    with op.batch_alter_table('rep_firms') as batch_op:
        batch_op.alter_column('percent_to_goal', type_=sa.Numeric(15, 2), existing_nullable=False)
        batch_op.alter_column('yoy_growth', type_=sa.Numeric(15, 2), existing_nullable=False)


def downgrade():
    with op.batch_alter_table('rep_firms') as batch_op:
        batch_op.alter_column('yoy_growth', type_=sa.Numeric(7, 2), existing_nullable=False)
        batch_op.alter_column('percent_to_goal', type_=sa.Numeric(7, 2), existing_nullable=False)

    op.drop_index('ix_director_channel_config_director_id', table_name='director_channel_config')
    op.drop_table('director_channel_config')

    for table, column, _ in reversed(ACCESS_TABLES):
        op.drop_index(f'ix_{table}_{column}', table_name=table)
        op.drop_index(f'ix_{table}_director_id', table_name=table)
        op.drop_table(table)

    op.drop_column('rep_firms_master', 'entity_type')
    op.drop_column('directors', 'uses_direct_customers')
