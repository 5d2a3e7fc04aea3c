"""baseline schema - reports, sections, audit, master data

Revision ID: 001_baseline
Revises:
Create Date: 2026-10-19
"""
from alembic import op
import sqlalchemy as sa

revision = '001_baseline'
down_revision = None
branch_labels = None
depends_on = None


def _id():
    return sa.Column('id', sa.String(36), nullable=False)


def _report_fk():
    return sa.Column('report_id', sa.String(36), nullable=False)


def _money(name):
    return sa.Column(name, sa.Numeric(15, 2), nullable=False, server_default='0')


def upgrade():
    # Regions table
    op.create_table('regions',
        _id(),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_regions_name', 'regions', ['name'], unique=True)

    # Directors table
    op.create_table('directors',
        _id(),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('region', sa.String(255), nullable=True),
        sa.Column('region_id', sa.String(36), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['region_id'], ['regions.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_directors_name', 'directors', ['name'])
    op.create_index('ix_directors_email', 'directors', ['email'], unique=True)
    op.create_index('ix_directors_region_id', 'directors', ['region_id'])

    # Master lists
    op.create_table('rep_firms_master',
        _id(),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('region_id', sa.String(36), nullable=True),
        sa.Column('active', sa.Boolean(), nullable=False, server_default='true'),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['region_id'], ['regions.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_rep_firms_master_name', 'rep_firms_master', ['name'])
    op.create_index('ix_rep_firms_master_region_id', 'rep_firms_master', ['region_id'])
    op.create_index('ix_rep_firms_master_active', 'rep_firms_master', ['active'])

    op.create_table('customers_master',
        _id(),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('active', sa.Boolean(), nullable=False, server_default='true'),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_customers_master_name', 'customers_master', ['name'])
    op.create_index('ix_customers_master_active', 'customers_master', ['active'])

    # Reports table
    op.create_table('reports',
        _id(),
        sa.Column('director_id', sa.String(36), nullable=False),
        sa.Column('month', sa.String(7), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='draft'),
        sa.Column('executive_summary', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['director_id'], ['directors.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('director_id', 'month', name='uq_report_director_month')
    )
    op.create_index('ix_reports_director_id', 'reports', ['director_id'])
    op.create_index('ix_reports_month', 'reports', ['month'])
    op.create_index('ix_reports_status', 'reports', ['status'])

    # Collections
    op.create_table('wins',
        _id(),
        _report_fk(),
        sa.Column('title', sa.String(500), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('sort_order', sa.Integer(), nullable=False, server_default='0'),
        sa.ForeignKeyConstraint(['report_id'], ['reports.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_wins_report_id', 'wins', ['report_id'])

    op.create_table('rep_firms',
        _id(),
        _report_fk(),
        sa.Column('name', sa.String(255), nullable=False),
        _money('monthly_sales'),
        _money('ytd_sales'),
        sa.Column('percent_to_goal', sa.Numeric(7, 2), nullable=False, server_default='0'),
        sa.Column('yoy_growth', sa.Numeric(7, 2), nullable=False, server_default='0'),
        sa.Column('entity_type', sa.String(50), nullable=False, server_default='rep_firm'),
        sa.Column('sort_order', sa.Integer(), nullable=False, server_default='0'),
        sa.ForeignKeyConstraint(['report_id'], ['reports.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_rep_firms_report_id', 'rep_firms', ['report_id'])

    op.create_table('competitors',
        _id(),
        _report_fk(),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('what_were_seeing', sa.Text(), nullable=True),
        sa.Column('our_response', sa.Text(), nullable=True),
        sa.Column('sort_order', sa.Integer(), nullable=False, server_default='0'),
        sa.ForeignKeyConstraint(['report_id'], ['reports.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_competitors_report_id', 'competitors', ['report_id'])

    op.create_table('good_jobs',
        _id(),
        _report_fk(),
        sa.Column('person_name', sa.String(255), nullable=False),
        sa.Column('reason', sa.Text(), nullable=True),
        sa.Column('sort_order', sa.Integer(), nullable=False, server_default='0'),
        sa.ForeignKeyConstraint(['report_id'], ['reports.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_good_jobs_report_id', 'good_jobs', ['report_id'])

    op.create_table('photos',
        _id(),
        _report_fk(),
        sa.Column('filename', sa.String(255), nullable=False),
        sa.Column('url', sa.String(1000), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['report_id'], ['reports.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_photos_report_id', 'photos', ['report_id'])

    # Singletons (one row per report)
    op.create_table('regional_performance',
        _id(),
        _report_fk(),
        _money('monthly_sales'),
        _money('monthly_goal'),
        _money('ytd_sales'),
        _money('ytd_goal'),
        _money('open_orders'),
        _money('pipeline'),
        sa.ForeignKeyConstraint(['report_id'], ['reports.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_regional_performance_report_id', 'regional_performance', ['report_id'], unique=True)

    op.create_table('key_initiatives',
        _id(),
        _report_fk(),
        sa.Column('key_projects', sa.Text(), nullable=True),
        sa.Column('distribution_updates', sa.Text(), nullable=True),
        sa.Column('challenges_blockers', sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(['report_id'], ['reports.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_key_initiatives_report_id', 'key_initiatives', ['report_id'], unique=True)

    op.create_table('marketing_events',
        _id(),
        _report_fk(),
        sa.Column('events_attended', sa.Text(), nullable=True),
        sa.Column('marketing_campaigns', sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(['report_id'], ['reports.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_marketing_events_report_id', 'marketing_events', ['report_id'], unique=True)

    op.create_table('market_trends',
        _id(),
        _report_fk(),
        sa.Column('observations', sa.Text(), nullable=True),
        sa.Column('industry_info', sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(['report_id'], ['reports.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_market_trends_report_id', 'market_trends', ['report_id'], unique=True)

    op.create_table('follow_ups',
        _id(),
        _report_fk(),
        sa.Column('content', sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(['report_id'], ['reports.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_follow_ups_report_id', 'follow_ups', ['report_id'], unique=True)

    # Audit trail
    op.create_table('report_edit_history',
        _id(),
        _report_fk(),
        sa.Column('edited_by', sa.String(255), nullable=False),
        sa.Column('edited_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('changes', sa.JSON(), nullable=False),
        sa.Column('edit_reason', sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(['report_id'], ['reports.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_report_edit_history_report_id', 'report_edit_history', ['report_id'])
    op.create_index('ix_report_edit_history_edited_at', 'report_edit_history', ['edited_at'])

    # Saved consolidated summaries
    op.create_table('global_summaries',
        _id(),
        sa.Column('period_type', sa.String(20), nullable=False),
        sa.Column('period_value', sa.String(10), nullable=False),
        sa.Column('summary_text', sa.Text(), nullable=False),
        sa.Column('report_ids', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('edited_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('period_type', 'period_value', name='uq_global_summary_period')
    )


def downgrade():
    op.drop_table('global_summaries')
    op.drop_index('ix_report_edit_history_edited_at', table_name='report_edit_history')
    op.drop_index('ix_report_edit_history_report_id', table_name='report_edit_history')
    op.drop_table('report_edit_history')
    for table in ('follow_ups', 'market_trends', 'marketing_events', 'key_initiatives',
                  'regional_performance', 'photos', 'good_jobs', 'competitors',
                  'rep_firms', 'wins'):
        op.drop_index(f'ix_{table}_report_id', table_name=table)
        op.drop_table(table)
    op.drop_index('ix_reports_status', table_name='reports')
    op.drop_index('ix_reports_month', table_name='reports')
    op.drop_index('ix_reports_director_id', table_name='reports')
    op.drop_table('reports')
    op.drop_index('ix_customers_master_active', table_name='customers_master')
    op.drop_index('ix_customers_master_name', table_name='customers_master')
    op.drop_table('customers_master')
    op.drop_index('ix_rep_firms_master_active', table_name='rep_firms_master')
    op.drop_index('ix_rep_firms_master_region_id', table_name='rep_firms_master')
    op.drop_index('ix_rep_firms_master_name', table_name='rep_firms_master')
    op.drop_table('rep_firms_master')
    op.drop_index('ix_directors_region_id', table_name='directors')
    op.drop_index('ix_directors_email', table_name='directors')
    op.drop_index('ix_directors_name', table_name='directors')
    op.drop_table('directors')
    op.drop_index('ix_regions_name', table_name='regions')
    op.drop_table('regions')
