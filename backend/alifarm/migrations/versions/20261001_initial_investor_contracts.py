"""initial_investor_contracts

Revision ID: 20261001_initial
Revises:
Create Date: 2026-10-01

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '20261001_initial'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'profiles',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('role', sa.String(length=20), nullable=False, server_default='GUEST'),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='Active'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.CheckConstraint("role IN ('OWNER', 'STAFF', 'INVESTOR', 'GUEST')"),
        sa.CheckConstraint("status IN ('Active', 'Inactive')"),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email'),
    )

    op.create_table(
        'sheep',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('tag_id', sa.String(length=20), nullable=False),
        sa.Column('breed', sa.String(length=50), nullable=False),
        sa.Column('dob', sa.Date(), nullable=True),
        sa.Column('gender', sa.String(length=10), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='Healthy'),
        sa.Column('cage_id', sa.String(length=20), nullable=True),
        sa.Column('image_url', sa.Text(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('purchase_price', sa.Numeric(precision=14, scale=2), nullable=True),
        sa.Column('market_value', sa.Numeric(precision=14, scale=2), nullable=True),
        sa.Column('parent_male_id', sa.Integer(), nullable=True),
        sa.Column('parent_female_id', sa.Integer(), nullable=True),
        sa.Column('birth_type', sa.String(length=20), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.CheckConstraint("gender IN ('Male', 'Female')"),
        sa.CheckConstraint("status IN ('Healthy', 'Sick', 'Sold', 'Deceased', 'Quarantine')"),
        sa.CheckConstraint("birth_type IN ('Purchased', 'Born') OR birth_type IS NULL"),
        sa.ForeignKeyConstraint(['parent_male_id'], ['sheep.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['parent_female_id'], ['sheep.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('tag_id'),
    )
    op.create_index(op.f('ix_sheep_id'), 'sheep', ['id'], unique=False)
    op.create_index(op.f('ix_sheep_status'), 'sheep', ['status'], unique=False)

    op.create_table(
        'investor_contracts',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('contract_number', sa.String(length=30), nullable=False),
        sa.Column('investor_id', sa.String(length=36), nullable=False),
        sa.Column('investment_amount', sa.Numeric(precision=14, scale=2), nullable=False),
        sa.Column('profit_sharing_percentage', sa.Numeric(precision=5, scale=2), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('duration_months', sa.Integer(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='Active'),
        sa.Column('total_revenue', sa.Numeric(precision=14, scale=2), nullable=True),
        sa.Column('total_expenses', sa.Numeric(precision=14, scale=2), nullable=True),
        sa.Column('net_profit', sa.Numeric(precision=14, scale=2), nullable=True),
        sa.Column('investor_profit', sa.Numeric(precision=14, scale=2), nullable=True),
        sa.Column('actual_roi', sa.Numeric(precision=18, scale=4), nullable=True),
        sa.Column('settlement_date', sa.Date(), nullable=True),
        sa.Column('settlement_notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.CheckConstraint("status IN ('Active', 'Completed', 'Cancelled')"),
        sa.CheckConstraint('investment_amount >= 0'),
        sa.CheckConstraint('profit_sharing_percentage >= 0 AND profit_sharing_percentage <= 100'),
        sa.CheckConstraint('duration_months >= 1'),
        sa.ForeignKeyConstraint(['investor_id'], ['profiles.id'], ondelete='RESTRICT'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('contract_number'),
    )
    op.create_index(op.f('ix_investor_contracts_id'), 'investor_contracts', ['id'], unique=False)
    op.create_index(op.f('ix_investor_contracts_investor_id'), 'investor_contracts', ['investor_id'], unique=False)
    op.create_index(op.f('ix_investor_contracts_status'), 'investor_contracts', ['status'], unique=False)

    op.create_table(
        'contract_sheep',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('contract_id', sa.Integer(), nullable=False),
        sa.Column('sheep_id', sa.Integer(), nullable=False),
        sa.Column('allocation_date', sa.Date(), nullable=False),
        sa.Column('purchase_price', sa.Numeric(precision=14, scale=2), nullable=False),
        sa.Column('sale_date', sa.Date(), nullable=True),
        sa.Column('sale_price', sa.Numeric(precision=14, scale=2), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='Active'),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.CheckConstraint("status IN ('Active', 'Sold', 'Deceased')"),
        sa.CheckConstraint('purchase_price >= 0'),
        sa.ForeignKeyConstraint(['contract_id'], ['investor_contracts.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['sheep_id'], ['sheep.id'], ondelete='RESTRICT'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_contract_sheep_id'), 'contract_sheep', ['id'], unique=False)
    op.create_index(op.f('ix_contract_sheep_contract_id'), 'contract_sheep', ['contract_id'], unique=False)
    op.create_index(op.f('ix_contract_sheep_sheep_id'), 'contract_sheep', ['sheep_id'], unique=False)
    # At most one active allocation per animal
    op.create_index(
        'uq_contract_sheep_active_sheep',
        'contract_sheep',
        ['sheep_id'],
        unique=True,
        postgresql_where=sa.text("status = 'Active'"),
    )

    op.create_table(
        'contract_expenses',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('contract_id', sa.Integer(), nullable=False),
        sa.Column('expense_date', sa.Date(), nullable=False),
        sa.Column('category', sa.String(length=20), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('amount', sa.Numeric(precision=14, scale=2), nullable=False),
        sa.Column('sheep_id', sa.Integer(), nullable=True),
        sa.Column('receipt_url', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.CheckConstraint(
            "category IN ('Feed', 'Medicine', 'Vaccination', 'Labor', 'Transport', 'Maintenance', 'Other')"
        ),
        sa.CheckConstraint('amount > 0'),
        sa.ForeignKeyConstraint(['contract_id'], ['investor_contracts.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['sheep_id'], ['sheep.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_contract_expenses_id'), 'contract_expenses', ['id'], unique=False)
    op.create_index(op.f('ix_contract_expenses_contract_id'), 'contract_expenses', ['contract_id'], unique=False)

    op.create_table(
        'financial_reports',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('contract_id', sa.Integer(), nullable=False),
        sa.Column('report_period', sa.String(length=7), nullable=False),
        sa.Column('report_date', sa.Date(), nullable=False),
        sa.Column('opening_value', sa.Numeric(precision=14, scale=2), nullable=False, server_default='0'),
        sa.Column('closing_value', sa.Numeric(precision=14, scale=2), nullable=False, server_default='0'),
        sa.Column('total_expenses', sa.Numeric(precision=14, scale=2), nullable=False, server_default='0'),
        sa.Column('total_revenue', sa.Numeric(precision=14, scale=2), nullable=False, server_default='0'),
        sa.Column('sheep_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('sheep_born', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('sheep_sold', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('sheep_deceased', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('highlights', sa.Text(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='Draft'),
        sa.Column('published_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.CheckConstraint("status IN ('Draft', 'Published')"),
        sa.ForeignKeyConstraint(['contract_id'], ['investor_contracts.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('contract_id', 'report_period', name='uq_financial_reports_contract_period'),
    )
    op.create_index(op.f('ix_financial_reports_id'), 'financial_reports', ['id'], unique=False)
    op.create_index(op.f('ix_financial_reports_contract_id'), 'financial_reports', ['contract_id'], unique=False)


def downgrade() -> None:
    op.drop_table('financial_reports')
    op.drop_table('contract_expenses')
    op.drop_index('uq_contract_sheep_active_sheep', table_name='contract_sheep')
    op.drop_table('contract_sheep')
    op.drop_table('investor_contracts')
    op.drop_table('sheep')
    op.drop_table('profiles')
