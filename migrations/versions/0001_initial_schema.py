"""initial schema: person tables and category lookups

Revision ID: 0001_initial_schema
Revises:
Create Date: 2025-10-01 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '0001_initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _person_columns():
    return [
        sa.Column('first_name', sa.String(length=100), nullable=True),
        sa.Column('last_name', sa.String(length=100), nullable=True),
        sa.Column('street', sa.String(length=255), nullable=True),
        sa.Column('postal_code', sa.String(length=20), nullable=True),
        sa.Column('place', sa.String(length=100), nullable=True),
        sa.Column('phone', sa.String(length=50), nullable=True),
        sa.Column('email', sa.String(length=255), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        'companies',
        sa.Column('company_id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.PrimaryKeyConstraint('company_id'),
        sa.UniqueConstraint('name', name='uq_companies_name'),
    )
    op.create_table(
        'industries',
        sa.Column('industry_id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.PrimaryKeyConstraint('industry_id'),
        sa.UniqueConstraint('name', name='uq_industries_name'),
    )
    op.create_table(
        'employees',
        sa.Column('employee_number', sa.Integer(), autoincrement=False, nullable=False),
        *_person_columns(),
        sa.PrimaryKeyConstraint('employee_number'),
        sa.CheckConstraint('employee_number > 0', name='ck_employees_number_positive'),
    )
    op.create_table(
        'external_employees',
        sa.Column('employee_number', sa.Integer(), autoincrement=False, nullable=False),
        *_person_columns(),
        sa.Column('company_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['company_id'], ['companies.company_id']),
        sa.PrimaryKeyConstraint('employee_number'),
        sa.CheckConstraint('employee_number > 0', name='ck_external_employees_number_positive'),
    )
    op.create_index('idx_external_employees_company_id', 'external_employees', ['company_id'], unique=False)
    op.create_table(
        'customers',
        sa.Column('customer_number', sa.Integer(), autoincrement=False, nullable=False),
        *_person_columns(),
        sa.Column('industry_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['industry_id'], ['industries.industry_id']),
        sa.PrimaryKeyConstraint('customer_number'),
        sa.CheckConstraint('customer_number > 0', name='ck_customers_number_positive'),
    )
    op.create_index('idx_customers_industry_id', 'customers', ['industry_id'], unique=False)


def downgrade() -> None:
    op.drop_index('idx_customers_industry_id', table_name='customers')
    op.drop_table('customers')
    op.drop_index('idx_external_employees_company_id', table_name='external_employees')
    op.drop_table('external_employees')
    op.drop_table('employees')
    op.drop_table('industries')
    op.drop_table('companies')
