"""create catalogue tables

Revision ID: 3f1c9a7e2b10
Revises:
Create Date: 2026-10-19 09:12:44.102311

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
import sqlmodel
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '3f1c9a7e2b10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# SQLModel stores enum members by name
ENUM_TYPES = {
    'impactlevel': ('LOW', 'MEDIUM', 'HIGH'),
    'chemicallevel': ('MINIMAL', 'MODERATE', 'SEVERE'),
    'recyclabilitylevel': ('HIGH', 'MEDIUM', 'LOW'),
    'sustainabilitylevel': ('HIGH', 'MEDIUM', 'LOW'),
    'ecoletter': ('A', 'B', 'C', 'D', 'E'),
}


def _enum(name):
    # Types are created once in upgrade(); columns must not re-create them
    values = ENUM_TYPES[name]
    return sa.Enum(*values, name=name).with_variant(
        postgresql.ENUM(*values, name=name, create_type=False), 'postgresql')


impact_level = _enum('impactlevel')
chemical_level = _enum('chemicallevel')
recyclability_level = _enum('recyclabilitylevel')
sustainability_level = _enum('sustainabilitylevel')
eco_letter = _enum('ecoletter')


def upgrade():
    bind = op.get_bind()
    if bind.dialect.name == 'postgresql':
        for name, values in ENUM_TYPES.items():
            postgresql.ENUM(*values, name=name).create(bind, checkfirst=True)

    op.create_table(
        'product',
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('category', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('image_url', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('analysis_date', sa.Date(), nullable=True),
        sa.Column('ingredients', sa.JSON(), nullable=True),
        sa.Column('uploaded_by', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('carbon_footprint_kg', sa.Float(), nullable=True),
        sa.Column('water_consumption_liters', sa.Float(), nullable=True),
        sa.Column('energy_usage_kwh', sa.Float(), nullable=True),
        sa.Column('waste_pollution_level', impact_level, nullable=True),
        sa.Column('chemical_usage_level', chemical_level, nullable=True),
        sa.Column('recyclability_level', recyclability_level, nullable=True),
        sa.Column('environmental_impact_level', impact_level, nullable=True),
        sa.Column('sustainability_level', sustainability_level, nullable=True),
        sa.Column('eco_score', sa.Float(), nullable=True),
        sa.Column('eco_letter', eco_letter, nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_product_name'), 'product', ['name'], unique=False)
    op.create_index(op.f('ix_product_category'), 'product', ['category'], unique=False)
    op.create_index(op.f('ix_product_uploaded_by'), 'product', ['uploaded_by'], unique=False)
    op.create_index(op.f('ix_product_environmental_impact_level'), 'product',
                    ['environmental_impact_level'], unique=False)
    op.create_index(op.f('ix_product_eco_score'), 'product', ['eco_score'], unique=False)

    op.create_table(
        'searchlog',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('query', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('product_id', sa.Uuid(), nullable=True),
        sa.Column('searched_product_name', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('is_found', sa.Boolean(), nullable=False),
        sa.Column('eco_score', sa.Float(), nullable=True),
        sa.Column('eco_letter', eco_letter, nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_searchlog_user_id'), 'searchlog', ['user_id'], unique=False)
    op.create_index(op.f('ix_searchlog_created_at'), 'searchlog', ['created_at'], unique=False)


def downgrade():
    op.drop_index(op.f('ix_searchlog_created_at'), table_name='searchlog')
    op.drop_index(op.f('ix_searchlog_user_id'), table_name='searchlog')
    op.drop_table('searchlog')

    op.drop_index(op.f('ix_product_eco_score'), table_name='product')
    op.drop_index(op.f('ix_product_environmental_impact_level'), table_name='product')
    op.drop_index(op.f('ix_product_uploaded_by'), table_name='product')
    op.drop_index(op.f('ix_product_category'), table_name='product')
    op.drop_index(op.f('ix_product_name'), table_name='product')
    op.drop_table('product')

    bind = op.get_bind()
    if bind.dialect.name == 'postgresql':
        # Enum types outlive their tables on PostgreSQL
        for name, values in ENUM_TYPES.items():
            postgresql.ENUM(*values, name=name).drop(bind, checkfirst=True)
