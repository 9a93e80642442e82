"""initial recipe costing schema

Revision ID: 3a7c9e21b4d0
Revises: 
Create Date: 2026-10-19 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3a7c9e21b4d0'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    conn = op.get_bind()
    insp = sa.inspect(conn)

    if not insp.has_table('ingredients'):
        op.create_table(
            'ingredients',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('name', sa.String(length=255), nullable=False, unique=True),
            sa.Column('cost', sa.Numeric(10, 2), nullable=False),
            sa.Column('unit', sa.String(length=50), nullable=False),
            sa.Column('category', sa.String(length=100), nullable=True),
            sa.Column('supplier', sa.String(length=255), nullable=True),
            sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        )

    if not insp.has_table('recipes'):
        op.create_table(
            'recipes',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('name', sa.String(length=255), nullable=False),
            sa.Column('category', sa.String(length=100), nullable=False),
            sa.Column('description', sa.Text(), nullable=True),
            sa.Column('preparation_steps', sa.Text(), nullable=True),
            sa.Column('cooking_method', sa.Text(), nullable=True),
            sa.Column('plating_instructions', sa.Text(), nullable=True),
            sa.Column('chefs_notes', sa.Text(), nullable=True),
            sa.Column('selling_price', sa.Numeric(10, 2), nullable=False, server_default='0'),
            sa.Column('monthly_sales', sa.Integer(), nullable=False, server_default='0'),
            sa.Column('overhead', sa.Numeric(5, 2), nullable=False, server_default='10'),
            sa.Column('print_menu_ready', sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column('qr_menu_ready', sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column('website_menu_ready', sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column('available_for_delivery', sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column('image_url', sa.Text(), nullable=True),
            sa.Column('delivery_image_url', sa.Text(), nullable=True),
            sa.Column('total_cost', sa.Numeric(12, 2), nullable=False, server_default='0'),
            sa.Column('profit_margin', sa.Numeric(10, 2), nullable=False, server_default='0'),
            sa.Column('monthly_revenue', sa.Numeric(14, 2), nullable=False, server_default='0'),
            sa.Column('monthly_profit', sa.Numeric(14, 2), nullable=False, server_default='0'),
            sa.Column('markup_factor', sa.Numeric(12, 2), nullable=False, server_default='0'),
            sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
            sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        )

    if not insp.has_table('recipe_ingredients'):
        op.create_table(
            'recipe_ingredients',
            sa.Column('recipe_id', sa.Integer(), sa.ForeignKey('recipes.id'), primary_key=True),
            sa.Column('ingredient_id', sa.Integer(), sa.ForeignKey('ingredients.id'), primary_key=True),
            sa.Column('quantity', sa.Numeric(10, 3), nullable=False),
        )


def downgrade():
    # Drop in reverse dependency order
    for tbl in (
        'recipe_ingredients',
        'recipes',
        'ingredients',
    ):
        op.drop_table(tbl)
