"""init catalog schema

Revision ID: 0001_init_catalog
Revises: 
Create Date: 2026-10-19

"""
from alembic import op
import sqlalchemy as sa

revision = "0001_init_catalog"
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    # users (admin access only)
    op.create_table(
        "users",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("username", sa.String(50), nullable=False, unique=True),
        sa.Column("email", sa.String(255), nullable=True, unique=True),
        sa.Column("role", sa.String(20), nullable=False, server_default="user"),
        sa.Column("active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("role in ('user','admin','superadmin')", name="ck_user_role"),
    )

    # categories (self-referential, two levels in practice)
    op.create_table(
        "categories",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("image_url", sa.String(255), nullable=True),
        sa.Column("active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("display_order", sa.Integer, nullable=False, server_default="0"),
        sa.Column(
            "parent_id",
            sa.Integer,
            sa.ForeignKey("categories.id", ondelete="SET NULL", onupdate="CASCADE"),
            nullable=True,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("parent_id IS NULL OR parent_id <> id", name="ck_category_not_own_parent"),
    )
    op.create_index("ix_categories_parent_order", "categories", ["parent_id", "display_order", "name"])
    op.create_index("ix_categories_active_order", "categories", ["active", "display_order", "name"])

    # tests
    op.create_table(
        "tests",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "category_id",
            sa.Integer,
            sa.ForeignKey("categories.id", ondelete="RESTRICT", onupdate="CASCADE"),
            nullable=False,
        ),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("price", sa.Numeric(10, 2), nullable=False, server_default="0"),
        sa.Column("turnaround_time", sa.String(255), nullable=True),
        sa.Column("method_reference", sa.String(255), nullable=True),
        sa.Column("active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("display_order", sa.Integer, nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("price >= 0", name="ck_test_price_non_negative"),
    )
    op.create_index("ix_tests_category_order", "tests", ["category_id", "display_order", "name"])

def downgrade():
    op.drop_index("ix_tests_category_order", table_name="tests")
    op.drop_table("tests")
    op.drop_index("ix_categories_active_order", table_name="categories")
    op.drop_index("ix_categories_parent_order", table_name="categories")
    op.drop_table("categories")
    op.drop_table("users")
