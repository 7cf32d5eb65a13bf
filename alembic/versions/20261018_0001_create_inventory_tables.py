"""create inventory tables

Revision ID: 20261018_0001
Revises:
Create Date: 2026-10-18 09:00:00.000000
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "20261018_0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _table_exists(inspector: sa.Inspector, table_name: str) -> bool:
    return table_name in inspector.get_table_names()


def _index_exists(inspector: sa.Inspector, table_name: str, index_name: str) -> bool:
    return index_name in {index["name"] for index in inspector.get_indexes(table_name)}


def _create_index(table_name: str, index_name: str, columns: list[str]) -> None:
    inspector = sa.inspect(op.get_bind())
    if _table_exists(inspector, table_name) and not _index_exists(inspector, table_name, index_name):
        op.create_index(index_name, table_name, columns, unique=False)


def upgrade() -> None:
    bind = op.get_bind()
    inspector = sa.inspect(bind)

    if not _table_exists(inspector, "suppliers"):
        op.create_table(
            "suppliers",
            sa.Column("id", sa.String(length=36), nullable=False),
            sa.Column("name", sa.Text(), nullable=False),
            sa.Column("contact_email", sa.Text(), nullable=True),
            sa.Column("contact_phone", sa.Text(), nullable=True),
            sa.Column("address", sa.Text(), nullable=True),
            sa.PrimaryKeyConstraint("id"),
        )

    if not _table_exists(inspector, "categories"):
        op.create_table(
            "categories",
            sa.Column("id", sa.String(length=36), nullable=False),
            sa.Column("name", sa.Text(), nullable=False),
            sa.Column("description", sa.Text(), nullable=True),
            sa.PrimaryKeyConstraint("id"),
            sa.UniqueConstraint("name", name="uq_categories_name"),
        )

    if not _table_exists(inspector, "parts"):
        # category_id / supplier_id are deliberately not foreign keys.
        op.create_table(
            "parts",
            sa.Column("id", sa.String(length=36), nullable=False),
            sa.Column("name", sa.Text(), nullable=False),
            sa.Column("part_number", sa.Text(), nullable=False),
            sa.Column("description", sa.Text(), nullable=True),
            sa.Column("category_id", sa.String(length=36), nullable=True),
            sa.Column("supplier_id", sa.String(length=36), nullable=True),
            sa.Column("quantity", sa.Integer(), nullable=False, server_default="0"),
            sa.Column("minimum_stock", sa.Integer(), nullable=False, server_default="0"),
            sa.Column("unit_price", sa.Numeric(10, 2), nullable=False, server_default="0.00"),
            sa.Column("location", sa.Text(), nullable=True),
            sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
            sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
            sa.PrimaryKeyConstraint("id"),
            sa.UniqueConstraint("part_number", name="uq_parts_part_number"),
        )

    if not _table_exists(inspector, "movements"):
        op.create_table(
            "movements",
            sa.Column("id", sa.String(length=36), nullable=False),
            sa.Column("part_id", sa.String(length=36), nullable=False),
            sa.Column("type", sa.String(length=10), nullable=False),
            sa.Column("quantity", sa.Integer(), nullable=False),
            sa.Column("reason", sa.Text(), nullable=True),
            sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
            sa.PrimaryKeyConstraint("id"),
        )

    if not _table_exists(inspector, "reports"):
        op.create_table(
            "reports",
            sa.Column("id", sa.String(length=36), nullable=False),
            sa.Column("name", sa.Text(), nullable=False),
            sa.Column("type", sa.String(length=30), nullable=False),
            sa.Column("date_range", sa.Text(), nullable=False),
            sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
            sa.PrimaryKeyConstraint("id"),
        )

    _create_index("parts", "ix_parts_category_id", ["category_id"])
    _create_index("parts", "ix_parts_supplier_id", ["supplier_id"])
    _create_index("parts", "ix_parts_quantity_minimum_stock", ["quantity", "minimum_stock"])
    _create_index("movements", "ix_movements_part_id", ["part_id"])
    _create_index("movements", "ix_movements_part_created_at", ["part_id", "created_at"])
    _create_index("reports", "ix_reports_created_at", ["created_at"])


def downgrade() -> None:
    bind = op.get_bind()
    inspector = sa.inspect(bind)

    for table_name in ("reports", "movements", "parts", "categories", "suppliers"):
        if _table_exists(inspector, table_name):
            op.drop_table(table_name)
