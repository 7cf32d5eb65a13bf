from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import DateTime, Index, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from partsflow.db.base import Base


class Part(Base):
    """
    category_id / supplier_id are lookup-only references: no foreign keys, so
    deleting a category or supplier leaves the id behind and it resolves to nothing.
    """
    __tablename__ = "parts"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    part_number: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    category_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True, index=True)
    supplier_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True, index=True)

    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    minimum_stock: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    unit_price: Mapped[Decimal] = mapped_column(
        Numeric(10, 2), nullable=False, default=Decimal("0.00"), server_default="0.00"
    )
    location: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        Index("ix_parts_quantity_minimum_stock", "quantity", "minimum_stock"),
    )
