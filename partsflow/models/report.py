from datetime import datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from partsflow.db.base import Base


class Report(Base):
    __tablename__ = "reports"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[str] = mapped_column(String(30), nullable=False)
    date_range: Mapped[str] = mapped_column(Text, nullable=False)  # JSON text, e.g. {"from": ..., "to": ...}

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
