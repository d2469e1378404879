from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import false
from biztime.core.db import Base


def utc_now() -> datetime:
    """Naive UTC timestamp used for both add_date and paid_date."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Invoice(Base):
    __tablename__ = "invoices"

    id = Column(Integer, primary_key=True, autoincrement=True)

    # Fixed at creation
    comp_code = Column(
        String,
        ForeignKey("companies.code", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    add_date = Column(DateTime, nullable=False, default=utc_now)

    amt = Column(Float, nullable=False)

    # --- Payment state ---
    # paid_date is set iff paid is true (see resolve_payment_state)
    paid = Column(Boolean, nullable=False, default=False, server_default=false())
    paid_date = Column(DateTime, nullable=True)

    # Relationship back to the company
    company = relationship("Company", back_populates="invoices")
