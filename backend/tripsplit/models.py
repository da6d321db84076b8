"""SQLAlchemy models."""
import uuid

from sqlalchemy import Column, Integer, String, Float, ForeignKey, DateTime, Boolean, Date, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from tripsplit.database import Base


def _new_id() -> str:
    return uuid.uuid4().hex


class Trip(Base):
    __tablename__ = "trips"

    id = Column(String(32), primary_key=True, default=_new_id)
    name = Column(String(255), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    expenses = relationship("Expense", back_populates="trip", cascade="all, delete-orphan")
    payer_names = relationship(
        "PayerName",
        back_populates="trip",
        cascade="all, delete-orphan",
        order_by="PayerName.id",
    )


class Expense(Base):
    __tablename__ = "expenses"

    seq = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String(32), unique=True, index=True, nullable=False, default=_new_id)
    trip_id = Column(String(32), ForeignKey("trips.id"), nullable=False, index=True)
    payer = Column(String(255), nullable=False)
    title = Column(String(512), nullable=False)
    amount = Column(Float, nullable=False)
    date = Column(Date, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    trip = relationship("Trip", back_populates="expenses")


class PayerName(Base):
    __tablename__ = "payer_names"
    __table_args__ = (UniqueConstraint("trip_id", "name", name="uq_payer_names_trip_name"),)

    id = Column(Integer, primary_key=True, index=True)
    trip_id = Column(String(32), ForeignKey("trips.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)

    trip = relationship("Trip", back_populates="payer_names")
