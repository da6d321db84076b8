"""Pydantic schemas for request/response."""
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field


# ----- Trip -----
class TripCreate(BaseModel):
    name: str


class TripResponse(BaseModel):
    id: str
    name: str
    is_active: bool = True
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# ----- Expense -----
class ExpenseBase(BaseModel):
    payer: str
    title: str
    amount: float = Field(gt=0)
    date: date


class ExpenseCreate(ExpenseBase):
    pass


class ExpenseResponse(ExpenseBase):
    id: str
    trip_id: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# ----- Payer names (roster) -----
class PayerNameCreate(BaseModel):
    name: str


# ----- Settlement -----
class MemberBalance(BaseModel):
    member: str
    total_paid: float
    share: float
    balance: float


class Transaction(BaseModel):
    from_member: str
    to_member: str
    amount: int


class SettlementSummary(BaseModel):
    trip_id: str
    currency: str
    total: float
    member_count: int
    share_per_person: float
    balances: list[MemberBalance]
    transactions: list[Transaction]
    balance_lines: list[str] = []
    transaction_lines: list[str] = []
    off_roster_payers: list[str] = []
