"""Settlement: balances and who owes whom for a trip."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from tripsplit.config import CURRENCY
from tripsplit.database import get_db
from tripsplit.models import Expense
from tripsplit.schemas import SettlementSummary
from tripsplit.routers.payers import get_roster
from tripsplit.routers.trips import get_trip_or_404
from tripsplit.services.formatting import format_balance, format_transaction
from tripsplit.services.settlement_calculator import (
    compute_balances, compute_transactions, find_off_roster_payers,
)

router = APIRouter(prefix="/trips/{trip_id}/settlement", tags=["settlements"])


@router.get("", response_model=SettlementSummary)
def get_settlement(trip_id: str, db: Session = Depends(get_db)):
    get_trip_or_404(db, trip_id)
    # Insertion order: payer fallback and tie-breaks follow payment order.
    expenses = db.query(Expense).filter(Expense.trip_id == trip_id).order_by(Expense.seq).all()
    roster = get_roster(db, trip_id)

    balances = compute_balances(expenses, roster)
    transactions = compute_transactions(balances)
    total = sum(e.amount for e in expenses)
    return SettlementSummary(
        trip_id=trip_id,
        currency=CURRENCY,
        total=total,
        member_count=len(balances),
        share_per_person=balances[0].share if balances else 0.0,
        balances=balances,
        transactions=transactions,
        balance_lines=[format_balance(b) for b in balances],
        transaction_lines=[format_transaction(t) for t in transactions],
        off_roster_payers=find_off_roster_payers(expenses, roster),
    )
