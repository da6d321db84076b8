"""Expenses: create, list, delete, export."""
import csv
import io
import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from tripsplit.database import get_db
from tripsplit.models import Expense
from tripsplit.schemas import ExpenseCreate, ExpenseResponse
from tripsplit.auth import require_admin
from tripsplit.routers.trips import get_trip_or_404
from tripsplit.services.events import event_bus, EXPENSES_CHANGED

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/trips/{trip_id}/expenses", tags=["expenses"])


def _ordered_expenses(db: Session, trip_id: str) -> list[Expense]:
    return (
        db.query(Expense)
        .filter(Expense.trip_id == trip_id)
        .order_by(Expense.seq.desc())
        .all()
    )


@router.get("", response_model=list[ExpenseResponse])
def list_expenses(trip_id: str, db: Session = Depends(get_db)):
    get_trip_or_404(db, trip_id)
    return [ExpenseResponse.model_validate(e) for e in _ordered_expenses(db, trip_id)]


@router.post("", response_model=ExpenseResponse)
def create_expense(trip_id: str, data: ExpenseCreate, db: Session = Depends(get_db)):
    get_trip_or_404(db, trip_id)
    payer = data.payer.strip()
    title = data.title.strip()
    if not payer:
        raise HTTPException(status_code=400, detail="Payer is required")
    if not title:
        raise HTTPException(status_code=400, detail="Title is required")

    expense = Expense(
        trip_id=trip_id,
        payer=payer,
        title=title,
        amount=data.amount,
        date=data.date,
    )
    db.add(expense)
    db.commit()
    db.refresh(expense)
    logger.info("Trip %s: %s paid %s for %r", trip_id, payer, data.amount, title)
    event_bus.publish(EXPENSES_CHANGED, trip_id)
    return ExpenseResponse.model_validate(expense)


@router.get("/export")
def export_expenses(trip_id: str, db: Session = Depends(get_db)):
    get_trip_or_404(db, trip_id)
    expenses = _ordered_expenses(db, trip_id)

    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(["Date", "Title", "Amount", "Paid By", "Created"])
    for e in expenses:
        created = e.created_at.strftime("%Y-%m-%d %H:%M") if e.created_at else ""
        writer.writerow([
            e.date.isoformat(),
            e.title,
            f"{e.amount:.2f}",
            e.payer,
            created,
        ])

    output.seek(0)
    return StreamingResponse(
        iter([output.getvalue()]),
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename=expenses-trip-{trip_id}.csv"},
    )


@router.delete("", status_code=204, dependencies=[Depends(require_admin)])
def delete_all_expenses(trip_id: str, db: Session = Depends(get_db)):
    get_trip_or_404(db, trip_id)
    deleted = db.query(Expense).filter(Expense.trip_id == trip_id).delete()
    db.commit()
    logger.info("Trip %s: deleted all %d expenses", trip_id, deleted)
    event_bus.publish(EXPENSES_CHANGED, trip_id)


@router.delete("/{expense_id}", status_code=204, dependencies=[Depends(require_admin)])
def delete_expense(trip_id: str, expense_id: str, db: Session = Depends(get_db)):
    get_trip_or_404(db, trip_id)
    expense = (
        db.query(Expense)
        .filter(Expense.id == expense_id, Expense.trip_id == trip_id)
        .first()
    )
    if not expense:
        raise HTTPException(status_code=404, detail="Expense not found")
    db.delete(expense)
    db.commit()
    logger.info("Trip %s: deleted expense %s", trip_id, expense_id)
    event_bus.publish(EXPENSES_CHANGED, trip_id)
