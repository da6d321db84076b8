"""Equal-split balances and the fewest transfers so everyone is settled (who owes whom)."""
import logging
from typing import Iterable, Optional, Sequence

from tripsplit.schemas import MemberBalance, Transaction

logger = logging.getLogger(__name__)

# Balances closer to zero than this (in currency units) count as settled.
SETTLED_EPSILON = 0.01


def _paid_by_payer(expenses: Iterable) -> dict[str, float]:
    paid: dict[str, float] = {}
    for e in expenses:
        paid[e.payer] = paid.get(e.payer, 0.0) + e.amount
    return paid


def find_off_roster_payers(expenses: Sequence, roster: Optional[Sequence[str]] = None) -> list[str]:
    """Payers whose amounts count towards the total but who are not in ``roster``.

    Empty when no roster is given, since members then fall back to the payers.
    """
    if not roster:
        return []
    known = set(roster)
    return [payer for payer in _paid_by_payer(expenses) if payer not in known]


def compute_balances(expenses: Sequence, roster: Optional[Sequence[str]] = None) -> list[MemberBalance]:
    """
    expenses: anything with ``payer`` and ``amount`` attributes.
    roster: explicit member names; every entry is a member, even with nothing paid.
    Without a roster the members are the distinct payers, in first-payment order.
    Everyone owes the same share of the grand total.
    """
    if not expenses and not roster:
        return []

    total = sum(e.amount for e in expenses)
    paid = _paid_by_payer(expenses)

    members = list(roster) if roster else list(paid)
    if not members:
        return []

    off_roster = find_off_roster_payers(expenses, roster)
    if off_roster:
        logger.warning(
            "Payers not in roster are counted in the total but get no balance: %s",
            ", ".join(off_roster),
        )

    share = total / len(members)
    logger.debug("total=%s members=%d share=%s", total, len(members), share)
    return [
        MemberBalance(
            member=m,
            total_paid=paid.get(m, 0.0),
            share=share,
            balance=paid.get(m, 0.0) - share,
        )
        for m in members
    ]


def compute_transactions(balances: Sequence[MemberBalance]) -> list[Transaction]:
    """
    Greedy settle-up: the largest remaining debtor pays the largest remaining creditor.
    Amounts are rounded to whole currency units per transfer; the running totals stay unrounded.
    """
    debtors = [[b.member, -b.balance] for b in balances if b.balance < -SETTLED_EPSILON]
    creditors = [[b.member, b.balance] for b in balances if b.balance > SETTLED_EPSILON]
    # list.sort is stable, so equal amounts keep their input order.
    debtors.sort(key=lambda x: -x[1])
    creditors.sort(key=lambda x: -x[1])

    out: list[Transaction] = []
    i, j = 0, 0
    while i < len(debtors) and j < len(creditors):
        debtor, creditor = debtors[i], creditors[j]
        transfer = min(debtor[1], creditor[1])
        amount = round(transfer)
        if amount > 0:
            out.append(Transaction(from_member=debtor[0], to_member=creditor[0], amount=amount))
        debtor[1] -= transfer
        creditor[1] -= transfer
        if debtor[1] < SETTLED_EPSILON:
            i += 1
        if creditor[1] < SETTLED_EPSILON:
            j += 1
    logger.debug("%d transfers settle %d balances", len(out), len(balances))
    return out
