"""Human-readable sentences for balances and transfers."""
from tripsplit.config import CURRENCY
from tripsplit.schemas import MemberBalance, Transaction
from tripsplit.services.settlement_calculator import SETTLED_EPSILON


def format_amount(value: float) -> str:
    return f"{round(value):,}"


def format_transaction(tx: Transaction, currency: str = CURRENCY) -> str:
    return f"{tx.from_member} owes {tx.to_member} {format_amount(tx.amount)} {currency}"


def format_balance(balance: MemberBalance, currency: str = CURRENCY) -> str:
    if abs(balance.balance) < SETTLED_EPSILON:
        return f"{balance.member} is settled"
    if balance.balance > 0:
        return f"{balance.member} should receive {format_amount(balance.balance)} {currency}"
    return f"{balance.member} owes {format_amount(-balance.balance)} {currency}"
