from types import SimpleNamespace

import pytest

from tripsplit.schemas import MemberBalance
from tripsplit.services.settlement_calculator import (
    compute_balances, compute_transactions, find_off_roster_payers,
)


def _exp(payer, amount):
    return SimpleNamespace(payer=payer, amount=amount)


def _bal(member, balance):
    return MemberBalance(member=member, total_paid=0.0, share=0.0, balance=balance)


def _apply(balances, transactions):
    remaining = {b.member: b.balance for b in balances}
    for t in transactions:
        remaining[t.from_member] += t.amount
        remaining[t.to_member] -= t.amount
    return remaining


def test_empty_input():
    assert compute_balances([], []) == []
    assert compute_balances([]) == []
    assert compute_transactions([]) == []


def test_equal_three_way_split():
    expenses = [_exp("A", 300), _exp("B", 0), _exp("C", 0)]
    balances = compute_balances(expenses, ["A", "B", "C"])
    assert [(b.member, b.total_paid, b.share, b.balance) for b in balances] == [
        ("A", 300, 100, 200),
        ("B", 0, 100, -100),
        ("C", 0, 100, -100),
    ]
    txs = compute_transactions(balances)
    assert [(t.from_member, t.to_member, t.amount) for t in txs] == [
        ("B", "A", 100),
        ("C", "A", 100),
    ]


def test_already_settled():
    expenses = [_exp("A", 100), _exp("B", 100), _exp("C", 100)]
    balances = compute_balances(expenses, ["A", "B", "C"])
    assert all(b.balance == 0 for b in balances)
    assert compute_transactions(balances) == []


def test_no_roster_falls_back_to_payers():
    balances = compute_balances([_exp("X", 100)])
    assert len(balances) == 1
    assert balances[0].member == "X"
    assert balances[0].share == 100
    assert balances[0].balance == 0
    assert compute_transactions(balances) == []


def test_payer_fallback_keeps_first_payment_order():
    expenses = [_exp("Lan", 10), _exp("Minh", 20), _exp("Lan", 30)]
    balances = compute_balances(expenses)
    assert [b.member for b in balances] == ["Lan", "Minh"]
    assert balances[0].total_paid == 40


def test_roster_without_expenses_is_all_zero():
    balances = compute_balances([], ["A", "B"])
    assert [(b.member, b.total_paid, b.share, b.balance) for b in balances] == [
        ("A", 0, 0, 0),
        ("B", 0, 0, 0),
    ]
    assert compute_transactions(balances) == []


def test_duplicate_roster_entries_count_separately():
    balances = compute_balances([_exp("A", 90)], ["A", "A", "B"])
    assert len(balances) == 3
    assert balances[0].share == 30


def test_off_roster_payer_counts_in_total_only():
    expenses = [_exp("A", 100), _exp("Z", 200)]
    balances = compute_balances(expenses, ["A", "B"])
    assert [b.member for b in balances] == ["A", "B"]
    assert balances[0].share == 150
    assert find_off_roster_payers(expenses, ["A", "B"]) == ["Z"]
    assert find_off_roster_payers(expenses) == []


@pytest.mark.parametrize("roster", [None, ["A", "B", "C", "D"], ["D", "C", "B", "A", "E"]])
def test_balances_sum_to_zero(roster):
    expenses = [_exp("A", 123.45), _exp("B", 67.8), _exp("C", 0.1), _exp("A", 1000 / 3), _exp("D", 9.99)]
    balances = compute_balances(expenses, roster)
    assert abs(sum(b.balance for b in balances)) < 1e-6


@pytest.mark.parametrize("expenses, roster", [
    ([_exp("A", 500000), _exp("B", 120000), _exp("C", 75000), _exp("A", 33000)], ["A", "B", "C", "D", "E"]),
    ([_exp("A", 100)], ["A", "B", "C"]),
    ([_exp("A", 60), _exp("B", 25.5), _exp("C", 14.5), _exp("D", 0)], None),
])
def test_transactions_settle_everyone(expenses, roster):
    balances = compute_balances(expenses, roster)
    txs = compute_transactions(balances)
    assert txs
    for remaining in _apply(balances, txs).values():
        assert abs(remaining) <= 1
    for t in txs:
        assert t.from_member != t.to_member
        assert isinstance(t.amount, int)
        assert t.amount > 0


def test_largest_debtor_pays_largest_creditor_first():
    balances = [_bal("A", 50), _bal("B", -20), _bal("C", 150), _bal("D", -180)]
    txs = compute_transactions(balances)
    assert [(t.from_member, t.to_member, t.amount) for t in txs] == [
        ("D", "C", 150),
        ("D", "A", 30),
        ("B", "A", 20),
    ]


def test_ties_keep_input_order():
    balances = [_bal("P", -50), _bal("Q", -50), _bal("R", 100)]
    txs = compute_transactions(balances)
    assert [t.from_member for t in txs] == ["P", "Q"]


def test_near_zero_balances_are_ignored():
    balances = [_bal("A", 0.005), _bal("B", -0.009), _bal("C", 0.0)]
    assert compute_transactions(balances) == []


def test_transfers_rounding_to_zero_are_dropped():
    balances = [_bal("A", 100.3), _bal("B", -100.0), _bal("C", -0.3)]
    txs = compute_transactions(balances)
    assert [(t.from_member, t.to_member, t.amount) for t in txs] == [("B", "A", 100)]


def test_repeated_calls_give_same_result():
    expenses = [_exp("A", 70), _exp("B", 20), _exp("C", 10)]
    first = compute_balances(expenses, ["A", "B", "C"])
    assert compute_balances(expenses, ["A", "B", "C"]) == first
    assert compute_transactions(first) == compute_transactions(first)


def test_creditor_ties_keep_input_order():
    balances = [_bal("X", 50), _bal("Y", 50), _bal("D", -100)]
    txs = compute_transactions(balances)
    assert [(t.from_member, t.to_member, t.amount) for t in txs] == [("D", "X", 50), ("D", "Y", 50)]


def test_transfers_round_half_to_even():
    assert compute_transactions([_bal("A", 2.5), _bal("B", -2.5)])[0].amount == 2
    assert compute_transactions([_bal("A", 3.5), _bal("B", -3.5)])[0].amount == 4


def test_per_transfer_rounding_can_leave_more_than_one_unit():
    # Each 0.7 debt rounds up to 1, so the single creditor is overpaid by 4 * 0.3.
    balances = compute_balances([_exp("A", 3.5)], ["A", "B", "C", "D", "E"])
    txs = compute_transactions(balances)
    assert [(t.from_member, t.to_member, t.amount) for t in txs] == [
        ("B", "A", 1), ("C", "A", 1), ("D", "A", 1), ("E", "A", 1),
    ]
    remaining = _apply(balances, txs)
    assert remaining["A"] == pytest.approx(-1.2)
    assert all(remaining[m] == pytest.approx(0.3) for m in "BCDE")
