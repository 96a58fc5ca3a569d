from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

from findash.domain.entities import Card, DashboardStats, Transaction
from findash.usecases.load_section import SectionState
from findash.viewmodels.cards_vm import CardsVM
from findash.viewmodels.dashboard_vm import DashboardVM, StatTile
from findash.viewmodels.money_format import format_money, format_signed, status_label
from findash.viewmodels.transactions_vm import TransactionsVM


def _card(**overrides) -> Card:
    fields = dict(
        id="c1",
        user_id="u1",
        brand="Visa",
        last4="4242",
        cardholder="Ada Lovelace",
        status="active",
        color=None,
    )
    fields.update(overrides)
    return Card(**fields)


def _tx(tx_id: str, amount: str, direction: str) -> Transaction:
    return Transaction(
        id=tx_id,
        user_id="u1",
        description=f"Item {tx_id}",
        amount=Decimal(amount),
        direction=direction,
        occurred_at=datetime(2026, 10, 1, 12, 0, tzinfo=timezone.utc),
    )


def test_money_formatting() -> None:
    assert format_money(Decimal("1234.5")) == "$1,234.50"
    assert format_money(0) == "$0.00"
    assert format_money(-3) == "-$3.00"
    assert format_money(None) == "$0.00"
    assert format_signed(Decimal("-12"), debit=True) == "-$12.00"
    assert format_signed(Decimal("24"), debit=False) == "+$24.00"
    assert status_label("on_hold") == "On Hold"
    assert status_label("") == "Unknown"


def test_dashboard_vm_tiles() -> None:
    vm = DashboardVM()
    vm.apply(DashboardStats(balance=Decimal("200.0"), accounts=2, cards=1), user_id="u1")

    assert vm.tiles() == [
        StatTile("Total Balance", "$200.00"),
        StatTile("Accounts", "2"),
        StatTile("Cards", "1"),
    ]
    assert vm.user_label == "User u1"


def test_cards_vm_placeholders_follow_section_state() -> None:
    vm = CardsVM()
    assert vm.placeholder() == "Loading cards..."

    vm.apply(SectionState(items=(), loading=False))
    assert vm.placeholder() == "No cards yet."

    vm.apply(SectionState(items=(_card(),), loading=False))
    assert vm.placeholder() is None


def test_cards_vm_rows_mask_number_and_build_gradient() -> None:
    vm = CardsVM()
    vm.apply(SectionState(items=(_card(), _card(id="", color="#f97316", status="frozen")), loading=False))

    first, second = vm.rows()

    assert first.masked_number == "•••• •••• •••• 4242"
    assert first.status == "Active"
    assert first.background == "linear-gradient(135deg, #7c3aed 0%, #0ea5e9 100%)"
    assert second.key == "card-1"
    assert second.background.startswith("linear-gradient(135deg, #f97316 0%")


def test_transactions_vm_rows_sign_amounts_by_direction() -> None:
    vm = TransactionsVM()
    vm.apply(
        SectionState(
            items=(_tx("t1", "-12", "debit"), _tx("t2", "24", "credit")),
            loading=False,
        )
    )

    debit, credit = vm.rows()

    assert (debit.amount, debit.tone) == ("-$12.00", "negative")
    assert (credit.amount, credit.tone) == ("+$24.00", "positive")
    assert debit.occurred_at
    assert vm.placeholder() is None


def test_transactions_vm_placeholders() -> None:
    vm = TransactionsVM()
    assert vm.placeholder() == "Loading transactions..."

    vm.apply(SectionState(items=(), loading=False, error="down"))
    assert vm.placeholder() == "No recent activity."


def test_money_formatting_handles_amounts_beyond_cent_precision() -> None:
    assert format_money(Decimal("9e999999")) == "$9.00E+999999"
    assert format_money(Decimal("-9e999999")) == "-$9.00E+999999"
