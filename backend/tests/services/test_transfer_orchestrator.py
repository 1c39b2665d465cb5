"""Transfer Orchestrator — end-to-end tests for parse -> validate -> settle.

Invariants:
    - Immediate transfers move exactly amount from source to destination
    - Future-dated transfers are pending (AP02) and leave balances untouched
    - Any failure raises InvalidInstructionError and leaves balances untouched
    - debit_account / credit_account follow input order, accounts follow resolved roles
"""

from datetime import date

import pytest

from app.core.date_rules import utc_today
from app.core.domain_types import StatusCode, TransferStatus
from app.core.errors import InvalidInstructionError
from app.services.transfer_orchestrator import process_payment_instruction

DEBIT = "DEBIT 100 USD FROM ACCOUNT A1 FOR CREDIT TO ACCOUNT B1"
TODAY = date(2025, 6, 15)


# ─── Immediate execution ─────────────────────────────────────────

def test_debit_executes_immediately(make_accounts):
    accounts = make_accounts()
    result = process_payment_instruction(accounts, DEBIT)

    assert result.status == TransferStatus.SUCCESSFUL
    assert result.status_code == StatusCode.TRANSACTION_SUCCESSFUL
    payload = result.to_dict()
    assert payload["type"] == "DEBIT"
    assert payload["amount"] == 100
    assert payload["currency"] == "USD"
    assert payload["debit_account"] == "A1"
    assert payload["credit_account"] == "B1"
    assert payload["execute_by"] is None
    assert payload["accounts"] == [
        {"id": "A1", "balance": 400, "currency": "USD", "balance_before": 500},
        {"id": "B1", "balance": 100, "currency": "USD", "balance_before": 0},
    ]


def test_balances_mutated_in_place(make_accounts):
    accounts = make_accounts()
    result = process_payment_instruction(accounts, DEBIT)
    assert accounts[0].balance == 400
    assert result.accounts[0] is accounts[0]


def test_credit_instruction_moves_funds_to_credited_account(make_accounts):
    accounts = make_accounts()
    result = process_payment_instruction(
        accounts, "CREDIT 50 USD TO ACCOUNT B1 FOR DEBIT FROM ACCOUNT A1",
    )
    assert result.type.value == "CREDIT"
    assert accounts[0].balance == 450
    assert accounts[1].balance == 50


def test_amount_with_trailing_letters_uses_numeric_prefix(make_accounts):
    accounts = make_accounts()
    result = process_payment_instruction(
        accounts, "DEBIT 100USD USD FROM ACCOUNT A1 FOR CREDIT TO ACCOUNT B1",
    )
    assert result.status_code == StatusCode.TRANSACTION_SUCCESSFUL
    assert result.amount == 100
    assert [a.balance for a in accounts] == [400, 100]


def test_past_date_executes_immediately(make_accounts):
    accounts = make_accounts()
    result = process_payment_instruction(accounts, f"{DEBIT} ON 2024-01-01", today=TODAY)
    assert result.status_code == StatusCode.TRANSACTION_SUCCESSFUL
    assert result.execute_by == "2024-01-01"
    assert accounts[0].balance == 400


def test_today_date_executes_immediately(make_accounts):
    accounts = make_accounts()
    result = process_payment_instruction(accounts, f"{DEBIT} ON 2025-06-15", today=TODAY)
    assert result.status == TransferStatus.SUCCESSFUL


def test_reversed_input_order_keeps_positional_debit_credit_fields(make_accounts):
    accounts = list(reversed(make_accounts()))
    result = process_payment_instruction(accounts, DEBIT)
    payload = result.to_dict()
    assert payload["debit_account"] == "B1"
    assert payload["credit_account"] == "A1"
    assert [a["id"] for a in payload["accounts"]] == ["A1", "B1"]
    assert payload["accounts"][0]["balance"] == 400


# ─── Pending ─────────────────────────────────────────────────────

def test_future_date_is_pending_without_mutation(make_accounts):
    accounts = make_accounts()
    result = process_payment_instruction(accounts, f"{DEBIT} ON 2025-07-01", today=TODAY)
    assert result.status == TransferStatus.PENDING
    assert result.status_code == StatusCode.TRANSACTION_PENDING
    assert result.execute_by == "2025-07-01"
    assert [a.balance for a in result.accounts] == [500, 0]


def test_next_year_is_pending_against_real_clock(make_accounts):
    accounts = make_accounts()
    next_year = utc_today().year + 1
    result = process_payment_instruction(accounts, f"{DEBIT} ON {next_year}-01-01")
    assert result.status_code == StatusCode.TRANSACTION_PENDING
    assert accounts[0].balance == 500


def test_future_transfer_still_requires_funds(make_accounts):
    accounts = make_accounts(a_balance=50)
    with pytest.raises(InvalidInstructionError) as exc_info:
        process_payment_instruction(accounts, f"{DEBIT} ON 2030-01-01", today=TODAY)
    assert exc_info.value.status_code == StatusCode.INSUFFICIENT_FUNDS


# ─── Failures ────────────────────────────────────────────────────

@pytest.mark.parametrize("instruction, code", [
    ("DEBIT 99.5 USD FROM ACCOUNT A1 FOR CREDIT TO ACCOUNT B1", "AM01"),
    ("DEBIT 0 USD FROM ACCOUNT A1 FOR CREDIT TO ACCOUNT B1", "AM01"),
    ("DEBIT -5 USD FROM ACCOUNT A1 FOR CREDIT TO ACCOUNT B1", "AM01"),
    ("DEBIT 100 USD FROM ACCOUNT A1 CREDIT TO ACCOUNT B1", "SY01"),
    ("DEBIT 100 USD TO ACCOUNT A1 FOR CREDIT FROM ACCOUNT B1", "SY02"),
    ("SEND 100 USD FROM ACCOUNT A1 FOR CREDIT TO ACCOUNT B1", "SY03"),
    ("DEBIT 100 EUR FROM ACCOUNT A1 FOR CREDIT TO ACCOUNT B1", "CU02"),
    ("DEBIT 600 USD FROM ACCOUNT A1 FOR CREDIT TO ACCOUNT B1", "AC01"),
    ("DEBIT 100 USD FROM ACCOUNT A1 FOR CREDIT TO ACCOUNT A1", "AC02"),
    ("DEBIT 100 USD FROM ACCOUNT A1 FOR CREDIT TO ACCOUNT Z9", "AC03"),
    (f"{DEBIT} ON 2025/01/01", "DT01"),
])
def test_rejections(make_accounts, instruction, code):
    accounts = make_accounts()
    with pytest.raises(InvalidInstructionError) as exc_info:
        process_payment_instruction(accounts, instruction, today=TODAY)
    exc = exc_info.value
    assert exc.status_code.value == code
    assert exc.details["status"] == "failed"
    assert exc.details["status_code"] == code
    assert [a.balance for a in accounts] == [500, 0]


def test_currency_mismatch(make_accounts):
    accounts = make_accounts(b_ccy="NGN")
    with pytest.raises(InvalidInstructionError) as exc_info:
        process_payment_instruction(accounts, DEBIT)
    assert exc_info.value.status_code == StatusCode.CURRENCY_MISMATCH


def test_single_account_is_rejected(make_accounts):
    accounts = make_accounts()[:1]
    with pytest.raises(InvalidInstructionError) as exc_info:
        process_payment_instruction(
            accounts, "DEBIT 100 USD FROM ACCOUNT A1 FOR CREDIT TO ACCOUNT A1",
        )
    assert exc_info.value.status_code == StatusCode.SAME_ACCOUNT


def test_rejection_is_logged(make_accounts, caplog):
    with caplog.at_level("WARNING"):
        with pytest.raises(InvalidInstructionError):
            process_payment_instruction(make_accounts(), "NOPE")
    assert any(r.__dict__.get("status_code") == "SY03" for r in caplog.records)
