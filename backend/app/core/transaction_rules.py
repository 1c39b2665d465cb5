"""Transaction Rule Enforcement — validates a parsed instruction against the supplied accounts.

Invariants:
    - All functions are PURE: no IO, no async, no side effects
    - Return error dict on violation, None on success
    - Accounts are resolved BEFORE any rule reads account fields; an unresolved id is AC03
    - Rule order is fixed and decides which single error a bad instruction reports:
      AC04 (source) -> AC04 (destination) -> AM01 -> DT01 -> AC01 -> AC02 -> CU02
      -> AC03 (count, stops collection) -> CU01 (source) -> CU01 (destination)
    - Every rule runs and is collected; only the first violation is surfaced

Design Decisions:
    - Ordered tuple of (check, stops_collection) over an if-ladder: the order table is
      data, visible in one place (ADR: ExMA no convention-over-config)
    - Resolved records returned, not copies: the orchestrator mutates them in place
"""

import math

from app.core.date_rules import is_valid_date_format
from app.core.domain_types import (
    REQUIRED_ACCOUNT_COUNT,
    SUPPORTED_CURRENCIES,
    Account,
    AccountId,
    ParsedInstruction,
    StatusCode,
)
from app.core.status_messages import reason_for

_ACCOUNT_ID_CHARS = frozenset(
    "abcdefghijklmnopqrstuvwxyz"
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    "0123456789"
    "-.@"
)


# --- Account resolution -------------------------------------------------------

def find_account(accounts: list[Account], account_id: AccountId) -> Account | None:
    """First account whose id matches, or None if not found."""
    return next((a for a in accounts if a.id == account_id), None)


def is_valid_account_id(account_id: str) -> bool:
    """True if every character is an ASCII letter, digit, '-', '.' or '@'."""
    return all(ch in _ACCOUNT_ID_CHARS for ch in account_id)


# --- Rule checks --------------------------------------------------------------

def check_source_account_id(
    parsed: ParsedInstruction, source: Account, destination: Account,
    accounts: list[Account],
) -> dict | None:
    """Rule 1: source identifier charset."""
    if not is_valid_account_id(source.id):
        return _error(StatusCode.INVALID_ACCOUNT_ID)
    return None


def check_destination_account_id(
    parsed: ParsedInstruction, source: Account, destination: Account,
    accounts: list[Account],
) -> dict | None:
    """Rule 2: destination identifier charset."""
    if not is_valid_account_id(destination.id):
        return _error(StatusCode.INVALID_ACCOUNT_ID)
    return None


def check_amount(
    parsed: ParsedInstruction, source: Account, destination: Account,
    accounts: list[Account],
) -> dict | None:
    """Rule 3: amount is a finite, strictly positive integer."""
    amount = parsed.amount
    if not math.isfinite(amount) or amount <= 0 or not float(amount).is_integer():
        return _error(StatusCode.INVALID_AMOUNT)
    return None


def check_date_format(
    parsed: ParsedInstruction, source: Account, destination: Account,
    accounts: list[Account],
) -> dict | None:
    """Rule 4: a supplied date must be YYYY-MM-DD (format only)."""
    if parsed.date and not is_valid_date_format(parsed.date):
        return _error(StatusCode.INVALID_DATE_FORMAT)
    return None


def check_sufficient_funds(
    parsed: ParsedInstruction, source: Account, destination: Account,
    accounts: list[Account],
) -> dict | None:
    """Rule 5: source balance covers the amount, even for future-dated transfers."""
    if source.balance < parsed.amount:
        return _error(StatusCode.INSUFFICIENT_FUNDS)
    return None


def check_distinct_accounts(
    parsed: ParsedInstruction, source: Account, destination: Account,
    accounts: list[Account],
) -> dict | None:
    """Rule 6: source and destination identifiers differ."""
    if parsed.source_account_id == parsed.destination_account_id:
        return _error(StatusCode.SAME_ACCOUNT)
    return None


def check_supported_currency(
    parsed: ParsedInstruction, source: Account, destination: Account,
    accounts: list[Account],
) -> dict | None:
    """Rule 7: transaction currency is on the allow-list."""
    if parsed.currency not in SUPPORTED_CURRENCIES:
        return _error(StatusCode.UNSUPPORTED_CURRENCY)
    return None


def check_account_count(
    parsed: ParsedInstruction, source: Account, destination: Account,
    accounts: list[Account],
) -> dict | None:
    """Rule 8: exactly two accounts supplied."""
    if len(accounts) != REQUIRED_ACCOUNT_COUNT:
        return _error(StatusCode.ACCOUNT_NOT_FOUND)
    return None


def check_source_currency(
    parsed: ParsedInstruction, source: Account, destination: Account,
    accounts: list[Account],
) -> dict | None:
    """Rule 9: source account currency matches the transaction."""
    if source.currency != parsed.currency:
        return _error(StatusCode.CURRENCY_MISMATCH)
    return None


def check_destination_currency(
    parsed: ParsedInstruction, source: Account, destination: Account,
    accounts: list[Account],
) -> dict | None:
    """Rule 10: destination account currency matches the transaction."""
    if destination.currency != parsed.currency:
        return _error(StatusCode.CURRENCY_MISMATCH)
    return None


# (check, stops_collection) — order is the contract
RULE_CHAIN = (
    (check_source_account_id, False),
    (check_destination_account_id, False),
    (check_amount, False),
    (check_date_format, False),
    (check_sufficient_funds, False),
    (check_distinct_accounts, False),
    (check_supported_currency, False),
    (check_account_count, True),
    (check_source_currency, False),
    (check_destination_currency, False),
)


# --- Composite validators -----------------------------------------------------

def collect_violations(
    parsed: ParsedInstruction, source: Account, destination: Account,
    accounts: list[Account],
) -> list[dict]:
    """Run every rule in order; a firing stops_collection rule ends the run."""
    violations = []
    for check, stops_collection in RULE_CHAIN:
        error = check(parsed, source, destination, accounts)
        if error is None:
            continue
        violations.append(error)
        if stops_collection:
            break
    return violations


def validate_transaction(parsed: ParsedInstruction, accounts: list[Account]) -> dict:
    """Resolve both accounts, then report the first rule violation.

    Returns {"valid": True, "source_account", "destination_account"} or
    {"valid": False, "error": error_dict}.
    """
    source = find_account(accounts, parsed.source_account_id)
    destination = find_account(accounts, parsed.destination_account_id)
    if source is None or destination is None:
        return {"valid": False, "error": _error(StatusCode.ACCOUNT_NOT_FOUND)}

    violations = collect_violations(parsed, source, destination, accounts)
    if violations:
        return {"valid": False, "error": violations[0], "violations": violations}

    return {
        "valid": True,
        "source_account": source,
        "destination_account": destination,
    }


# --- Helper -------------------------------------------------------------------

def _error(code: StatusCode) -> dict:
    """Construct a standard error dict."""
    return {
        "status": "error",
        "error_code": code.value,
        "message": reason_for(code),
    }
