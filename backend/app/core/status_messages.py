"""Status Messages — centralized human-readable reasons for every status code.

Invariants:
    - All strings are pure data (no IO, no computation)
    - Covers every member of StatusCode — reason_for never falls through

Design Decisions:
    - Catalog keyed by StatusCode, not by free-form message keys: the code is
      what callers branch on, the reason is only for humans
"""

from app.core.domain_types import StatusCode


STATUS_REASONS: dict[StatusCode, str] = {
    # Syntax
    StatusCode.MISSING_KEYWORD: "Missing required keyword",
    StatusCode.INVALID_KEYWORD_ORDER: "Invalid keyword order",
    StatusCode.MALFORMED_INSTRUCTION: "Malformed instruction: unable to parse keywords",
    # Accounts
    StatusCode.INSUFFICIENT_FUNDS: "Insufficient funds in debit account",
    StatusCode.SAME_ACCOUNT: "Debit and credit accounts cannot be the same",
    StatusCode.ACCOUNT_NOT_FOUND: "Account not found",
    StatusCode.INVALID_ACCOUNT_ID: "Invalid account ID format",
    # Amount / currency / date
    StatusCode.INVALID_AMOUNT: "Amount must be a positive integer",
    StatusCode.CURRENCY_MISMATCH: "Account currency mismatch",
    StatusCode.UNSUPPORTED_CURRENCY: "Unsupported currency. Only NGN, USD, GBP, and GHS are supported",
    StatusCode.INVALID_DATE_FORMAT: "Invalid date format",
    # Approved
    StatusCode.TRANSACTION_SUCCESSFUL: "Transaction executed successfully",
    StatusCode.TRANSACTION_PENDING: "Transaction scheduled for future execution",
}


def reason_for(code: StatusCode) -> str:
    """Human-readable reason for a status code."""
    return STATUS_REASONS[code]
