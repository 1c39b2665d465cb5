"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - Instruction types, transfer statuses and status codes are Enums — no raw string matching
    - SUPPORTED_CURRENCIES is the single source of truth for the currency allow-list
    - ParsedInstruction is frozen: immutable once built by the grammar
    - Account is mutable: the orchestrator adjusts balances in place for one call

Design Decisions:
    - str Enums: serialize to JSON without custom encoders (ADR: wire shape is JSON)
    - Dataclasses in core, pydantic at the boundary: core stays import-light and pure
      (ADR: ExMA impureim sandwich)
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

AccountId = NewType("AccountId", str)


# ─── Constants ───────────────────────────────────────────────────

SUPPORTED_CURRENCIES: frozenset[str] = frozenset({"NGN", "USD", "GBP", "GHS"})
REQUIRED_ACCOUNT_COUNT: int = 2


# ─── Enums ───────────────────────────────────────────────────────

class InstructionType(str, Enum):
    """Instruction verb — decides which account slot is the source."""
    DEBIT = "DEBIT"
    CREDIT = "CREDIT"


class TransferStatus(str, Enum):
    """Outcome of one processed instruction."""
    PENDING = "pending"
    SUCCESSFUL = "successful"
    FAILED = "failed"


class StatusCode(str, Enum):
    """Machine-readable outcome identifiers returned to callers."""
    # Syntax
    MISSING_KEYWORD = "SY01"
    INVALID_KEYWORD_ORDER = "SY02"
    MALFORMED_INSTRUCTION = "SY03"
    # Accounts
    INSUFFICIENT_FUNDS = "AC01"
    SAME_ACCOUNT = "AC02"
    ACCOUNT_NOT_FOUND = "AC03"
    INVALID_ACCOUNT_ID = "AC04"
    # Amount / currency / date
    INVALID_AMOUNT = "AM01"
    CURRENCY_MISMATCH = "CU01"
    UNSUPPORTED_CURRENCY = "CU02"
    INVALID_DATE_FORMAT = "DT01"
    # Approved
    TRANSACTION_SUCCESSFUL = "AP00"
    TRANSACTION_PENDING = "AP02"


# ─── Records ─────────────────────────────────────────────────────

@dataclass
class Account:
    """Caller-owned account snapshot — balance mutated in place on execution."""
    id: AccountId
    balance: int | float
    currency: str
    balance_before: int | float | None = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "balance": self.balance,
            "currency": self.currency,
            "balance_before": self.balance_before,
        }


@dataclass(frozen=True)
class ParsedInstruction:
    """Typed transfer intent produced by the instruction grammar.

    amount may be NaN when the amount token is not numeric; the validator
    reports it as AM01. date is the raw text after ON, not yet format-checked.
    """
    instruction_type: InstructionType
    amount: float
    currency: str
    source_account_id: AccountId
    destination_account_id: AccountId
    date: str | None = None


@dataclass
class TransferResult:
    """Sole output of the orchestrator; to_dict() is the wire shape."""
    status: TransferStatus
    status_code: StatusCode
    status_reason: str
    type: InstructionType | None = None
    amount: int | None = None
    currency: str | None = None
    debit_account: AccountId | None = None
    credit_account: AccountId | None = None
    execute_by: str | None = None
    accounts: list[Account] = field(default_factory=list)

    @classmethod
    def failed(cls, status_code: StatusCode, status_reason: str) -> "TransferResult":
        """Failure payload — every transaction field nulled, no accounts."""
        return cls(
            status=TransferStatus.FAILED,
            status_code=status_code,
            status_reason=status_reason,
        )

    def to_dict(self) -> dict:
        return {
            "type": self.type.value if self.type else None,
            "amount": self.amount,
            "currency": self.currency,
            "debit_account": self.debit_account,
            "credit_account": self.credit_account,
            "execute_by": self.execute_by,
            "status": self.status.value,
            "status_reason": self.status_reason,
            "status_code": self.status_code.value,
            "accounts": [a.to_dict() for a in self.accounts],
        }
