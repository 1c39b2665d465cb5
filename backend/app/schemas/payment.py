"""Payment Schemas — Pydantic models for the payment-instructions API boundary.

Invariants:
    - PaymentInstructionRequest validates envelope shape only (field presence and types);
      grammar and business rules belong to core/
    - Schema classes are built once at import and reused for every request
    - TransferResultResponse mirrors TransferResult.to_dict() field for field

Design Decisions:
    - Envelope validation in Pydantic, not in core: a malformed body never reaches the
      orchestrator and is reported as VALIDATION_ERROR (ADR: validate at system boundary)
    - balance accepts int | float: integer-valued is a business invariant, not a shape one
"""

from typing import Literal

from pydantic import BaseModel, Field

from app.core.domain_types import Account, AccountId


class AccountPayload(BaseModel):
    """Account snapshot as supplied by the caller."""
    id: str = Field(min_length=1)
    balance: int | float
    currency: str

    def to_account(self) -> Account:
        return Account(
            id=AccountId(self.id), balance=self.balance, currency=self.currency,
        )


class PaymentInstructionRequest(BaseModel):
    """POST /payment-instructions body."""
    accounts: list[AccountPayload]
    instruction: str

    def to_accounts(self) -> list[Account]:
        return [a.to_account() for a in self.accounts]


class AccountResult(BaseModel):
    """Account as echoed back after processing."""
    id: str
    balance: int | float
    currency: str
    balance_before: int | float | None = None


class TransferResultResponse(BaseModel):
    """Outcome of one instruction — pending, successful or failed."""
    type: Literal["DEBIT", "CREDIT"] | None = None
    amount: int | None = None
    currency: str | None = None
    debit_account: str | None = None
    credit_account: str | None = None
    execute_by: str | None = None
    status: Literal["pending", "successful", "failed"]
    status_reason: str
    status_code: str
    accounts: list[AccountResult] = []


class PaymentInstructionResponse(BaseModel):
    """Success envelope for POST /payment-instructions."""
    status: Literal["success"] = "success"
    message: str
    data: TransferResultResponse
