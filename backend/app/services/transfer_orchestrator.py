"""Transfer Orchestrator — parse -> validate -> classify -> settle for one payment instruction.

Invariants:
    - Balances mutated ONLY after every grammar and rule check passed
    - Pending (future-dated) transfers never touch balances
    - Any syntax or rule violation raises InvalidInstructionError (never returns "failed")
    - debit_account / credit_account come from accounts[0] / accounts[1] (positional),
      result.accounts is [source, destination] as resolved by the validator

Design Decisions:
    - Synchronous: the core is CPU-only and finishes in microseconds, no thread offload needed
    - Caller owns the Account records: this function takes them for one call, mutates in place
      and hands them back inside the result; persistence is the caller's concern
    - Log and re-raise: rejections are logged here, once, at WARNING with status_code; the
      API layer only renders the HTTP shape
      (ADR: ExMA impureim sandwich)
"""

import logging
from datetime import date
from typing import NoReturn

from app.core.date_rules import is_future_date
from app.core.domain_types import (
    Account,
    StatusCode,
    TransferResult,
    TransferStatus,
)
from app.core.errors import ErrorContext, InvalidInstructionError
from app.core.instruction_grammar import is_error, parse_instruction
from app.core.status_messages import reason_for
from app.core.transaction_rules import validate_transaction

logger = logging.getLogger(__name__)


def process_payment_instruction(
    accounts: list[Account], instruction: str, *, today: date | None = None,
) -> TransferResult:
    """Process one instruction against its accounts.

    Returns a pending or successful TransferResult; raises InvalidInstructionError
    when the instruction fails parsing or validation.
    """
    for account in accounts:
        account.balance_before = account.balance

    parsed = parse_instruction(instruction)
    if is_error(parsed):
        _reject(parsed)

    validation = validate_transaction(parsed, accounts)
    if not validation["valid"]:
        for violation in validation.get("violations", []):
            logger.debug(
                f"Rule violation: {violation['error_code']}",
                extra={"status_code": violation["error_code"]},
            )
        _reject(validation["error"], parsed.instruction_type.value)

    source = validation["source_account"]
    destination = validation["destination_account"]
    amount = int(parsed.amount)

    if parsed.date and is_future_date(parsed.date, today):
        status, code = TransferStatus.PENDING, StatusCode.TRANSACTION_PENDING
    else:
        source.balance -= amount
        destination.balance += amount
        status, code = TransferStatus.SUCCESSFUL, StatusCode.TRANSACTION_SUCCESSFUL

    logger.info(
        f"Instruction {status.value}: {parsed.instruction_type.value} {amount} {parsed.currency}",
        extra={
            "status_code": code.value,
            "instruction_type": parsed.instruction_type.value,
        },
    )
    return TransferResult(
        status=status,
        status_code=code,
        status_reason=reason_for(code),
        type=parsed.instruction_type,
        amount=amount,
        currency=parsed.currency,
        debit_account=accounts[0].id,
        credit_account=accounts[1].id,
        execute_by=parsed.date,
        accounts=[source, destination],
    )


def _reject(error: dict, instruction_type: str | None = None) -> NoReturn:
    """Log the rejection and raise it as InvalidInstructionError."""
    code = StatusCode(error["error_code"])
    logger.warning(
        f"Instruction rejected: {error['message']}",
        extra={"status_code": code.value, "instruction_type": instruction_type},
    )
    raise InvalidInstructionError(
        code, error["message"],
        context=ErrorContext(instruction_type=instruction_type),
    )
