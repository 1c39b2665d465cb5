"""Payment Instructions — POST endpoint that runs one instruction through the orchestrator.

Invariants:
    - Body validated by Pydantic before reaching the handler (400 VALIDATION_ERROR otherwise)
    - Pending and successful transfers both return 200
    - Rejected instructions surface as InvalidInstructionError -> 400 via global handler

Design Decisions:
    - Thin route: conversion to core Accounts + envelope wrapping only, no business logic
      (ADR: ExMA impureim sandwich)
"""

import logging

from fastapi import APIRouter, status

from app.schemas.payment import (
    PaymentInstructionRequest,
    PaymentInstructionResponse,
)
from app.services.transfer_orchestrator import process_payment_instruction

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/payment-instructions", tags=["payments"])

SUCCESS_MESSAGE = "Instruction processed successfully"


@router.post(
    "", response_model=PaymentInstructionResponse,
    status_code=status.HTTP_200_OK,
)
async def process_instruction(body: PaymentInstructionRequest):
    """Parse, validate and (when due) settle one payment instruction."""
    result = process_payment_instruction(body.to_accounts(), body.instruction)
    logger.info(
        "Payment request completed",
        extra={"status_code": result.status_code.value},
    )
    return {"message": SUCCESS_MESSAGE, "data": result.to_dict()}
