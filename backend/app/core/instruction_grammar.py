"""Instruction Grammar — lexer + keyword-slot template matcher for payment instructions.

Invariants:
    - parse_instruction is PURE: same string in, equal ParsedInstruction (or error dict) out
    - Return ParsedInstruction on success, error dict on violation (never raises)
    - Templates are built once at import and never mutated
    - Checks run in fixed order: type (SY03) -> keyword presence (SY01)
      -> token count (SY01) -> keyword positions (SY02) -> trailing clause (SY03)

Design Decisions:
    - Presence check is a case-insensitive SUBSTRING search over the whole instruction,
      positions are checked over tokens. Two distinct diagnostics: "keyword absent" vs
      "keyword present but misplaced". An identifier such as FROM001 can satisfy the
      presence check; the positional check still catches the misplacement
    - Amount read as its longest numeric prefix, NaN when there is none: amount validity
      is a business rule (AM01), not a syntax rule
"""

import math
import re
from dataclasses import dataclass

from app.core.domain_types import AccountId, InstructionType, ParsedInstruction, StatusCode
from app.core.status_messages import reason_for

_WHITESPACE = re.compile(r"\s+")
_NUMBER = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")

MIN_TOKENS = 11
AMOUNT_INDEX, CURRENCY_INDEX = 1, 2
DATE_KEYWORD, DATE_KEYWORD_INDEX = "ON", 11


@dataclass(frozen=True)
class InstructionTemplate:
    """Fixed keyword skeleton for one instruction type.

    keyword_slots: (token_index, keyword) pairs, type keyword included.
    source_index / destination_index: token positions of the two account ids.
    """
    instruction_type: InstructionType
    keyword_slots: tuple[tuple[int, str], ...]
    source_index: int
    destination_index: int

    @property
    def required_keywords(self) -> tuple[str, ...]:
        return tuple(keyword for _, keyword in self.keyword_slots)


# DEBIT <amt> <ccy> FROM ACCOUNT <src> FOR CREDIT TO ACCOUNT <dst> [ON <date>]
# CREDIT <amt> <ccy> TO ACCOUNT <dst> FOR DEBIT FROM ACCOUNT <src> [ON <date>]
TEMPLATES: dict[InstructionType, InstructionTemplate] = {
    InstructionType.DEBIT: InstructionTemplate(
        instruction_type=InstructionType.DEBIT,
        keyword_slots=(
            (0, "DEBIT"), (3, "FROM"), (4, "ACCOUNT"),
            (6, "FOR"), (7, "CREDIT"), (8, "TO"), (9, "ACCOUNT"),
        ),
        source_index=5,
        destination_index=10,
    ),
    InstructionType.CREDIT: InstructionTemplate(
        instruction_type=InstructionType.CREDIT,
        keyword_slots=(
            (0, "CREDIT"), (3, "TO"), (4, "ACCOUNT"),
            (6, "FOR"), (7, "DEBIT"), (8, "FROM"), (9, "ACCOUNT"),
        ),
        source_index=10,
        destination_index=5,
    ),
}


# ─── Lexer ───────────────────────────────────────────────────────

def normalize(instruction: str) -> str:
    """Trim and collapse internal whitespace runs to single spaces."""
    return _WHITESPACE.sub(" ", instruction.strip())


def tokenize(instruction: str) -> list[str]:
    """Split a normalized instruction on single spaces. Empty input yields ['']."""
    return normalize(instruction).split(" ")


def parse_amount(token: str) -> float:
    """Longest leading decimal/scientific literal -> float; no numeric prefix -> NaN.

    "100USD" -> 100.0, "1_000" -> 1.0, "abc" / "nan" -> NaN.
    """
    match = _NUMBER.match(token.lstrip())
    if not match:
        return math.nan
    return float(match.group())


# ─── Template matching ───────────────────────────────────────────

def check_keywords_present(text: str, template: InstructionTemplate) -> dict | None:
    """SY01 if any template keyword is absent from the instruction text."""
    upper = text.upper()
    for keyword in template.required_keywords:
        if keyword not in upper:
            return _error(StatusCode.MISSING_KEYWORD)
    return None


def check_token_count(tokens: list[str]) -> dict | None:
    """SY01 if there are too few tokens to fill every slot."""
    if len(tokens) < MIN_TOKENS:
        return _error(StatusCode.MISSING_KEYWORD)
    return None


def check_keyword_positions(tokens: list[str], template: InstructionTemplate) -> dict | None:
    """SY02 if any keyword is not at its slot index."""
    for index, keyword in template.keyword_slots:
        if tokens[index].upper() != keyword:
            return _error(StatusCode.INVALID_KEYWORD_ORDER)
    return None


def extract_date(tokens: list[str]) -> tuple[str | None, dict | None]:
    """Trailing ON clause -> (raw date or None, error or None)."""
    if len(tokens) <= MIN_TOKENS:
        return None, None
    if tokens[DATE_KEYWORD_INDEX].upper() != DATE_KEYWORD:
        return None, _error(StatusCode.MALFORMED_INSTRUCTION)
    return " ".join(tokens[DATE_KEYWORD_INDEX + 1:]) or None, None


def parse_instruction(instruction: str) -> ParsedInstruction | dict:
    """Parse one instruction string into a ParsedInstruction or an error dict."""
    text = normalize(instruction)
    tokens = text.split(" ")

    try:
        template = TEMPLATES[InstructionType(tokens[0].upper())]
    except ValueError:
        return _error(StatusCode.MALFORMED_INSTRUCTION)

    error = (
        check_keywords_present(text, template)
        or check_token_count(tokens)
        or check_keyword_positions(tokens, template)
    )
    if error:
        return error

    date, error = extract_date(tokens)
    if error:
        return error

    return ParsedInstruction(
        instruction_type=template.instruction_type,
        amount=parse_amount(tokens[AMOUNT_INDEX]),
        currency=tokens[CURRENCY_INDEX].upper(),
        source_account_id=AccountId(tokens[template.source_index]),
        destination_account_id=AccountId(tokens[template.destination_index]),
        date=date,
    )


# ─── Helper ──────────────────────────────────────────────────────

def is_error(result: ParsedInstruction | dict) -> bool:
    """True if a parse result is an error dict."""
    return isinstance(result, dict)


def _error(code: StatusCode) -> dict:
    """Construct a standard error dict."""
    return {
        "status": "error",
        "error_code": code.value,
        "message": reason_for(code),
    }
