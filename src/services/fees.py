"""Transaction bounds and fee tiers for payment links."""

import math
from dataclasses import dataclass

MIN_AMOUNT = 10.0
MAX_AMOUNT = 6000.0

FEE_RATE = 0.02
SMALL_AMOUNT_THRESHOLD = 50.0
SMALL_AMOUNT_SURCHARGE = 1.00

MIN_AMOUNT_REASON = "Minimum amount per transaction is 10.00"
MAX_AMOUNT_REASON = "Maximum amount per transaction is 6000.00"
NOT_A_NUMBER_REASON = "Amount must be a finite number"


@dataclass(frozen=True)
class FeeEvaluation:
    """Outcome of checking an amount against the fee rules."""

    valid: bool
    fee: float
    net: float
    reason: str | None = None


def compute_fee(amount: float) -> float:
    """Fee for ``amount``: 2% plus 1.00 below 50, flat 2% otherwise."""
    if amount < SMALL_AMOUNT_THRESHOLD:
        return amount * FEE_RATE + SMALL_AMOUNT_SURCHARGE
    return amount * FEE_RATE


def evaluate(amount: float) -> FeeEvaluation:
    """
    Validate an amount and preview its fee and net value.

    The fee is computed even for invalid amounts so callers can show a
    preview next to the validation message. Never raises.

    Args:
        amount: Requested amount in the single supported currency

    Returns:
        FeeEvaluation with validity, reason, fee and net
    """
    reason = None
    if not math.isfinite(amount):
        reason = NOT_A_NUMBER_REASON
    elif amount < MIN_AMOUNT:
        reason = MIN_AMOUNT_REASON
    elif amount > MAX_AMOUNT:
        reason = MAX_AMOUNT_REASON

    fee = compute_fee(amount)
    return FeeEvaluation(
        valid=reason is None,
        fee=fee,
        net=amount - fee,
        reason=reason,
    )
