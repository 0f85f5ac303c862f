import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Tuple

from expense_tracker.core.exceptions import InvalidSplitRatio
from expense_tracker.core.utils import to_decimal

logger = logging.getLogger(__name__)

SEPARATOR = "/"
HALF = Decimal("0.5")
EQUAL_SPLIT = (HALF, HALF)

@dataclass(frozen=True)
class SplitWeights:
    payer_share: Decimal
    other_share: Decimal

def parse_split_ratio(raw: Optional[str]) -> Tuple[Decimal, Decimal]:
    """Parse "60/40" into two fractions summing to 1. No separator means an equal split."""
    if raw is None:
        return EQUAL_SPLIT

    text = str(raw).strip()
    if not text or SEPARATOR not in text:
        return EQUAL_SPLIT

    parts = text.split(SEPARATOR)
    if len(parts) != 2:
        raise InvalidSplitRatio(raw, "expected exactly two weights")

    try:
        left, right = (to_decimal(p) for p in parts)
    except ValueError:
        raise InvalidSplitRatio(raw, "weights must be numbers")

    if left < 0 or right < 0:
        raise InvalidSplitRatio(raw, "weights must not be negative")

    total = left + right
    if total == 0:
        raise InvalidSplitRatio(raw, "weights sum to zero")

    return left / total, right / total

def calculate_split(amount: Decimal, raw: Optional[str]) -> SplitWeights:
    try:
        payer_fraction, other_fraction = parse_split_ratio(raw)
    except InvalidSplitRatio as e:
        logger.warning("%s; using an equal split", e)
        payer_fraction, other_fraction = EQUAL_SPLIT

    payer_share = amount * payer_fraction
    # Derive the other side from the remainder so both shares add up to amount
    return SplitWeights(payer_share=payer_share, other_share=amount - payer_share)
