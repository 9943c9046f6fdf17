# app/contract/payout.py
from __future__ import annotations

# ecostate is a percentage scaled by 100 (5000 == 50.00%)
ONE_POINT = 100
BASELINE = 5000
BONUS_PER_POINT = 2


def calculate_payout(previous: int, reported: int) -> int:
    """
    Tokens earned when the oracle reports `reported` after `previous`.

    - regression pays nothing
    - an improvement below one percentage point pays 2 tokens per point above 50%
    - an improvement of at least one point pays the raw scaled difference
    """
    diff = int(reported) - int(previous)

    if diff < 0:
        return 0

    if diff < ONE_POINT:
        above_fifty = int(reported) - BASELINE
        if above_fifty <= 0:
            return 0
        # operands are positive here, so floor division truncates
        return (above_fifty * BONUS_PER_POINT) // ONE_POINT

    return diff
