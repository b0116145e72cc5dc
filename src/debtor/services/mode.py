from __future__ import annotations

from enum import Enum
from typing import Optional

DEFAULT_EXACT_THRESHOLD = 20


class SolveMode(str, Enum):
    EXACT = "exact"
    APPROX = "approx"


def select_mode(
    people: int,
    forced: Optional[SolveMode] = None,
    threshold: int = DEFAULT_EXACT_THRESHOLD,
) -> SolveMode:
    """Exact search for small groups, min-cost flow once it would take too long.

    Exact solving gets roughly three times slower with every extra person, so past
    ``threshold`` people the approximation is used unless a mode is forced. At the
    default of 20 a worst-case ledger (many small balances that cancel in pairs) can
    still take tens of seconds in exact mode; lower the threshold if that matters.
    """
    if forced is not None:
        return forced
    if people <= threshold:
        return SolveMode.EXACT
    return SolveMode.APPROX
