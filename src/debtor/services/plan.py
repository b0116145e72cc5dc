from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import List, Mapping, Optional

from debtor.logging import get_logger
from debtor.models import Person, Transaction
from debtor.services.balances import apply_transactions
from debtor.services.flow import settle_by_flow
from debtor.services.mode import DEFAULT_EXACT_THRESHOLD, SolveMode, select_mode
from debtor.services.partition import ZeroSumPartition, elements
from debtor.services.settlement import settle


@dataclass(slots=True)
class RepaymentPlan:
    mode: SolveMode
    transactions: List[Transaction] = field(default_factory=list)
    elapsed: float = 0.0

    def __len__(self) -> int:
        return len(self.transactions)


def compute_exact(balances: Mapping[Person, int]) -> List[Transaction]:
    """Minimal plan: settle each part of a maximal zero-sum partition on its own."""
    people = list(balances)
    values = [balances[person] for person in people]

    partition = ZeroSumPartition.compute(values)
    log = get_logger(__name__)
    log.info("partition.computed", parts=len(partition))

    transfers: list[Transaction] = []
    for mask in partition:
        group = {people[idx]: values[idx] for idx in elements(mask)}
        # parts of a maximal partition have no zero-sum subgroups, so k - 1 transfers is optimal
        transfers.extend(settle(group))
    return transfers


def compute_approx(balances: Mapping[Person, int]) -> List[Transaction]:
    return settle_by_flow(balances)


SOLVERS = {
    SolveMode.EXACT: compute_exact,
    SolveMode.APPROX: compute_approx,
}


def compute_plan(
    balances: Mapping[Person, int],
    forced: Optional[SolveMode] = None,
    threshold: int = DEFAULT_EXACT_THRESHOLD,
) -> RepaymentPlan:
    log = get_logger(__name__)
    retained = {person: balance for person, balance in balances.items() if balance != 0}

    mode = select_mode(len(retained), forced=forced, threshold=threshold)
    log.info("mode.selected", mode=mode.value, people=len(retained), threshold=threshold)
    if forced is None and mode is SolveMode.APPROX:
        log.warning("mode.approximate", hint="the plan may not be minimal, pass --exact to force exact mode")
    elif mode is SolveMode.EXACT and len(retained) > threshold:
        log.warning("mode.intractable", people=len(retained), threshold=threshold)

    started = time.perf_counter()
    transactions = [transfer.normalised() for transfer in SOLVERS[mode](retained)]
    elapsed = time.perf_counter() - started

    leftover = apply_transactions(retained, transactions)
    assert not any(leftover.values()), "repayment plan does not settle every balance"

    log.info("plan.computed", transactions=len(transactions), seconds=round(elapsed, 3))
    return RepaymentPlan(mode=mode, transactions=transactions, elapsed=elapsed)
