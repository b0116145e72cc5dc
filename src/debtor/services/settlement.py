from __future__ import annotations

import heapq
from typing import List, Mapping

from debtor.models import Person, Transaction


def settle(balances: Mapping[Person, int]) -> List[Transaction]:
    """Settle one zero-sum group with at most ``len(balances) - 1`` transfers.

    The largest outstanding surplus always pays the largest outstanding deficit. Every
    transfer clears at least one side and the last one clears both, which gives the
    edge bound.
    """
    assert sum(balances.values()) == 0, "balances must be zero-sum"

    surplus: list[tuple[int, Person]] = []
    deficit: list[tuple[int, Person]] = []

    for person, balance in balances.items():
        if balance > 0:
            surplus.append((-balance, person))
        elif balance < 0:
            deficit.append((balance, person))

    heapq.heapify(surplus)
    heapq.heapify(deficit)

    transfers: list[Transaction] = []

    while surplus and deficit:
        payer_left, payer = heapq.heappop(surplus)
        payee_left, payee = heapq.heappop(deficit)

        amount = min(-payer_left, -payee_left)
        transfers.append(Transaction(payer=payer, payee=payee, amount=amount))

        payer_left += amount
        payee_left += amount

        if payer_left:
            heapq.heappush(surplus, (payer_left, payer))
        if payee_left:
            heapq.heappush(deficit, (payee_left, payee))

    assert not surplus and not deficit, "group left unsettled"
    return transfers
