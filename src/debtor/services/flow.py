"""Approximate settlement through min-cost max-flow.

Everybody with a surplus is fed by a super source, everybody with a deficit drains into
a super sink, and every surplus node has an uncapped unit-cost edge to every deficit
node. Successive shortest augmenting paths keep pushing through edges that already
carry flow, which usually keeps the number of distinct transfers low. It is not
guaranteed minimal: some inputs settle with more transfers than the exact solver needs.
"""

from __future__ import annotations

from collections import deque
from typing import List, Mapping, Optional

from debtor.logging import get_logger
from debtor.models import Person, Transaction

INF = float("inf")


class FlowNetwork:
    """Residual graph stored as flat edge arrays.

    Edge ``e`` and its reverse ``e ^ 1`` are allocated together, so the flow on a
    forward edge is the residual capacity of its reverse.
    """

    def __init__(self, nodes: int) -> None:
        self.adjacency: list[list[int]] = [[] for _ in range(nodes)]
        self.head: list[int] = []
        self.capacity: list[int] = []
        self.cost: list[int] = []

    def add_edge(self, source: int, target: int, capacity: int, cost: int) -> int:
        edge = len(self.head)
        self.head += [target, source]
        self.capacity += [capacity, 0]
        self.cost += [cost, -cost]
        self.adjacency[source].append(edge)
        self.adjacency[target].append(edge ^ 1)
        return edge

    def flow(self, edge: int) -> int:
        return self.capacity[edge ^ 1]

    def _shortest_path(self, source: int, sink: int) -> Optional[list[int]]:
        nodes = len(self.adjacency)
        dist: list[float] = [INF] * nodes
        via: list[int] = [-1] * nodes
        queued = [False] * nodes

        dist[source] = 0
        queue = deque([source])
        queued[source] = True
        while queue:
            node = queue.popleft()
            queued[node] = False
            for edge in self.adjacency[node]:
                if self.capacity[edge] <= 0:
                    continue
                target = self.head[edge]
                candidate = dist[node] + self.cost[edge]
                if candidate < dist[target]:
                    dist[target] = candidate
                    via[target] = edge
                    if not queued[target]:
                        queue.append(target)
                        queued[target] = True

        if dist[sink] == INF:
            return None

        path: list[int] = []
        node = sink
        while node != source:
            edge = via[node]
            path.append(edge)
            node = self.head[edge ^ 1]
        path.reverse()
        return path

    def min_cost_max_flow(self, source: int, sink: int) -> tuple[int, int]:
        total_flow = 0
        total_cost = 0
        while True:
            path = self._shortest_path(source, sink)
            if path is None:
                break
            pushed = min(self.capacity[edge] for edge in path)
            for edge in path:
                self.capacity[edge] -= pushed
                self.capacity[edge ^ 1] += pushed
                total_cost += pushed * self.cost[edge]
            total_flow += pushed
        return total_flow, total_cost


def settle_by_flow(balances: Mapping[Person, int]) -> List[Transaction]:
    payers = [person for person, balance in balances.items() if balance > 0]
    payees = [person for person, balance in balances.items() if balance < 0]
    supply = sum(balances[person] for person in payers)

    source = 0
    sink = len(payers) + len(payees) + 1
    network = FlowNetwork(sink + 1)

    for i, person in enumerate(payers, start=1):
        network.add_edge(source, i, balances[person], 0)

    routes: list[tuple[int, Person, Person]] = []
    for i, payer in enumerate(payers, start=1):
        for j, payee in enumerate(payees, start=len(payers) + 1):
            routes.append((network.add_edge(i, j, supply, 1), payer, payee))

    for j, person in enumerate(payees, start=len(payers) + 1):
        network.add_edge(j, sink, -balances[person], 0)

    total_flow, total_cost = network.min_cost_max_flow(source, sink)
    assert total_flow == supply, "flow network left balances unsettled"

    log = get_logger(__name__)
    log.info("flow.computed", total_flow=total_flow, cost=total_cost)

    transfers: list[Transaction] = []
    for edge, payer, payee in routes:
        amount = network.flow(edge)
        if amount > 0:
            transfers.append(Transaction(payer=payer, payee=payee, amount=amount))
    return transfers
