from __future__ import annotations

from typing import Iterable, Mapping

from debtor.logging import get_logger
from debtor.models import MalformedRecord, Person, Transaction


def _check_amount(transaction: Transaction) -> int:
    amount = transaction.amount
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise MalformedRecord(f"amount must be an integer, got {amount!r}")
    if amount <= 0:
        raise MalformedRecord(f"amount must be positive, got {amount}")
    return amount


def fold_transactions(balances: dict[Person, int], transactions: Iterable[Transaction]) -> int:
    """Debit each payer and credit each payee in place. Returns the number of entries folded."""
    count = 0
    for transaction in transactions:
        amount = _check_amount(transaction)
        balances[transaction.payer] = balances.get(transaction.payer, 0) - amount
        balances[transaction.payee] = balances.get(transaction.payee, 0) + amount
        count += 1
    return count


def aggregate_balances(transactions: Iterable[Transaction]) -> dict[Person, int]:
    """Net balance per person, people who are already square left out.

    A positive balance means the person received more than they paid and has to pay
    the difference back; a negative one means they are owed money.
    """
    balances: dict[Person, int] = {}
    count = fold_transactions(balances, transactions)
    retained = {person: balance for person, balance in balances.items() if balance != 0}
    assert sum(retained.values()) == 0, "aggregated balances must be zero-sum"

    log = get_logger(__name__)
    log.info(
        "balances.unresolved",
        entries=count,
        people=len(retained),
        to_repay=total_outstanding(retained),
    )
    return retained


def apply_transactions(balances: Mapping[Person, int], transactions: Iterable[Transaction]) -> dict[Person, int]:
    result = dict(balances)
    fold_transactions(result, transactions)
    return result


def total_outstanding(balances: Mapping[Person, int]) -> int:
    return sum(balance for balance in balances.values() if balance > 0)
