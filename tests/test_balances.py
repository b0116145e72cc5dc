import pytest
import structlog
from hypothesis import given
from hypothesis import strategies as st
from structlog.testing import capture_logs

from debtor.models import MalformedRecord, Transaction
from debtor.services.balances import aggregate_balances, apply_transactions, total_outstanding

people = st.sampled_from(["ann", "bob", "cat", "dan", "eve", "Ann"])
transactions = st.builds(
    Transaction,
    payer=people,
    payee=people,
    amount=st.integers(min_value=1, max_value=10_000),
)


def test_aggregate_balances_debits_payer_and_credits_payee():
    ledger = [
        Transaction(payer="ann", payee="bob", amount=30),
        Transaction(payer="bob", payee="cat", amount=10),
    ]

    balances = aggregate_balances(ledger)

    assert balances == {"ann": -30, "bob": 20, "cat": 10}


def test_aggregate_balances_drops_settled_people():
    ledger = [
        Transaction(payer="ann", payee="bob", amount=30),
        Transaction(payer="bob", payee="ann", amount=30),
        Transaction(payer="cat", payee="dan", amount=5),
    ]

    assert aggregate_balances(ledger) == {"cat": -5, "dan": 5}


def test_aggregate_balances_does_not_normalise_names():
    balances = aggregate_balances([Transaction(payer="Ann", payee="ann", amount=1)])

    assert balances == {"Ann": -1, "ann": 1}


def test_aggregate_balances_consumes_generators():
    ledger = (Transaction(payer="a", payee="b", amount=i) for i in range(1, 1001))

    assert aggregate_balances(ledger) == {"a": -500500, "b": 500500}


@pytest.mark.parametrize("amount", [0, -5])
def test_aggregate_balances_rejects_non_positive_amounts(amount):
    ledger = [
        Transaction(payer="ann", payee="bob", amount=10),
        Transaction(payer="bob", payee="cat", amount=amount),
    ]

    with pytest.raises(MalformedRecord):
        aggregate_balances(ledger)


@pytest.mark.parametrize("amount", [2.5, "3", True])
def test_aggregate_balances_rejects_non_integer_amounts(amount):
    with pytest.raises(MalformedRecord):
        aggregate_balances([Transaction(payer="ann", payee="bob", amount=amount)])


def test_apply_transactions_leaves_input_untouched():
    balances = {"ann": 5, "bob": -5}

    after = apply_transactions(balances, [Transaction(payer="ann", payee="bob", amount=5)])

    assert after == {"ann": 0, "bob": 0}
    assert balances == {"ann": 5, "bob": -5}


def test_total_outstanding():
    assert total_outstanding({"a": 100, "b": 50, "c": -80, "d": -70}) == 150
    assert total_outstanding({}) == 0


@given(st.lists(transactions, max_size=60))
def test_balances_always_sum_to_zero(ledger):
    balances = aggregate_balances(ledger)

    assert sum(balances.values()) == 0
    assert all(balances.values())


@given(st.lists(transactions, max_size=40), st.randoms())
def test_order_of_entries_does_not_matter(ledger, rnd):
    shuffled = list(ledger)
    rnd.shuffle(shuffled)

    assert aggregate_balances(shuffled) == aggregate_balances(ledger)


def test_aggregate_balances_logs_entry_count():
    ledger = [
        Transaction(payer="ann", payee="bob", amount=30),
        Transaction(payer="bob", payee="cat", amount=10),
    ]

    structlog.reset_defaults()
    with capture_logs() as logs:
        aggregate_balances(ledger)

    [event] = [entry for entry in logs if entry["event"] == "balances.unresolved"]
    assert event["entries"] == 2
    assert event["people"] == 3
    assert event["to_repay"] == 30
