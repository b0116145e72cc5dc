from __future__ import annotations

from typing import Iterable, Mapping

import pytest

from debtor.config import get_settings
from debtor.models import Transaction
from debtor.services.balances import apply_transactions


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch):
    for name in ("DEBTOR_EXACT_THRESHOLD", "DEBTOR_MODE", "DEBTOR_LOG_FORMAT"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def assert_settles(balances: Mapping[str, int], transfers: Iterable[Transaction]) -> None:
    after = apply_transactions(balances, transfers)
    assert all(value == 0 for value in after.values()), after
