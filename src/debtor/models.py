from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

Person = str


class MalformedRecord(ValueError):
    """A ledger entry that cannot be settled: bad amount, missing party, bad encoding."""

    def __init__(self, message: str, line: Optional[int] = None) -> None:
        self.line = line
        super().__init__(f"line {line}: {message}" if line is not None else message)


class Intractable(RuntimeError):
    pass


@dataclass(slots=True, frozen=True)
class Transaction:
    payer: Person
    payee: Person
    amount: int

    def normalised(self) -> Transaction:
        if self.amount < 0:
            return Transaction(payer=self.payee, payee=self.payer, amount=-self.amount)
        return self
