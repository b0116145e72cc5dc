"""Newline-delimited JSON ledgers.

Each line holds one transfer, ``{"from": "alice", "to": "bob", "amt": 30}``. Other
fields are ignored. Plans are written back in the same shape.
"""

from __future__ import annotations

import sys
from contextlib import contextmanager
from typing import IO, Iterable, Iterator

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, ValidationError

from debtor.models import MalformedRecord, Transaction


class TransferRecord(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    payer: StrictStr = Field(alias="from")
    payee: StrictStr = Field(alias="to")
    amt: StrictInt = Field(gt=0)

    @classmethod
    def from_transaction(cls, transaction: Transaction) -> TransferRecord:
        return cls(payer=transaction.payer, payee=transaction.payee, amt=transaction.amount)

    def to_transaction(self) -> Transaction:
        return Transaction(payer=self.payer, payee=self.payee, amount=self.amt)


def _describe(exc: ValidationError) -> str:
    error = exc.errors()[0]
    location = ".".join(str(part) for part in error["loc"])
    if error["type"] == "json_invalid":
        return "invalid JSON"
    return f"{location}: {error['msg']}" if location else error["msg"]


def parse_record(line: str, lineno: int | None = None) -> Transaction:
    try:
        record = TransferRecord.model_validate_json(line)
    except ValidationError as exc:
        raise MalformedRecord(_describe(exc), line=lineno) from exc
    return record.to_transaction()


def _decode(line: str | bytes, lineno: int) -> str:
    if isinstance(line, str):
        return line
    try:
        return line.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise MalformedRecord("invalid UTF-8", line=lineno) from exc


def read_ledger(stream: Iterable[str | bytes]) -> Iterator[Transaction]:
    """Transfers from a text or binary stream, one JSON record per line.

    Binary streams are decoded line by line so an encoding error names its own line.
    """
    lines = iter(stream)
    lineno = 0
    while True:
        try:
            raw = next(lines)
        except StopIteration:
            return
        except UnicodeDecodeError as exc:
            raise MalformedRecord("invalid UTF-8", line=lineno + 1) from exc
        lineno += 1
        line = _decode(raw, lineno)
        if not line.strip():
            continue
        yield parse_record(line, lineno)


@contextmanager
def open_ledger(path: str) -> Iterator[IO[bytes]]:
    if path == "-":
        yield getattr(sys.stdin, "buffer", sys.stdin)
        return
    with open(path, "rb") as stream:
        yield stream


def format_record(transaction: Transaction) -> str:
    return TransferRecord.from_transaction(transaction).model_dump_json(by_alias=True)


def write_plan(transactions: Iterable[Transaction], stream: IO[str]) -> int:
    count = 0
    for transaction in transactions:
        stream.write(format_record(transaction) + "\n")
        count += 1
    return count
