"""Compute repayment plans that settle a ledger of peer-to-peer transfers."""

from debtor.models import Intractable, MalformedRecord, Transaction
from debtor.services.plan import RepaymentPlan, compute_plan

__version__ = "1.0.0"

__all__ = [
    "Intractable",
    "MalformedRecord",
    "RepaymentPlan",
    "Transaction",
    "compute_plan",
]
