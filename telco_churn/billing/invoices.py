
import string
from typing import Optional

import numpy as np
import pandas as pd

LETTERS = list(string.ascii_uppercase)
DIGITS = [str(n) for n in range(1, 10)]

INVOICE_COLUMNS = ["amount", "month", "invoice_id", "charges"]


def random_invoice_prefix(rng: Optional[np.random.Generator] = None) -> str:
    """Random 8 character code: 3 letters, 3 digits (1-9), 2 letters. e.g. 'QKD482ZM'."""
    rng = rng or np.random.default_rng()
    parts = (
        list(rng.choice(LETTERS, 3))
        + list(rng.choice(DIGITS, 3))
        + list(rng.choice(LETTERS, 2))
    )
    return "".join(parts)


def simulate_invoice_history(
    tenure: int,
    total_charges: float,
    now: Optional[pd.Timestamp] = None,
    rng: Optional[np.random.Generator] = None,
) -> pd.DataFrame:
    """
    Builds a synthetic monthly payment ledger for one customer.

    The lifetime charge is split evenly across ``tenure`` months, invoice ``i``
    is dated ``i`` calendar months before ``now``, and ``charges`` is the running
    total, oldest invoice first.

    There is no guard for ``tenure == 0``: the amount becomes infinite and the
    ledger is empty. Callers are expected to coerce zero tenure beforehand.

    Args:
        tenure: Number of billed months.
        total_charges: Lifetime amount billed to the customer.
        now: Reference timestamp, defaults to the current time.
        rng: numpy Generator used for the invoice prefix.

    Returns:
        DataFrame with columns amount, month, invoice_id, charges.
    """
    now = pd.Timestamp.now() if now is None else pd.Timestamp(now)
    prefix = random_invoice_prefix(rng)
    tenure = int(tenure)

    with np.errstate(divide="ignore", invalid="ignore"):
        charge = np.float64(total_charges) / np.float64(tenure)

    month_index = range(1, tenure + 1)
    ledger = pd.DataFrame({
        "amount": [charge] * tenure,
        "month": [now - pd.DateOffset(months=i) for i in month_index],
        "invoice_id": [f"{prefix}-{i}" for i in month_index],
    }, columns=INVOICE_COLUMNS[:3])
    ledger["month"] = pd.to_datetime(ledger["month"])

    ledger = ledger.sort_values("month").reset_index(drop=True)
    ledger["charges"] = ledger["amount"].cumsum()
    return ledger
