
from typing import List, Optional

import numpy as np
import pandas as pd

from telco_churn.billing.invoices import simulate_invoice_history, INVOICE_COLUMNS

PRODUCT_COLUMNS = ["PhoneService", "InternetService", "Contract", "PaymentMethod"]


def customer_ids(df: pd.DataFrame) -> List[str]:
    """Choices for the customer picker, in file order."""
    return df["customerID"].astype(str).tolist()


def pick_customer(df: pd.DataFrame, customer_id: str) -> pd.DataFrame:
    # customerID is assumed unique; no match gives an empty frame
    return df[df["customerID"] == customer_id]


def render_product_list(customer: pd.DataFrame) -> pd.DataFrame:
    """Product/status pairs for the selected customer."""
    products = customer[PRODUCT_COLUMNS].astype(object).melt(var_name="name", value_name="value")
    return products


def customer_payments(
    customer: pd.DataFrame,
    now: Optional[pd.Timestamp] = None,
    rng: Optional[np.random.Generator] = None,
) -> pd.DataFrame:
    """
    Simulated payment history for the selected customer.
    Zero tenure is bumped to one month and a missing TotalCharges falls back to MonthlyCharges.
    """
    if customer.empty:
        return pd.DataFrame(columns=INVOICE_COLUMNS)

    row = customer.iloc[0]
    tenure = max(int(row["tenure"]), 1)
    total = row["TotalCharges"]
    if pd.isna(total):
        total = row["MonthlyCharges"]

    return simulate_invoice_history(tenure, float(total), now=now, rng=rng)
