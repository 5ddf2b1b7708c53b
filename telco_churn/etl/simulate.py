
import string
from typing import List, Optional

import numpy as np
import pandas as pd

from telco_churn.utils.logger import setup_logger
from telco_churn.etl.ingest import coerce_numeric

logger = setup_logger("ETL_Simulate")

IDENTIFIER = "customerID"
CONTINUOUS_COLUMNS = ["tenure", "MonthlyCharges"]
DERIVED_COLUMNS = ["TotalCharges"]

LETTERS = list(string.ascii_uppercase)
DIGITS = list(string.digits)


def categorical_columns(df: pd.DataFrame) -> List[str]:
    """Every column sampled jointly by frequency (SeniorCitizen is a 0/1 flag, not a measure)."""
    skip = [IDENTIFIER] + CONTINUOUS_COLUMNS + DERIVED_COLUMNS
    return [c for c in df.columns if c not in skip]


def new_customer_ids(n: int, existing, rng: np.random.Generator) -> List[str]:
    """Fresh IDs shaped like the source ('1234-ABCDE'), unique and disjoint from ``existing``."""
    taken = set(existing)
    ids = []
    while len(ids) < n:
        candidate = "".join(rng.choice(DIGITS, 4)) + "-" + "".join(rng.choice(LETTERS, 5))
        if candidate not in taken:
            taken.add(candidate)
            ids.append(candidate)
    return ids


def simulate_customers(df: pd.DataFrame, n: int, rng: Optional[np.random.Generator] = None) -> pd.DataFrame:
    """
    Generates synthetic "new" customers that resemble an existing customer file.

    Categorical columns are drawn as whole combinations, weighted by how often each
    combination occurs, so their joint distribution is preserved. tenure and
    MonthlyCharges come from a multivariate normal fitted to the source means and
    covariance, clipped to the observed range. TotalCharges is derived as
    MonthlyCharges * tenure and left missing for zero tenure, as in the raw file.

    Args:
        df: Existing customers (raw or numerically coerced).
        n: Number of customers to generate.
        rng: numpy Generator, defaults to a fresh unseeded one.

    Returns:
        DataFrame with the source columns in the source order.
    """
    rng = rng or np.random.default_rng()
    source = coerce_numeric(df)
    cat_cols = categorical_columns(source)

    # 1. Categorical combinations by joint frequency
    combos = source.groupby(cat_cols, dropna=False, observed=True).size()
    picks = rng.choice(len(combos), size=n, p=(combos / combos.sum()).to_numpy())
    simulated = combos.index[picks].to_frame(index=False)

    # 2. Continuous columns from a multivariate normal
    numeric = source[CONTINUOUS_COLUMNS].astype(float)
    draws = rng.multivariate_normal(numeric.mean().to_numpy(), numeric.cov().to_numpy(), size=n)
    low, high = numeric.min().to_numpy(), numeric.max().to_numpy()
    draws = np.clip(draws, low, high)

    simulated["tenure"] = np.round(draws[:, 0]).astype(int)
    simulated["MonthlyCharges"] = np.round(draws[:, 1], 2)
    total = np.round(simulated["MonthlyCharges"] * simulated["tenure"], 2)
    simulated["TotalCharges"] = total.where(simulated["tenure"] > 0)

    # 3. Identity
    simulated[IDENTIFIER] = new_customer_ids(n, source[IDENTIFIER].astype(str), rng)

    logger.info(f"Simulated {n} customers from {len(combos)} observed category combinations.")
    return simulated[list(source.columns)]
