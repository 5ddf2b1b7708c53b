
from typing import Optional

import pandas as pd

from telco_churn.utils.config import settings
from telco_churn.utils.logger import setup_logger
from telco_churn.etl.normalize import normalize_customers

logger = setup_logger("ETL_Ingest")

def load_raw_data(filepath: str) -> pd.DataFrame:
    """Reads the raw CSV file."""
    try:
        logger.info(f"Reading raw data from {filepath}")
        df = pd.read_csv(filepath, dtype={"customerID": str})
        logger.info(f"Successfully read {len(df)} rows.")
        return df
    except Exception as e:
        logger.error(f"Error reading file: {e}")
        raise

def coerce_numeric(df: pd.DataFrame) -> pd.DataFrame:
    """Forces TotalCharges to numeric; blanks for brand new customers become NaN."""
    df = df.copy()
    if 'TotalCharges' in df.columns:
        df['TotalCharges'] = pd.to_numeric(df['TotalCharges'], errors='coerce')
    return df

def fill_zero_tenure(df: pd.DataFrame) -> pd.DataFrame:
    """
    Zero-tenure guard.
    Customers that have not completed a month get TotalCharges = MonthlyCharges
    (when missing) and tenure = 1, so per-month figures never divide by zero.
    """
    df = df.copy()
    zero = df['tenure'] == 0
    if not zero.any():
        return df

    logger.info(f"Applying zero-tenure guard to {int(zero.sum())} customers.")
    missing_total = zero & df['TotalCharges'].isna()
    df.loc[missing_total, 'TotalCharges'] = df.loc[missing_total, 'MonthlyCharges']
    df.loc[zero, 'tenure'] = 1
    return df

def get_telco_data(raw: bool = False, path: Optional[str] = None, **normalize_kwargs) -> pd.DataFrame:
    """
    Loads the customer dataset.

    Args:
        raw: Return the file as read (numeric coercion only) instead of the normalized frame.
        path: CSV location, defaults to settings.RAW_DATA_PATH.
        **normalize_kwargs: Forwarded to normalize_customers (drop_missing, drop_gender, as_category).
    """
    data = coerce_numeric(load_raw_data(path or settings.RAW_DATA_PATH))

    if raw:
        return data

    return normalize_customers(fill_zero_tenure(data), **normalize_kwargs)
