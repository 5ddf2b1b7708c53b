
import pandas as pd

from telco_churn.utils.logger import setup_logger

logger = setup_logger("ETL_Normalize")

NO_INTERNET = "No internet service"
NO_PHONE = "No phone service"

# Service columns that only apply when InternetService != 'No'
INTERNET_DEPENDENT_COLUMNS = [
    "OnlineSecurity",
    "OnlineBackup",
    "DeviceProtection",
    "TechSupport",
    "StreamingTV",
    "StreamingMovies",
]

# 1/0 come from the raw CSV, Yes/No from an earlier pass
SENIOR_CITIZEN_MAP = {1: "Yes", 0: "No", "Yes": "Yes", "No": "No"}


def collapse_placeholders(df: pd.DataFrame) -> pd.DataFrame:
    """
    Replaces 'not applicable' placeholder levels with a plain 'No'.
    The governing column (InternetService / PhoneService) already says the service is absent.
    """
    df = df.copy()

    for col in INTERNET_DEPENDENT_COLUMNS:
        if col in df.columns:
            df[col] = df[col].where(df[col] != NO_INTERNET, "No")

    if "MultipleLines" in df.columns:
        df["MultipleLines"] = df["MultipleLines"].where(df["MultipleLines"] != NO_PHONE, "No")

    return df


def recode_senior_citizen(series: pd.Series) -> pd.Series:
    """
    Maps the 0/1 SeniorCitizen flag to 'No'/'Yes'.

    Anything unrecognised (NaN, 2, '1', ...) falls through to 'No'. This masks bad input
    rather than rejecting it, so the count is logged for visibility.
    """
    recoded = series.map(SENIOR_CITIZEN_MAP)
    unmatched = int(recoded.isna().sum())
    if unmatched:
        logger.warning(f"SeniorCitizen: {unmatched} unrecognised values defaulted to 'No'.")
    return recoded.fillna("No").astype(object)


def normalize_customers(
    df: pd.DataFrame,
    drop_missing: bool = False,
    drop_gender: bool = False,
    as_category: bool = False,
) -> pd.DataFrame:
    """
    Applies the customer recoding rules and returns a new frame.

    Args:
        df: Raw customer records (one row per customerID).
        drop_missing: Drop rows with any missing field instead of imputing (pre-modeling).
        drop_gender: Drop the gender column (pre-modeling; churn barely differs by gender).
        as_category: Convert string columns other than customerID to pandas categoricals.

    Returns:
        Normalized copy of ``df``. The input frame is left untouched.
    """
    logger.debug(f"Normalizing {len(df)} customer records...")

    parsed = collapse_placeholders(df)

    if "SeniorCitizen" in parsed.columns:
        parsed["SeniorCitizen"] = recode_senior_citizen(parsed["SeniorCitizen"])

    if drop_missing:
        before = len(parsed)
        parsed = parsed.dropna()
        dropped = before - len(parsed)
        if dropped:
            logger.info(f"Dropped {dropped} rows with missing values.")

    if drop_gender:
        parsed = parsed.drop(columns=["gender"], errors="ignore")

    if as_category:
        text_cols = [
            c for c in parsed.columns
            if c != "customerID"
            and (pd.api.types.is_object_dtype(parsed[c]) or pd.api.types.is_string_dtype(parsed[c]))
        ]
        parsed[text_cols] = parsed[text_cols].astype("category")

    return parsed
