
from typing import List, Optional

import pandas as pd
from sklearn.pipeline import Pipeline
from sklearn.compose import ColumnTransformer
from sklearn.preprocessing import StandardScaler, OneHotEncoder
from sklearn.model_selection import train_test_split

from telco_churn.utils.config import settings
from telco_churn.utils.logger import setup_logger
from telco_churn.ml.features import FeatureConfig
from telco_churn.etl.ingest import coerce_numeric, load_raw_data
from telco_churn.etl.normalize import normalize_customers

logger = setup_logger("ML_Preprocessing")

def build_pipeline(numeric_features: List[str], categorical_features: List[str]) -> ColumnTransformer:
    """
    Builds a Scikit-Learn preprocessing pipeline.
    """
    logger.info("Building preprocessing pipeline...")

    # 1. Numeric Transformer: Scale features
    numeric_transformer = Pipeline(steps=[
        ('scaler', StandardScaler())
    ])

    # 2. Categorical Transformer: One-Hot Encode
    categorical_transformer = Pipeline(steps=[
        ('onehot', OneHotEncoder(handle_unknown='ignore', sparse_output=False))
    ])

    # 3. Column Transformer: Apply to respective columns
    preprocessor = ColumnTransformer(
        transformers=[
            ('num', numeric_transformer, numeric_features),
            ('cat', categorical_transformer, categorical_features)
        ],
        remainder='drop'  # customerID and anything unexpected
    )

    return preprocessor

def clean_and_prepare(df: pd.DataFrame) -> pd.DataFrame:
    """
    Converts the 'Yes'/'No' target to 1/0 if not already.
    """
    df = df.copy()
    if FeatureConfig.TARGET in df.columns and not pd.api.types.is_numeric_dtype(df[FeatureConfig.TARGET]):
        df[FeatureConfig.TARGET] = df[FeatureConfig.TARGET].map({'Yes': 1, 'No': 0}).astype(int)
    return df

def prepare_model_frame(df: pd.DataFrame) -> pd.DataFrame:
    """
    Pre-modeling variant of the normalizer: rows with missing values are dropped
    (no imputation) and gender is removed.
    """
    return normalize_customers(coerce_numeric(df), drop_missing=True, drop_gender=True)

def get_data_split(df: Optional[pd.DataFrame] = None):
    """
    Main entry point. Loads data, preprocesses, and returns splits.

    Returns:
        X_train, X_test, y_train, y_test, preprocessor
    """
    # 1. Load
    if df is None:
        df = load_raw_data(settings.RAW_DATA_PATH)
    df = clean_and_prepare(prepare_model_frame(df))

    # 2. Separate Features and Target
    target_col = FeatureConfig.TARGET
    X = df.drop(columns=[target_col, FeatureConfig.IDENTIFIER], errors='ignore')
    y = df[target_col]

    # 3. Feature lists intersected with actual columns
    available_cols = set(X.columns)
    num_cols = [c for c in FeatureConfig.get_numeric_features() if c in available_cols]
    cat_cols = [c for c in FeatureConfig.get_categorical_features() if c in available_cols]

    logger.info(f"Numeric features: {len(num_cols)}")
    logger.info(f"Categorical features: {len(cat_cols)}")

    # 4. Split
    X_train, X_test, y_train, y_test = train_test_split(
        X, y, test_size=settings.TEST_SIZE, random_state=settings.RANDOM_STATE, stratify=y
    )

    # 5. Unfitted preprocessor, becomes the first step of each model pipeline
    preprocessor = build_pipeline(num_cols, cat_cols)

    return X_train, X_test, y_train, y_test, preprocessor
