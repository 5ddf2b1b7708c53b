
from typing import List

class FeatureConfig:
    """
    Configuration for Feature Selection and Grouping.
    Acts as the single source of truth for model features.
    """

    # --- 1. Target Variable ---
    TARGET: str = "Churn"  # 'Yes'/'No' in the CSV, 1/0 after clean_and_prepare

    # --- 2. Identity Column (Exclude from training) ---
    IDENTIFIER: str = "customerID"

    # --- 3. Excluded Columns ---
    EXCLUDE_COLUMNS: List[str] = [
        "customerID",
        "gender",           # Near-identical churn rate for both levels
    ]

    # --- 4. Feature Groups ---

    DEMOGRAPHIC_FEATURES: List[str] = [
        "SeniorCitizen",
        "Partner",
        "Dependents",
    ]

    ACCOUNT_FEATURES: List[str] = [
        "tenure",
        "Contract",         # e.g., Month-to-month
        "PaperlessBilling",
        "PaymentMethod",    # e.g., Electronic check
    ]

    SERVICE_FEATURES: List[str] = [
        "PhoneService",
        "MultipleLines",
        "InternetService",  # DSL, Fiber optic, No
        "OnlineSecurity",
        "OnlineBackup",
        "DeviceProtection",
        "TechSupport",
        "StreamingTV",
        "StreamingMovies",
    ]

    FINANCIAL_FEATURES: List[str] = [
        "MonthlyCharges",
        "TotalCharges",
    ]

    NUMERIC_FEATURES: List[str] = ["tenure", "MonthlyCharges", "TotalCharges"]

    @classmethod
    def get_all_features(cls) -> List[str]:
        """Returns flattened list of all input features."""
        return (
            cls.DEMOGRAPHIC_FEATURES +
            cls.ACCOUNT_FEATURES +
            cls.SERVICE_FEATURES +
            cls.FINANCIAL_FEATURES
        )

    @classmethod
    def get_numeric_features(cls) -> List[str]:
        return list(cls.NUMERIC_FEATURES)

    @classmethod
    def get_categorical_features(cls) -> List[str]:
        """Every input feature that is not numeric, in declaration order."""
        return [f for f in cls.get_all_features() if f not in cls.NUMERIC_FEATURES]
