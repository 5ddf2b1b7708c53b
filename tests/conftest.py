"""
Pytest configuration and fixtures for telco churn tests
"""

import matplotlib
matplotlib.use("Agg")

import numpy as np
import pandas as pd
import pytest

from telco_churn.utils.config import settings


def make_customers(n: int = 400, seed: int = 7) -> pd.DataFrame:
    """Synthetic customers shaped like the IBM Telco CSV as read by pandas."""
    rng = np.random.default_rng(seed)

    internet = rng.choice(["DSL", "Fiber optic", "No"], n, p=[0.35, 0.45, 0.2])
    phone = rng.choice(["Yes", "No"], n, p=[0.9, 0.1])
    contract = rng.choice(["Month-to-month", "One year", "Two year"], n, p=[0.55, 0.25, 0.2])
    tenure = rng.integers(1, 73, n)
    tenure[:3] = 0
    monthly = np.round(rng.uniform(18.0, 118.0, n), 2)

    df = pd.DataFrame({
        "customerID": [f"{i:04d}-CUST" for i in range(n)],
        "gender": rng.choice(["Female", "Male"], n),
        "SeniorCitizen": rng.choice([0, 1], n, p=[0.84, 0.16]),
        "Partner": rng.choice(["Yes", "No"], n),
        "Dependents": rng.choice(["Yes", "No"], n, p=[0.3, 0.7]),
        "tenure": tenure,
        "PhoneService": phone,
        "MultipleLines": np.where(phone == "No", "No phone service", rng.choice(["Yes", "No"], n)),
        "InternetService": internet,
        "Contract": contract,
        "PaperlessBilling": rng.choice(["Yes", "No"], n),
        "PaymentMethod": rng.choice(
            ["Electronic check", "Mailed check", "Bank transfer (automatic)", "Credit card (automatic)"], n
        ),
        "MonthlyCharges": monthly,
    })
    for col in ["OnlineSecurity", "OnlineBackup", "DeviceProtection",
                "TechSupport", "StreamingTV", "StreamingMovies"]:
        df[col] = np.where(internet == "No", "No internet service", rng.choice(["Yes", "No"], n))

    # Blank TotalCharges for brand new customers, as in the real file
    total = np.round(monthly * tenure, 2).astype(str)
    total[tenure == 0] = " "
    df["TotalCharges"] = total

    churn_p = np.where(contract == "Month-to-month", 0.55, 0.08)
    df["Churn"] = np.where(rng.random(n) < churn_p, "Yes", "No")
    return df


@pytest.fixture
def raw_customers():
    """Raw customer frame including zero-tenure rows and placeholder levels."""
    return make_customers()


@pytest.fixture
def small_customers():
    """A handful of hand-written records."""
    return pd.DataFrame({
        "customerID": ["7590-VHVEG", "5575-GNVDE", "3668-QPYBK"],
        "gender": ["Female", "Male", "Male"],
        "SeniorCitizen": [0, 1, 0],
        "Partner": ["Yes", "No", "No"],
        "Dependents": ["No", "No", "No"],
        "tenure": [1, 34, 0],
        "PhoneService": ["No", "Yes", "Yes"],
        "MultipleLines": ["No phone service", "No", "Yes"],
        "InternetService": ["DSL", "No", "Fiber optic"],
        "OnlineSecurity": ["No", "No internet service", "Yes"],
        "OnlineBackup": ["Yes", "No internet service", "Yes"],
        "DeviceProtection": ["No", "No internet service", "No"],
        "TechSupport": ["No", "No internet service", "No"],
        "StreamingTV": ["No", "No internet service", "Yes"],
        "StreamingMovies": ["No", "No internet service", "No"],
        "Contract": ["Month-to-month", "One year", "Month-to-month"],
        "PaperlessBilling": ["Yes", "No", "Yes"],
        "PaymentMethod": ["Electronic check", "Mailed check", "Mailed check"],
        "MonthlyCharges": [29.85, 56.95, 53.85],
        "TotalCharges": ["29.85", "1889.5", " "],
        "Churn": ["No", "No", "Yes"],
    })


@pytest.fixture
def customers_csv(tmp_path, raw_customers):
    """Raw customers written to disk."""
    path = tmp_path / "telco.csv"
    raw_customers.to_csv(path, index=False)
    return str(path)


@pytest.fixture
def fast_settings(monkeypatch, tmp_path, customers_csv):
    """Point settings at temporary data and keep searches small."""
    model_dir = tmp_path / "models"
    monkeypatch.setattr(settings, "RAW_DATA_PATH", customers_csv)
    monkeypatch.setattr(settings, "MODEL_DIR", str(model_dir))
    monkeypatch.setattr(settings, "SEARCH_ITERATIONS", 3)
    monkeypatch.setattr(settings, "CV_FOLDS", 3)
    monkeypatch.setattr(settings, "N_JOBS", 1)
    return settings
