
import glob
import os
from typing import Any, Dict, Optional, Union

import joblib
import pandas as pd

from telco_churn.utils.config import settings
from telco_churn.utils.logger import setup_logger
from telco_churn.etl.ingest import coerce_numeric, fill_zero_tenure
from telco_churn.etl.normalize import normalize_customers

logger = setup_logger("ML_Predict")


class ModelNotFoundError(FileNotFoundError):
    """No trained model artifacts where they were expected."""


def load_models(model_dir: Optional[str] = None) -> Dict[str, Any]:
    """
    Loads every serialized pipeline in the model directory, keyed by file stem.
    """
    model_dir = model_dir or settings.MODEL_DIR
    paths = sorted(glob.glob(os.path.join(model_dir, "*.pkl")))
    if not paths:
        raise ModelNotFoundError(f"No trained models found in {model_dir}. Run telco_churn.ml.train first.")

    models = {}
    for path in paths:
        name = os.path.splitext(os.path.basename(path))[0]
        logger.info(f"Loading model {name} from {path}")
        models[name] = joblib.load(path)
    return models


def prepare_record(record: Union[Dict[str, Any], pd.DataFrame]) -> pd.DataFrame:
    """Applies the same recoding the models were trained on to raw input rows."""
    df = pd.DataFrame([record]) if isinstance(record, dict) else record
    df = fill_zero_tenure(coerce_numeric(df))
    return normalize_customers(df, drop_gender=True)


def score_record(model, record: Union[Dict[str, Any], pd.DataFrame]) -> float:
    """
    Churn probability for a single customer record.
    """
    X = prepare_record(record)
    if len(X) != 1:
        raise ValueError(f"Expected exactly one record to score, got {len(X)}")
    return float(model.predict_proba(X)[0][1])
