
from dataclasses import dataclass

import numpy as np
import pandas as pd
from sklearn.cluster import KMeans
from sklearn.decomposition import PCA

from telco_churn.utils.config import settings
from telco_churn.utils.logger import setup_logger
from telco_churn.ml.features import FeatureConfig
from telco_churn.ml.preprocessing import build_pipeline, clean_and_prepare, prepare_model_frame

logger = setup_logger("Segmentation")


@dataclass
class SegmentationResult:
    embedding: np.ndarray
    labels: np.ndarray
    explained_variance: np.ndarray
    summary: pd.DataFrame
    customers: pd.DataFrame


def segment_customers(df: pd.DataFrame, n_components: int = 2, n_clusters: int = 4,
                      random_state: int = None) -> SegmentationResult:
    """
    Unsupervised segmentation: encoded features -> PCA -> k-means.

    The churn label is kept out of the feature matrix and only used to
    describe the resulting clusters.
    """
    random_state = settings.RANDOM_STATE if random_state is None else random_state

    customers = clean_and_prepare(prepare_model_frame(df)).reset_index(drop=True)
    num_cols = [c for c in FeatureConfig.get_numeric_features() if c in customers.columns]
    cat_cols = [c for c in FeatureConfig.get_categorical_features() if c in customers.columns]

    X = build_pipeline(num_cols, cat_cols).fit_transform(customers)

    pca = PCA(n_components=n_components, random_state=random_state)
    embedding = pca.fit_transform(X)
    logger.info(f"PCA explained variance: {np.round(pca.explained_variance_ratio_, 3).tolist()}")

    km = KMeans(n_clusters=n_clusters, n_init=10, random_state=random_state)
    labels = km.fit_predict(embedding)

    customers["Cluster"] = labels
    summary = customers.groupby("Cluster").agg(
        customers=(FeatureConfig.IDENTIFIER, "count"),
        churn_rate=(FeatureConfig.TARGET, "mean"),
        avg_tenure=("tenure", "mean"),
        avg_monthly=("MonthlyCharges", "mean"),
    ).round(3)
    logger.info(f"Cluster summary:\n{summary.to_string()}")

    return SegmentationResult(
        embedding=embedding,
        labels=labels,
        explained_variance=pca.explained_variance_ratio_,
        summary=summary,
        customers=customers,
    )
