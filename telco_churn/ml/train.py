
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import joblib
import pandas as pd
from scipy.stats import loguniform, randint, uniform
from sklearn.base import clone
from sklearn.ensemble import RandomForestClassifier
from sklearn.experimental import enable_halving_search_cv  # noqa: F401
from sklearn.linear_model import LogisticRegression
from sklearn.metrics import f1_score, precision_score, recall_score, roc_auc_score
from sklearn.model_selection import HalvingRandomSearchCV, RandomizedSearchCV
from sklearn.pipeline import Pipeline
from xgboost import XGBClassifier
from lightgbm import LGBMClassifier

from telco_churn.utils.config import settings
from telco_churn.utils.logger import setup_logger
from telco_churn.ml.preprocessing import get_data_split

logger = setup_logger("ML_Trainer")

SEARCH_STRATEGIES = ("random", "racing")


@dataclass
class ModelSpec:
    """One classifier family and how to tune it."""
    name: str
    estimator: Any
    param_distributions: Dict[str, Any]
    search: str = "random"  # 'random' = RandomizedSearchCV, 'racing' = successive halving


def candidate_models(pos_weight: float = 1.0) -> List[ModelSpec]:
    """
    Classifier families considered during model selection.
    Parameter names are prefixed with 'classifier__' to reach through the pipeline.
    """
    seed = settings.RANDOM_STATE
    return [
        ModelSpec(
            name="lasso_penalty_tuned",
            estimator=LogisticRegression(penalty="l1", l1_ratio=1, solver="liblinear",
                                         class_weight="balanced", max_iter=1000, random_state=seed),
            param_distributions={"classifier__C": loguniform(1e-3, 1e2)},
            search="random",
        ),
        ModelSpec(
            name="xgboost_racing_tuned",
            estimator=XGBClassifier(scale_pos_weight=pos_weight, eval_metric="logloss",
                                    n_jobs=1, random_state=seed),
            param_distributions={
                "classifier__n_estimators": randint(50, 500),
                "classifier__max_depth": randint(2, 8),
                "classifier__learning_rate": loguniform(1e-2, 3e-1),
                "classifier__subsample": uniform(0.6, 0.4),
                "classifier__min_child_weight": randint(1, 10),
            },
            search="racing",
        ),
        ModelSpec(
            name="lightgbm_random_tuned",
            estimator=LGBMClassifier(class_weight="balanced", verbosity=-1, n_jobs=1, random_state=seed),
            param_distributions={
                "classifier__n_estimators": randint(50, 500),
                "classifier__num_leaves": randint(8, 64),
                "classifier__learning_rate": loguniform(1e-2, 3e-1),
                "classifier__min_child_samples": randint(5, 50),
            },
            search="random",
        ),
        ModelSpec(
            name="random_forest_random_tuned",
            estimator=RandomForestClassifier(class_weight="balanced", n_jobs=1, random_state=seed),
            param_distributions={
                "classifier__n_estimators": randint(100, 500),
                "classifier__max_depth": randint(3, 15),
                "classifier__min_samples_leaf": randint(1, 20),
            },
            search="random",
        ),
    ]


def tune_model(spec: ModelSpec, preprocessor, X_train, y_train,
               n_iter: Optional[int] = None, cv: Optional[int] = None):
    """
    Runs the hyperparameter search for one family.
    Each candidate configuration is fitted independently across settings.N_JOBS workers.
    """
    if spec.search not in SEARCH_STRATEGIES:
        raise ValueError(f"Unknown search strategy '{spec.search}' for {spec.name}")

    pipeline = Pipeline([
        ("preprocessor", clone(preprocessor)),
        ("classifier", clone(spec.estimator)),
    ])
    n_iter = n_iter or settings.SEARCH_ITERATIONS
    cv = cv or settings.CV_FOLDS

    if spec.search == "racing":
        search = HalvingRandomSearchCV(
            pipeline,
            param_distributions=spec.param_distributions,
            n_candidates=n_iter,
            min_resources="exhaust",
            factor=3,
            scoring="roc_auc",
            cv=cv,
            random_state=settings.RANDOM_STATE,
            n_jobs=settings.N_JOBS,
        )
    else:
        search = RandomizedSearchCV(
            pipeline,
            param_distributions=spec.param_distributions,
            n_iter=n_iter,
            scoring="roc_auc",
            cv=cv,
            random_state=settings.RANDOM_STATE,
            n_jobs=settings.N_JOBS,
        )

    logger.info(f"Tuning {spec.name} ({spec.search} search, {n_iter} candidates, {cv}-fold CV)...")
    search.fit(X_train, y_train)
    logger.info(f"{spec.name}: best CV ROC-AUC {search.best_score_:.4f} with {search.best_params_}")
    return search


def train_and_evaluate(spec: ModelSpec, preprocessor, X_train, y_train, X_test, y_test,
                       n_iter: Optional[int] = None, cv: Optional[int] = None) -> Dict[str, Any]:
    """
    Tunes a model family and returns its test-set performance.
    """
    search = tune_model(spec, preprocessor, X_train, y_train, n_iter=n_iter, cv=cv)
    model = search.best_estimator_

    # Predictions
    y_pred = model.predict(X_test)
    y_prob = model.predict_proba(X_test)[:, 1]

    # Metrics, focus on Class 1 (Churn)
    recall = recall_score(y_test, y_pred, pos_label=1)
    precision = precision_score(y_test, y_pred, pos_label=1, zero_division=0)
    f1 = f1_score(y_test, y_pred, pos_label=1, zero_division=0)
    roc_auc = roc_auc_score(y_test, y_prob)

    logger.info(f"--- {spec.name} Results ---")
    logger.info(f"Recall (Churn Capture): {recall:.4f}")
    logger.info(f"Precision: {precision:.4f}")
    logger.info(f"ROC-AUC: {roc_auc:.4f}")

    return {
        "model": model,
        "name": spec.name,
        "search": spec.search,
        "cv_roc_auc": search.best_score_,
        "best_params": search.best_params_,
        "recall": recall,
        "precision": precision,
        "f1": f1,
        "roc_auc": roc_auc,
    }


def rank_results(results: List[Dict[str, Any]], metric: str = "roc_auc") -> List[Dict[str, Any]]:
    """Best first."""
    return sorted(results, key=lambda r: r[metric], reverse=True)


def results_table(results: List[Dict[str, Any]]) -> pd.DataFrame:
    """Leaderboard without the fitted model objects."""
    columns = ["name", "search", "cv_roc_auc", "roc_auc", "recall", "precision", "f1"]
    return pd.DataFrame([{c: r[c] for c in columns} for r in results], columns=columns)


def save_models(results: List[Dict[str, Any]], model_dir: Optional[str] = None,
                keep: Optional[int] = None) -> List[str]:
    """
    Persists the fitted pipelines, one file per retained model.

    Args:
        results: Ranked output of train_and_evaluate.
        model_dir: Target directory, defaults to settings.MODEL_DIR.
        keep: Number of top models to retain, all when None.
    """
    model_dir = model_dir or settings.MODEL_DIR
    os.makedirs(model_dir, exist_ok=True)

    paths = []
    for result in results[:keep]:
        path = os.path.join(model_dir, f"{result['name']}.pkl")
        joblib.dump(result["model"], path)
        logger.info(f"Model saved to {path}")
        paths.append(path)
    return paths


def main(keep: Optional[int] = 2):
    try:
        # 1. Split, the preprocessor is fitted inside each candidate pipeline
        X_train, X_test, y_train, y_test, preprocessor = get_data_split()

        # 2. Imbalance handled with class weights / scale_pos_weight
        pos_weight = (y_train == 0).sum() / (y_train == 1).sum()

        results = []
        for spec in candidate_models(pos_weight):
            results.append(train_and_evaluate(spec, preprocessor, X_train, y_train, X_test, y_test))

        # 3. Model Selection
        results = rank_results(results, metric="roc_auc")
        logger.info(f"Leaderboard:\n{results_table(results).to_string(index=False)}")
        best = results[0]
        logger.info(f"Best model by ROC-AUC: {best['name']} (AUC={best['roc_auc']:.4f}, Recall={best['recall']:.4f})")

        # 4. Save retained models for the dashboard
        return save_models(results, keep=keep)

    except Exception as e:
        logger.error(f"Training failed: {e}")
        raise

if __name__ == "__main__":
    main()
