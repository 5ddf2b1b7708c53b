
from typing import Dict

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns

from telco_churn.utils.logger import setup_logger

logger = setup_logger("EDA")

EXCLUDED = ["customerID"]


def _text_columns(df: pd.DataFrame):
    return [
        c for c in df.columns
        if c not in EXCLUDED and not pd.api.types.is_numeric_dtype(df[c])
    ]


def profile(df: pd.DataFrame) -> pd.DataFrame:
    """
    One row per column: dtype, missing count, unique count and, for numeric
    columns, mean / std / min / median / max.
    """
    summary = pd.DataFrame({
        "dtype": df.dtypes.astype(str),
        "n_missing": df.isna().sum(),
        "n_unique": df.nunique(),
    })
    numeric = df.select_dtypes(include="number")
    if not numeric.empty:
        stats = numeric.agg(["mean", "std", "min", "median", "max"]).T
        summary = summary.join(stats)
    return summary


def category_proportions(df: pd.DataFrame) -> Dict[str, pd.Series]:
    """Share of each level for every categorical column."""
    return {c: df[c].value_counts(normalize=True) for c in _text_columns(df)}


def churn_rate_by(df: pd.DataFrame, column: str, target: str = "Churn") -> pd.Series:
    """Fraction of 'Yes' churners per level of ``column``, highest first."""
    churned = df[target].isin(["Yes", 1])
    return churned.groupby(df[column], observed=True).mean().sort_values(ascending=False)


def skewed_features(df: pd.DataFrame, threshold: float = 0.8) -> pd.Series:
    """Numeric columns whose skewness is at least ``threshold``, most skewed first."""
    skew = df.select_dtypes(include="number").skew().sort_values(ascending=False)
    logger.info(f"Skewness: {skew.round(3).to_dict()}")
    return skew[skew >= threshold]


def plot_hist_facet(df: pd.DataFrame, bins: int = 10, ncol: int = 5,
                    color: str = "#18BC9C") -> plt.Figure:
    """Histogram per column; categorical columns are plotted as factor codes."""
    data = df.drop(columns=EXCLUDED, errors="ignore").copy()
    for c in _text_columns(data):
        data[c] = pd.factorize(data[c])[0] + 1

    columns = sorted(data.columns)
    nrow = int(np.ceil(len(columns) / ncol)) or 1
    fig, axes = plt.subplots(nrow, ncol, figsize=(3 * ncol, 2.5 * nrow), squeeze=False)

    for ax, col in zip(axes.flat, columns):
        ax.hist(data[col].dropna(), bins=bins, color=color, edgecolor="white")
        ax.set_title(col, fontsize=9)
    for ax in axes.flat[len(columns):]:
        ax.set_visible(False)

    fig.tight_layout()
    return fig


def plot_churn_fill(df: pd.DataFrame, target: str = "Churn", ncol: int = 2) -> plt.Figure:
    """Proportion of churners within each level of every categorical feature (gender excluded)."""
    columns = [c for c in _text_columns(df) if c not in (target, "gender")]
    nrow = int(np.ceil(len(columns) / ncol)) or 1
    fig, axes = plt.subplots(nrow, ncol, figsize=(6 * ncol, 2.5 * nrow), squeeze=False)

    for ax, col in zip(axes.flat, columns):
        shares = pd.crosstab(df[col], df[target], normalize="index")
        shares.plot(kind="barh", stacked=True, ax=ax, legend=False, width=0.8)
        ax.set_title(col, fontsize=9)
        ax.set_xlabel("")
        ax.set_ylabel("")
    for ax in axes.flat[len(columns):]:
        ax.set_visible(False)

    handles, labels = axes.flat[0].get_legend_handles_labels()
    fig.legend(handles, labels, loc="lower center", ncol=len(labels))
    fig.tight_layout()
    return fig


def plot_numeric_pairs(df: pd.DataFrame, target: str = "Churn"):
    """Pairwise view of the numeric columns coloured by churn status."""
    numeric = df.select_dtypes(include="number").columns.tolist()
    grid = sns.pairplot(df[numeric + [target]], hue=target, corner=True,
                        diag_kind="kde", plot_kws={"alpha": 0.4})
    return grid.figure
