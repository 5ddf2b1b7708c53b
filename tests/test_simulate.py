"""
Tests for the synthetic customer generator
"""

import numpy as np
import pandas as pd
import pandas.testing as pdt
import pytest
from sklearn.linear_model import LogisticRegression
from sklearn.pipeline import Pipeline

from telco_churn.etl.simulate import categorical_columns, simulate_customers
from telco_churn.ml.predict import score_record
from telco_churn.ml.preprocessing import get_data_split


@pytest.fixture
def simulated(raw_customers):
    return simulate_customers(raw_customers, 200, rng=np.random.default_rng(11))


class TestSimulateCustomers:
    """Synthetic customers drawn from an existing file."""

    def test_schema_matches_source(self, simulated, raw_customers):
        assert list(simulated.columns) == list(raw_customers.columns)
        assert len(simulated) == 200
        assert pd.api.types.is_integer_dtype(simulated["tenure"])
        assert pd.api.types.is_float_dtype(simulated["TotalCharges"])

    def test_ids_unique_and_new(self, simulated, raw_customers):
        assert simulated["customerID"].is_unique
        assert not set(simulated["customerID"]) & set(raw_customers["customerID"])
        assert simulated["customerID"].str.fullmatch(r"\d{4}-[A-Z]{5}").all()

    def test_category_levels_subset_of_source(self, simulated, raw_customers):
        for col in categorical_columns(raw_customers):
            assert set(simulated[col]) <= set(raw_customers[col]), col

    def test_rows_are_observed_combinations(self, simulated, raw_customers):
        cols = categorical_columns(raw_customers)
        observed = set(map(tuple, raw_customers[cols].itertuples(index=False)))
        assert set(map(tuple, simulated[cols].itertuples(index=False))) <= observed

    def test_numeric_ranges_and_total(self, simulated, raw_customers):
        assert simulated["tenure"].between(raw_customers["tenure"].min(), raw_customers["tenure"].max()).all()
        assert simulated["MonthlyCharges"].between(
            raw_customers["MonthlyCharges"].min(), raw_customers["MonthlyCharges"].max()
        ).all()
        billed = simulated[simulated["tenure"] > 0]
        expected = (billed["MonthlyCharges"] * billed["tenure"]).round(2)
        assert billed["TotalCharges"].tolist() == pytest.approx(expected.tolist())
        assert simulated.loc[simulated["tenure"] == 0, "TotalCharges"].isna().all()

    def test_seeded_rng_is_reproducible(self, raw_customers):
        a = simulate_customers(raw_customers, 30, rng=np.random.default_rng(5))
        b = simulate_customers(raw_customers, 30, rng=np.random.default_rng(5))
        pdt.assert_frame_equal(a, b)

    def test_simulated_row_can_be_scored(self, simulated, raw_customers):
        X_train, _, y_train, _, preprocessor = get_data_split(raw_customers)
        model = Pipeline([("preprocessor", preprocessor), ("classifier", LogisticRegression(max_iter=500))])
        model.fit(X_train, y_train)

        prob = score_record(model, simulated.iloc[[0]])
        assert 0.0 <= prob <= 1.0
