"""
Tests for CSV ingest and the zero-tenure guard
"""

import pandas as pd
import pytest

from telco_churn.etl.ingest import coerce_numeric, fill_zero_tenure, get_telco_data, load_raw_data


def test_load_raw_data(customers_csv, raw_customers):
    df = load_raw_data(customers_csv)
    assert len(df) == len(raw_customers)
    assert df["customerID"].tolist() == raw_customers["customerID"].tolist()


def test_load_raw_data_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_raw_data(str(tmp_path / "nope.csv"))


def test_coerce_numeric_blank_total_is_nan(small_customers):
    df = coerce_numeric(small_customers)
    assert pd.api.types.is_float_dtype(df["TotalCharges"])
    assert df["TotalCharges"].isna().tolist() == [False, False, True]
    # input untouched
    assert small_customers["TotalCharges"].iloc[2] == " "


def test_fill_zero_tenure(small_customers):
    df = fill_zero_tenure(coerce_numeric(small_customers))
    new_customer = df[df["customerID"] == "3668-QPYBK"].iloc[0]
    assert new_customer["tenure"] == 1
    assert new_customer["TotalCharges"] == pytest.approx(53.85)
    assert (df["tenure"] >= 1).all()


def test_get_telco_data_raw(customers_csv):
    raw = get_telco_data(raw=True, path=customers_csv)
    assert (raw["tenure"] == 0).sum() == 3
    assert "No internet service" in set(raw["OnlineSecurity"])


def test_get_telco_data_normalized(customers_csv):
    df = get_telco_data(path=customers_csv)
    assert (df["tenure"] >= 1).all()
    assert df["TotalCharges"].notna().all()
    assert set(df["SeniorCitizen"]) <= {"Yes", "No"}
    assert "gender" in df.columns


def test_get_telco_data_model_variant(customers_csv):
    df = get_telco_data(path=customers_csv, drop_gender=True, as_category=True)
    assert "gender" not in df.columns
    assert isinstance(df["Contract"].dtype, pd.CategoricalDtype)


def test_get_telco_data_uses_settings(fast_settings):
    df = get_telco_data()
    assert len(df) == 400
