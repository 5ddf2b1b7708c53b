import streamlit as st
import plotly.express as px

from telco_churn.utils.config import settings
from telco_churn.etl.ingest import get_telco_data, load_raw_data, coerce_numeric
from telco_churn.ml.predict import load_models, score_record, ModelNotFoundError
from telco_churn.dashboard.lookup import (
    customer_ids,
    customer_payments,
    pick_customer,
    render_product_list,
)

# Page Config
st.set_page_config(
    page_title="Customer Dashboard",
    page_icon="📉",
    layout="wide",
    initial_sidebar_state="expanded"
)

# --- CACHED RESOURCES ---
@st.cache_resource
def load_artifacts():
    try:
        return load_models(settings.MODEL_DIR)
    except ModelNotFoundError:
        return {}

@st.cache_data
def load_data():
    return get_telco_data(raw=False)

@st.cache_data
def load_raw():
    return coerce_numeric(load_raw_data(settings.RAW_DATA_PATH))

# --- MAIN LOGIC ---
try:
    customers = load_data()
    raw_customers = load_raw()
    models = load_artifacts()
except Exception as e:
    st.error(f"Error loading system: {e}")
    st.stop()

# --- SIDEBAR ---
st.sidebar.title("Menu")
st.sidebar.markdown("👤 **Existing Customers**")

st.title("Customer Dashboard")

# --- LAYOUT ---
c1, c2 = st.columns([1, 1])

with c1:
    st.subheader("Customer Search")
    # selectbox filters its options as you type
    selected_customer_id = st.selectbox("Customer ID", customer_ids(customers))

picked = pick_customer(customers, selected_customer_id)

with c2:
    st.subheader("Products")
    products = render_product_list(picked)
    st.dataframe(
        products,
        hide_index=True,
        use_container_width=True,
        column_config={
            "name": st.column_config.TextColumn("PRODUCT"),
            "value": st.column_config.TextColumn("STATUS"),
        },
    )

st.markdown("---")
st.subheader("Payments")
payments = customer_payments(picked)
st.dataframe(
    payments,
    hide_index=True,
    use_container_width=True,
    column_order=["month", "invoice_id", "amount", "charges"],
    column_config={
        "amount": st.column_config.NumberColumn("AMOUNT", format="$%.2f"),
        "month": st.column_config.DatetimeColumn("DATE", format="YYYY-MM-DD"),
        "invoice_id": st.column_config.TextColumn("DESCRIPTION"),
        "charges": st.column_config.NumberColumn("TOTAL SPEND", format="$%.2f"),
    },
)

if not payments.empty:
    fig_spend = px.line(payments, x="month", y="charges", markers=True,
                        labels={"month": "Date", "charges": "Total spend ($)"},
                        title="Cumulative Spend")
    st.plotly_chart(fig_spend, use_container_width=True)

# --- MODEL SCORING ---
st.markdown("---")
st.subheader("Churn Risk")

if not models:
    st.info(f"No trained models in {settings.MODEL_DIR}. Run `python -m telco_churn.ml.train` to create them.")
elif not picked.empty:
    record = pick_customer(raw_customers, selected_customer_id)
    cols = st.columns(len(models))
    for col, (name, model) in zip(cols, models.items()):
        with col:
            try:
                prob = score_record(model, record)
                st.metric(name, f"{prob:.1%}")
            except Exception as e:
                st.error(f"{name}: scoring failed ({e})")

    st.caption(f"Actual status: Churn = {picked['Churn'].iloc[0]}")
