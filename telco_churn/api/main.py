from fastapi import FastAPI, HTTPException
from contextlib import asynccontextmanager
from typing import List

from telco_churn.utils.config import settings
from telco_churn.utils.logger import setup_logger
from telco_churn.etl.ingest import get_telco_data
from telco_churn.ml.predict import load_models, score_record, ModelNotFoundError
from telco_churn.dashboard.lookup import pick_customer, render_product_list, customer_payments
from telco_churn.api.schemas import CustomerInput, CustomerDetail, Invoice, PredictionResponse

logger = setup_logger("API")

# Loaded once at startup, read-only afterwards
artifacts = {}

@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        logger.info(f"Loading customers from {settings.RAW_DATA_PATH}...")
        artifacts['customers'] = get_telco_data(raw=False)
    except Exception as e:
        logger.error(f"Failed to load customer data: {e}")
        raise

    try:
        artifacts['models'] = load_models(settings.MODEL_DIR)
        logger.info(f"Loaded models: {list(artifacts['models'])}")
    except ModelNotFoundError as e:
        logger.warning(f"{e} Prediction endpoint disabled.")
        artifacts['models'] = {}

    yield

    # Clean up
    artifacts.clear()

app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan)

def _get_customer(customer_id: str):
    picked = pick_customer(artifacts['customers'], customer_id)
    if picked.empty:
        raise HTTPException(status_code=404, detail=f"Customer {customer_id} not found")
    return picked

@app.get("/health")
def health_check():
    return {
        "status": "healthy",
        "customers_loaded": len(artifacts.get('customers', [])),
        "models_loaded": sorted(artifacts.get('models', {})),
    }

@app.get("/customers/{customer_id}", response_model=CustomerDetail)
def get_customer(customer_id: str):
    picked = _get_customer(customer_id)
    row = picked.iloc[0]
    products = render_product_list(picked).to_dict(orient="records")
    return {
        "customerID": row["customerID"],
        "tenure": int(row["tenure"]),
        "MonthlyCharges": float(row["MonthlyCharges"]),
        "TotalCharges": float(row["TotalCharges"]),
        "Churn": str(row["Churn"]),
        "products": products,
    }

@app.get("/customers/{customer_id}/invoices", response_model=List[Invoice])
def get_customer_invoices(customer_id: str):
    """
    Simulated payment history; a new invoice prefix is drawn on every call.
    """
    payments = customer_payments(_get_customer(customer_id))
    payments["month"] = payments["month"].dt.strftime("%Y-%m-%d")
    return payments.to_dict(orient="records")

@app.post("/predict", response_model=PredictionResponse)
def predict_churn(input_data: CustomerInput):
    """
    Churn probability from every loaded model for one raw customer record.
    """
    models = artifacts.get('models')
    if not models:
        raise HTTPException(status_code=503, detail="No trained models loaded")

    record = input_data.model_dump()
    try:
        probs = {name: score_record(model, record) for name, model in models.items()}
    except Exception as e:
        logger.error(f"Prediction failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    return {"customerID": input_data.customerID, "churn_probability": probs}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("telco_churn.api.main:app", host="0.0.0.0", port=8000, reload=True)
