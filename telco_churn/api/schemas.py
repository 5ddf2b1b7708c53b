
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List, Dict

class CustomerInput(BaseModel):
    """
    Input schema matching the raw CSV columns.
    """
    # Identifiers
    customerID: Optional[str] = "input_user"

    # Demographics
    gender: str = Field("Female", max_length=20)
    SeniorCitizen: int = Field(..., ge=0, le=1) # 0 or 1
    Partner: str = Field(..., max_length=5) # Yes/No
    Dependents: str = Field(..., max_length=5)

    # Account
    tenure: int = Field(..., ge=0)
    PhoneService: str = Field(..., max_length=5)
    MultipleLines: str = Field(..., max_length=50)
    InternetService: str = Field(..., max_length=50)
    OnlineSecurity: str = Field(..., max_length=50)
    OnlineBackup: str = Field(..., max_length=50)
    DeviceProtection: str = Field(..., max_length=50)
    TechSupport: str = Field(..., max_length=50)
    StreamingTV: str = Field(..., max_length=50)
    StreamingMovies: str = Field(..., max_length=50)

    # Contract
    Contract: str = Field(..., max_length=50)
    PaperlessBilling: str = Field(..., max_length=5)
    PaymentMethod: str = Field(..., max_length=50)

    # Financials
    MonthlyCharges: float = Field(..., ge=0)
    TotalCharges: Optional[float] = Field(None, ge=0)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "SeniorCitizen": 0,
                "Partner": "Yes",
                "Dependents": "No",
                "tenure": 12,
                "PhoneService": "Yes",
                "MultipleLines": "No",
                "InternetService": "Fiber optic",
                "OnlineSecurity": "No",
                "OnlineBackup": "Yes",
                "DeviceProtection": "No",
                "TechSupport": "No",
                "StreamingTV": "Yes",
                "StreamingMovies": "No",
                "Contract": "Month-to-month",
                "PaperlessBilling": "Yes",
                "PaymentMethod": "Electronic check",
                "MonthlyCharges": 89.5,
                "TotalCharges": 1074.0
            }
        }
    )

class ProductStatus(BaseModel):
    name: str
    value: str

class CustomerDetail(BaseModel):
    customerID: str
    tenure: int
    MonthlyCharges: float
    TotalCharges: Optional[float]
    Churn: str
    products: List[ProductStatus]

class Invoice(BaseModel):
    invoice_id: str
    month: str
    amount: float
    charges: float

class PredictionResponse(BaseModel):
    customerID: str
    churn_probability: Dict[str, float]
