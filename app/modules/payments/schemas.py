from pydantic import BaseModel
from typing import Dict, Optional, List
from datetime import datetime


class PaymentTransaction(BaseModel):
    id: str
    type: str  # subscription | tokens | product_posting
    amount: float = 0
    description: str = ""
    date: Optional[datetime] = None
    category: str = ""
    merchant: str = ""
    status: Optional[str] = None
    payment_method: Optional[str] = None
    reference: Optional[str] = None


class PaymentHistoryResponse(BaseModel):
    transactions: List[PaymentTransaction]
    total_paid: float = 0
    transaction_count: int = 0


class PaymentStatsResponse(BaseModel):
    total_paid: float = 0
    transaction_count: int = 0
    completed_count: int = 0
    pending_count: int = 0
    failed_count: int = 0
    totals_by_type: Dict[str, float] = {}
    last_payment_date: Optional[datetime] = None
