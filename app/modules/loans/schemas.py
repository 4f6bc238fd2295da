from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime


class LoanApplicationResponse(BaseModel):
    id: str
    loan_type: Optional[str] = None
    requested_amount: float = 0
    approved_amount: Optional[float] = None
    interest_rate: Optional[float] = None
    term_months: Optional[int] = None
    purpose: Optional[str] = None
    status: Optional[str] = None
    application_date: Optional[datetime] = None
    approved_at: Optional[datetime] = None
    created_at: Optional[datetime] = None


class LoanHistoryResponse(BaseModel):
    loans: List[LoanApplicationResponse]
    total_requested: float = 0
    total_approved: float = 0
