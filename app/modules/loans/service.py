import logging
from supabase import Client
from app.core.rows import result_rows, to_number
from app.modules.loans.schemas import LoanApplicationResponse, LoanHistoryResponse
from fastapi import HTTPException

logger = logging.getLogger(__name__)


class LoanService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_history(self, user_id: str) -> LoanHistoryResponse:
        """Loan applications of a member, newest first"""
        try:
            rows = result_rows(
                self.supabase.table("loan_applications")
                .select("*")
                .eq("user_id", user_id)
                .order("created_at", desc=True)
                .execute()
            )
        except Exception as e:
            logger.error(f"Error fetching loan history: {e}")
            raise HTTPException(status_code=500, detail="Failed to fetch loan history")

        loans = []
        for row in rows:
            approved = row.get("approved_amount")
            rate = row.get("interest_rate")
            loans.append(LoanApplicationResponse(
                id=str(row["id"]),
                loan_type=row.get("loan_type"),
                requested_amount=to_number(row.get("requested_amount")),
                approved_amount=to_number(approved) if approved is not None else None,
                interest_rate=to_number(rate) if rate is not None else None,
                term_months=row.get("term_months"),
                purpose=row.get("purpose"),
                status=row.get("status"),
                application_date=row.get("application_date"),
                approved_at=row.get("approved_at"),
                created_at=row.get("created_at"),
            ))
        return LoanHistoryResponse(
            loans=loans,
            total_requested=sum(loan.requested_amount for loan in loans),
            total_approved=sum(loan.approved_amount or 0 for loan in loans if loan.status == "approved"),
        )
