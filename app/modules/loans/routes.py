from fastapi import APIRouter, Depends
from app.database.supabase_client import get_service_supabase
from app.modules.loans.schemas import LoanHistoryResponse
from app.modules.loans.service import LoanService
from app.modules.auth.service import SessionResolver
from app.core.dependencies import get_current_resolver, check_user_access
from supabase import Client

router = APIRouter(prefix="/loans", tags=["loans"])


def get_loan_service(supabase: Client = Depends(get_service_supabase)) -> LoanService:
    return LoanService(supabase)


@router.get("/{user_id}/history", response_model=LoanHistoryResponse)
async def get_loan_history(
    user_id: str,
    resolver: SessionResolver = Depends(get_current_resolver),
    service: LoanService = Depends(get_loan_service)
):
    """Loan applications (self or admin)"""
    check_user_access(user_id, resolver)
    return service.get_history(user_id)
