from fastapi import APIRouter, Depends
from app.database.supabase_client import get_service_supabase
from app.modules.payments.schemas import PaymentHistoryResponse, PaymentStatsResponse
from app.modules.payments.service import PaymentService
from app.modules.auth.service import SessionResolver
from app.core.dependencies import get_current_resolver, check_user_access
from supabase import Client

router = APIRouter(prefix="/payments", tags=["payments"])


def get_payment_service(supabase: Client = Depends(get_service_supabase)) -> PaymentService:
    return PaymentService(supabase)


@router.get("/{user_id}/history", response_model=PaymentHistoryResponse)
async def get_payment_history(
    user_id: str,
    resolver: SessionResolver = Depends(get_current_resolver),
    service: PaymentService = Depends(get_payment_service)
):
    """20 most recent payments across subscriptions, tokens and posting fees"""
    check_user_access(user_id, resolver)
    return service.get_history(user_id)


@router.get("/{user_id}/stats", response_model=PaymentStatsResponse)
async def get_payment_stats(
    user_id: str,
    resolver: SessionResolver = Depends(get_current_resolver),
    service: PaymentService = Depends(get_payment_service)
):
    check_user_access(user_id, resolver)
    return service.get_stats(user_id)
