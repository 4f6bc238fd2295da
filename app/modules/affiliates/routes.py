from fastapi import APIRouter, Depends
from app.database.supabase_client import get_service_supabase
from app.modules.affiliates.schemas import AffiliateStatsResponse, ReferralResponse, LeaderboardEntry
from app.modules.affiliates.service import AffiliateService
from app.modules.auth.service import SessionResolver
from app.core.dependencies import get_current_resolver, check_user_access
from supabase import Client
from typing import List

router = APIRouter(prefix="/affiliates", tags=["affiliates"])


def get_affiliate_service(supabase: Client = Depends(get_service_supabase)) -> AffiliateService:
    return AffiliateService(supabase)


@router.get("/leaderboard", response_model=List[LeaderboardEntry])
async def get_leaderboard(
    resolver: SessionResolver = Depends(get_current_resolver),
    service: AffiliateService = Depends(get_affiliate_service)
):
    """Top 10 affiliates by awarded credit points"""
    return service.get_leaderboard()


@router.get("/{user_id}/stats", response_model=AffiliateStatsResponse)
async def get_affiliate_stats(
    user_id: str,
    resolver: SessionResolver = Depends(get_current_resolver),
    service: AffiliateService = Depends(get_affiliate_service)
):
    """Affiliate dashboard figures (self or admin)"""
    check_user_access(user_id, resolver)
    return service.get_stats(user_id)


@router.get("/{user_id}/referrals", response_model=List[ReferralResponse])
async def get_affiliate_referrals(
    user_id: str,
    resolver: SessionResolver = Depends(get_current_resolver),
    service: AffiliateService = Depends(get_affiliate_service)
):
    """Referrals made by the affiliate (self or admin)"""
    check_user_access(user_id, resolver)
    return service.get_referrals(user_id)
