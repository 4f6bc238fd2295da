from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime


class RewardSummary(BaseModel):
    id: str
    amount: float = 0
    status: Optional[str] = None
    created_at: Optional[datetime] = None


class AffiliateStatsResponse(BaseModel):
    referral_code: str = ""
    total_referrals: int = 0
    total_earnings: float = 0
    pending_earnings: float = 0
    recent_rewards: List[RewardSummary] = []


class ReferredUser(BaseModel):
    id: str
    email: Optional[str] = None
    full_name: Optional[str] = None
    created_at: Optional[datetime] = None


class ReferralReward(BaseModel):
    id: str
    credit_points_awarded: float = 0
    status: Optional[str] = None
    awarded_at: Optional[datetime] = None


class ReferralResponse(BaseModel):
    id: str
    status: Optional[str] = None
    created_at: Optional[datetime] = None
    referred_user: Optional[ReferredUser] = None
    reward: Optional[ReferralReward] = None


class LeaderboardUser(BaseModel):
    id: str
    full_name: str = "Anonymous"
    email: Optional[str] = None
    avatar: Optional[str] = None


class LeaderboardEntry(BaseModel):
    user: LeaderboardUser
    total_commissions: float = 0
    total_referrals: int = 0
