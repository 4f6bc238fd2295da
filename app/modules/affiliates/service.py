import logging
from supabase import Client
from app.core.rows import first_row, result_rows, to_number
from app.modules.affiliates.schemas import (
    AffiliateStatsResponse, RewardSummary, ReferralResponse, ReferredUser,
    ReferralReward, LeaderboardEntry, LeaderboardUser
)
from typing import Dict, List
from fastapi import HTTPException

logger = logging.getLogger(__name__)

LEADERBOARD_SIZE = 10
RECENT_REWARDS = 5


class AffiliateService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_stats(self, user_id: str) -> AffiliateStatsResponse:
        """Referral code, earnings and latest rewards of an affiliate"""
        try:
            agent = first_row(
                self.supabase.table("agents")
                .select("id, referral_code, total_commissions, commissions_pending")
                .eq("user_id", user_id)
                .limit(1)
                .execute()
            )
            if not agent:
                raise HTTPException(status_code=404, detail="Affiliate not found")

            referrals_result = self.supabase.table("referrals")\
                .select("id", count="exact")\
                .eq("referrer_id", user_id)\
                .execute()
            total_referrals = referrals_result.count
            if total_referrals is None:
                total_referrals = len(result_rows(referrals_result))

            rewards = result_rows(
                self.supabase.table("affiliate_rewards")
                .select("id, credit_points_awarded, status, created_at")
                .eq("referrer_id", user_id)
                .order("created_at", desc=True)
                .limit(RECENT_REWARDS)
                .execute()
            )

            return AffiliateStatsResponse(
                referral_code=agent.get("referral_code") or "",
                total_referrals=int(total_referrals),
                total_earnings=to_number(agent.get("total_commissions")),
                pending_earnings=to_number(agent.get("commissions_pending")),
                recent_rewards=[
                    RewardSummary(
                        id=r["id"],
                        amount=to_number(r.get("credit_points_awarded")),
                        status=r.get("status"),
                        created_at=r.get("created_at"),
                    )
                    for r in rewards
                ],
            )
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error fetching affiliate stats: {e}")
            raise HTTPException(status_code=500, detail="Failed to fetch affiliate stats")

    def _users_by_id(self, user_ids: List[str]) -> Dict[str, dict]:
        if not user_ids:
            return {}
        rows = result_rows(
            self.supabase.table("users")
            .select("id, email, full_name, profile_picture_url, created_at")
            .in_("id", user_ids)
            .execute()
        )
        return {u["id"]: u for u in rows}

    def get_referrals(self, user_id: str) -> List[ReferralResponse]:
        """Referrals made by an affiliate, newest first, with referred user and reward"""
        try:
            referrals = result_rows(
                self.supabase.table("referrals")
                .select("id, referred_user_id, status, created_at")
                .eq("referrer_id", user_id)
                .order("created_at", desc=True)
                .execute()
            )
            if not referrals:
                return []

            users = self._users_by_id(list({r["referred_user_id"] for r in referrals if r.get("referred_user_id")}))
            reward_rows = result_rows(
                self.supabase.table("affiliate_rewards")
                .select("id, referral_id, credit_points_awarded, status, awarded_at")
                .in_("referral_id", [r["id"] for r in referrals])
                .execute()
            )
            rewards = {r["referral_id"]: r for r in reward_rows}

            response = []
            for referral in referrals:
                user = users.get(referral.get("referred_user_id"))
                reward = rewards.get(referral["id"])
                response.append(ReferralResponse(
                    id=referral["id"],
                    status=referral.get("status"),
                    created_at=referral.get("created_at"),
                    referred_user=ReferredUser(
                        id=user["id"],
                        email=user.get("email"),
                        full_name=user.get("full_name"),
                        created_at=user.get("created_at"),
                    ) if user else None,
                    reward=ReferralReward(
                        id=reward["id"],
                        credit_points_awarded=to_number(reward.get("credit_points_awarded")),
                        status=reward.get("status"),
                        awarded_at=reward.get("awarded_at"),
                    ) if reward else None,
                ))
            return response
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error fetching referrals: {e}")
            raise HTTPException(status_code=500, detail="Failed to fetch referrals")

    def get_leaderboard(self) -> List[LeaderboardEntry]:
        """Top affiliates by awarded credit points"""
        try:
            agents = result_rows(self.supabase.table("agents").select("user_id").execute())
            agent_ids = list(dict.fromkeys(a["user_id"] for a in agents if a.get("user_id")))
            if not agent_ids:
                return []

            commissions: Dict[str, float] = {uid: 0.0 for uid in agent_ids}
            for reward in result_rows(
                self.supabase.table("affiliate_rewards")
                .select("referrer_id, credit_points_awarded")
                .eq("status", "awarded")
                .in_("referrer_id", agent_ids)
                .execute()
            ):
                commissions[reward["referrer_id"]] += to_number(reward.get("credit_points_awarded"))

            referral_counts: Dict[str, int] = {uid: 0 for uid in agent_ids}
            for referral in result_rows(
                self.supabase.table("referrals")
                .select("id, referrer_id")
                .in_("referrer_id", agent_ids)
                .execute()
            ):
                referral_counts[referral["referrer_id"]] += 1

            top = sorted(agent_ids, key=lambda uid: commissions[uid], reverse=True)[:LEADERBOARD_SIZE]
            users = self._users_by_id(top)
            entries = []
            for uid in top:
                user = users.get(uid)
                entries.append(LeaderboardEntry(
                    user=LeaderboardUser(
                        id=uid if user else "unknown",
                        full_name=(user or {}).get("full_name") or "Anonymous",
                        email=(user or {}).get("email"),
                        avatar=(user or {}).get("profile_picture_url"),
                    ),
                    total_commissions=commissions[uid],
                    total_referrals=referral_counts[uid],
                ))
            return entries
        except Exception as e:
            logger.error(f"Error fetching leaderboard: {e}")
            raise HTTPException(status_code=500, detail="Failed to fetch leaderboard")
