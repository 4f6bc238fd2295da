# Supabase tables: agents, referrals, affiliate_rewards, users
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
agents:
- id: uuid (primary key)
- user_id: uuid (references users.id)
- referral_code: text (unique)
- total_commissions: numeric
- commissions_pending: numeric

referrals:
- id: uuid (primary key)
- referrer_id: uuid (references users.id)
- referred_user_id: uuid (references users.id)
- referral_code: text
- status: text (active | inactive | cancelled)
- created_at: timestamp

affiliate_rewards:
- id: uuid (primary key)
- referral_id: uuid (references referrals.id)
- referrer_id: uuid (references users.id)
- credit_points_awarded: numeric
- status: text (pending | awarded | ...)
- awarded_at: timestamp (nullable)
- created_at: timestamp

users:
- id, email, full_name, profile_picture_url, created_at
"""
