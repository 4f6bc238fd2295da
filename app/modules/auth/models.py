# Supabase Auth
# Credentials, sessions, OTP and magic links are handled by Supabase Auth
# (auth.users). This module only reads the tables and RPC functions below.

"""
Expected Supabase objects:

user_roles:
- user_id: uuid (references auth.users.id)
- role: text (USER | PARTNER | SUPPORT | SUPERADMIN), stored in any case

profiles / users / user_profiles (any of them may exist):
- phone-like column: phone | msisdn | telephone | tel
- email-like column: email | user_email

RPC functions (SECURITY DEFINER, so RLS does not block them):
- get_user_role(p_user_id uuid) -> text
- get_email_by_phone_e164(p_phone text) -> text

auth.users.user_metadata written at sign-up:
- full_name, referral_code, physical_card_requested, phone, country, city
"""
