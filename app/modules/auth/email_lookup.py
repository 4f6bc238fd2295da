"""
Phone -> email resolution used when a phone+password sign-in is rejected.

Strategies are tried in order; each returns an email or None. A strategy
only raises for failures that are not about the lookup itself (network).
"""
import itertools
import logging
from typing import Callable, List, Optional, Sequence

from postgrest.exceptions import APIError
from supabase import Client

from app.core.phone import phone_variants

logger = logging.getLogger(__name__)

PhoneEmailStrategy = Callable[[Client, str], Optional[str]]

CANDIDATE_TABLES = ("profiles", "users", "user_profiles")
CANDIDATE_PHONE_COLUMNS = ("phone", "msisdn", "telephone", "tel")
CANDIDATE_EMAIL_COLUMNS = ("email", "user_email")


def email_from_rpc(supabase: Client, phone: str) -> Optional[str]:
    """Privileged lookup through the get_email_by_phone_e164 SQL function."""
    try:
        result = supabase.rpc("get_email_by_phone_e164", {"p_phone": phone}).execute()
    except Exception as e:
        logger.warning(f"get_email_by_phone_e164 RPC failed: {e}")
        return None
    email = result.data if result is not None else None
    if isinstance(email, str) and email:
        return email
    return None


def email_from_table_scan(supabase: Client, phone: str) -> Optional[str]:
    """Best-effort scan of the tables/columns a profile phone may live in."""
    combos = itertools.product(
        CANDIDATE_TABLES,
        CANDIDATE_PHONE_COLUMNS,
        CANDIDATE_EMAIL_COLUMNS,
        phone_variants(phone),
    )
    for table, phone_col, email_col, variant in combos:
        try:
            result = supabase.table(table)\
                .select(f"{email_col}, {phone_col}")\
                .eq(phone_col, variant)\
                .maybe_single()\
                .execute()
        except APIError as e:
            # Missing table/column or RLS denial; try the next combination
            logger.debug(f"Phone lookup skipped {table}.{phone_col}/{email_col}: {e.message}")
            continue
        row = result.data if result is not None else None
        if isinstance(row, dict):
            email = row.get(email_col)
            if isinstance(email, str) and email:
                logger.info(f"Resolved phone to email via {table}.{phone_col}")
                return email
    return None


DEFAULT_STRATEGIES: List[PhoneEmailStrategy] = [email_from_rpc, email_from_table_scan]


def resolve_email_by_phone(
    supabase: Client,
    phone: str,
    strategies: Sequence[PhoneEmailStrategy] = DEFAULT_STRATEGIES,
) -> Optional[str]:
    for strategy in strategies:
        email = strategy(supabase, phone)
        if email:
            return email
    return None
