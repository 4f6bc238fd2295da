"""Unit tests for phone -> email resolution strategies."""

from __future__ import annotations

import pytest
from postgrest.exceptions import APIError

from app.modules.auth.email_lookup import (
    email_from_rpc,
    email_from_table_scan,
    resolve_email_by_phone,
)

PHONE = "+22376123456"


@pytest.mark.unit
class TestEmailFromRpc:
    def test_returns_email(self, fake_supabase) -> None:
        fake_supabase.rpcs["get_email_by_phone_e164"] = "awa@example.com"
        assert email_from_rpc(fake_supabase, PHONE) == "awa@example.com"
        assert fake_supabase.rpc_calls == [("get_email_by_phone_e164", {"p_phone": PHONE})]

    def test_missing_function_gives_none(self, fake_supabase) -> None:
        assert email_from_rpc(fake_supabase, PHONE) is None

    def test_empty_result_gives_none(self, fake_supabase) -> None:
        fake_supabase.rpcs["get_email_by_phone_e164"] = ""
        assert email_from_rpc(fake_supabase, PHONE) is None


@pytest.mark.unit
class TestEmailFromTableScan:
    def test_profiles_phone_column(self, fake_supabase) -> None:
        fake_supabase.tables["profiles"] = [{"phone": PHONE, "email": "awa@example.com"}]
        assert email_from_table_scan(fake_supabase, PHONE) == "awa@example.com"

    def test_local_number_stored_without_code(self, fake_supabase) -> None:
        fake_supabase.tables["profiles"] = [{"phone": "76123456", "email": "awa@example.com"}]
        assert email_from_table_scan(fake_supabase, PHONE) == "awa@example.com"

    def test_alternative_columns(self, fake_supabase) -> None:
        fake_supabase.tables["user_profiles"] = [{"msisdn": "22376123456", "user_email": "awa@example.com"}]
        assert email_from_table_scan(fake_supabase, PHONE) == "awa@example.com"

    def test_row_without_email_is_skipped(self, fake_supabase) -> None:
        fake_supabase.tables["profiles"] = [{"phone": PHONE, "email": None}]
        fake_supabase.tables["users"] = [{"phone": PHONE, "email": "awa@example.com"}]
        assert email_from_table_scan(fake_supabase, PHONE) == "awa@example.com"

    def test_nothing_found(self, fake_supabase) -> None:
        fake_supabase.tables["profiles"] = [{"phone": "+22370000000", "email": "other@example.com"}]
        assert email_from_table_scan(fake_supabase, PHONE) is None

    def test_rls_denial_is_skipped(self, fake_supabase) -> None:
        fake_supabase.failing_tables["profiles"] = APIError({"message": "permission denied", "code": "42501"})
        fake_supabase.tables["users"] = [{"phone": PHONE, "email": "awa@example.com"}]
        assert email_from_table_scan(fake_supabase, PHONE) == "awa@example.com"

    def test_network_errors_propagate(self, fake_supabase) -> None:
        fake_supabase.failing_tables["profiles"] = ConnectionError("offline")
        with pytest.raises(ConnectionError):
            email_from_table_scan(fake_supabase, PHONE)


@pytest.mark.unit
class TestResolveEmailByPhone:
    def test_first_strategy_wins(self, fake_supabase) -> None:
        calls = []

        def first(client, phone):
            calls.append("first")
            return "first@example.com"

        def second(client, phone):
            calls.append("second")
            return "second@example.com"

        assert resolve_email_by_phone(fake_supabase, PHONE, [first, second]) == "first@example.com"
        assert calls == ["first"]

    def test_falls_through_to_next_strategy(self, fake_supabase) -> None:
        fake_supabase.tables["profiles"] = [{"phone": PHONE, "email": "awa@example.com"}]
        assert resolve_email_by_phone(fake_supabase, PHONE) == "awa@example.com"

    def test_none_when_every_strategy_misses(self, fake_supabase) -> None:
        assert resolve_email_by_phone(fake_supabase, PHONE) is None
