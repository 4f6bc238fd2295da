import logging
from supabase import Client
from app.core.rows import result_rows, to_number
from app.modules.payments.schemas import PaymentTransaction, PaymentHistoryResponse, PaymentStatsResponse
from typing import List

logger = logging.getLogger(__name__)

HISTORY_LIMIT = 20
DEFAULT_POSTING_FEE = 500

MERCHANTS = {
    "orange_money": "Orange Money",
    "sama_money": "SAMA Money",
    "cinetpay": "CinetPay",
}


def _sort_key(transaction: PaymentTransaction) -> float:
    return transaction.date.timestamp() if transaction.date else 0.0


class PaymentService:
    """Payment history merged from every table a member pays through.

    Each source is read independently; one failing table only drops its own rows.
    """

    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _subscription_payments(self, user_id: str) -> List[PaymentTransaction]:
        rows = result_rows(
            self.supabase.table("payments")
            .select("*")
            .eq("user_id", user_id)
            .order("created_at", desc=True)
            .execute()
        )
        transactions = []
        for p in rows:
            method = p.get("payment_method") or ""
            tier = (p.get("metadata") or {}).get("tier") or "carte"
            transactions.append(PaymentTransaction(
                id=str(p["id"]),
                type="subscription",
                amount=to_number(p.get("amount")),
                description=f"Souscription {tier} - {method.replace('_', ' ')}",
                date=p.get("created_at"),
                category="Souscription",
                merchant=MERCHANTS.get(method, "Paiement"),
                status=p.get("status"),
                payment_method=method or None,
            ))
        return transactions

    def _token_purchases(self, user_id: str) -> List[PaymentTransaction]:
        rows = result_rows(
            self.supabase.table("secours_transactions")
            .select("*")
            .eq("user_id", user_id)
            .eq("transaction_type", "purchase")
            .order("created_at", desc=True)
            .execute()
        )
        return [
            PaymentTransaction(
                id=str(t["id"]),
                type="tokens",
                amount=to_number(t.get("total_amount")),
                description=f"Achat {t.get('token_amount') or 0} tokens - {t.get('description') or 'Ô Secours'}",
                date=t.get("created_at"),
                category="Tokens Ô Secours",
                merchant="SAMA Money",
                status="completed",
                payment_method="sama_money",
            )
            for t in rows
        ]

    def _posting_fees(self, user_id: str) -> List[PaymentTransaction]:
        rows = result_rows(
            self.supabase.table("products")
            .select("id, title, posting_fee_amount, posting_fee_reference, created_at")
            .eq("seller_id", user_id)
            .eq("posting_fee_paid", True)
            .order("created_at", desc=True)
            .execute()
        )
        return [
            PaymentTransaction(
                id=str(p["id"]),
                type="product_posting",
                amount=to_number(p.get("posting_fee_amount")) or DEFAULT_POSTING_FEE,
                description=f"Frais publication - {p.get('title') or ''}",
                date=p.get("created_at"),
                category="Publication Produit",
                merchant="SAMA Money",
                status="completed",
                payment_method="sama_money",
                reference=p.get("posting_fee_reference"),
            )
            for p in rows
        ]

    def list_transactions(self, user_id: str) -> List[PaymentTransaction]:
        """All payments of a member, newest first"""
        sources = [
            ("subscription payments", self._subscription_payments),
            ("token purchases", self._token_purchases),
            ("product posting fees", self._posting_fees),
        ]
        transactions: List[PaymentTransaction] = []
        for name, source in sources:
            try:
                transactions.extend(source(user_id))
            except Exception as e:
                logger.warning(f"Query for {name} failed: {e}")
        transactions.sort(key=_sort_key, reverse=True)
        return transactions

    def get_history(self, user_id: str) -> PaymentHistoryResponse:
        transactions = self.list_transactions(user_id)
        return PaymentHistoryResponse(
            transactions=transactions[:HISTORY_LIMIT],
            total_paid=sum(t.amount for t in transactions if t.status == "completed"),
            transaction_count=len(transactions),
        )

    def get_stats(self, user_id: str) -> PaymentStatsResponse:
        transactions = self.list_transactions(user_id)
        completed = [t for t in transactions if t.status == "completed"]
        totals_by_type = {}
        for t in completed:
            totals_by_type[t.type] = totals_by_type.get(t.type, 0.0) + t.amount
        return PaymentStatsResponse(
            total_paid=sum(t.amount for t in completed),
            transaction_count=len(transactions),
            completed_count=len(completed),
            pending_count=sum(1 for t in transactions if t.status == "pending"),
            failed_count=sum(1 for t in transactions if t.status == "failed"),
            totals_by_type=totals_by_type,
            last_payment_date=completed[0].date if completed else None,
        )
