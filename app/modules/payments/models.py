# Supabase tables read for the payment history: payments, secours_transactions, products

"""
payments (membership subscriptions):
- id, user_id, amount, status (pending | completed | failed | ...)
- payment_method (orange_money | sama_money | cinetpay | ...)
- metadata: jsonb ({"tier": ...})
- created_at

secours_transactions (Ô Secours token purchases):
- id, user_id, transaction_type ('purchase' | 'usage'), token_amount,
  total_amount, description, created_at

products (marketplace posting fees):
- id, seller_id, title, posting_fee_paid, posting_fee_amount,
  posting_fee_reference, created_at
"""
