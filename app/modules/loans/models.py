# Supabase table: loan_applications

"""
loan_applications:
- id: uuid (primary key)
- user_id: uuid (references users.id)
- loan_type: text (payday | hire_purchase | ...)
- requested_amount: numeric
- approved_amount: numeric (nullable)
- interest_rate: numeric (nullable)
- term_months: integer (nullable)
- purpose: text (nullable)
- status: text (pending | approved | rejected | repaid)
- application_date, approved_at, created_at, updated_at: timestamp
"""
